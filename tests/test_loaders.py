"""
Tests for raw recipe dump loading.
"""

import json

from recipe_ingest.data.loaders import load_raw_records, normalize_records


def test_load_json_list(tmp_path):
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps([{"title": "A"}, {"name": "B"}]), encoding="utf-8")

    records = load_raw_records(path)
    assert [r.title for r in normalize_records(records)] == ["A", "B"]


def test_load_wrapped_object(tmp_path):
    path = tmp_path / "export.json"
    path.write_text(json.dumps({"recipes": [{"title": "A"}]}), encoding="utf-8")
    assert load_raw_records(path) == [{"title": "A"}]

    path.write_text(json.dumps({"data": [{"title": "B"}]}), encoding="utf-8")
    assert load_raw_records(path) == [{"title": "B"}]

    path.write_text(json.dumps({"other": 1}), encoding="utf-8")
    assert load_raw_records(path) == []


def test_load_jsonl_skips_malformed_lines(tmp_path):
    path = tmp_path / "ai_responses.jsonl"
    path.write_text('{"title": "A"}\n\nnot json\n{"title": "B"}\n', encoding="utf-8")

    assert load_raw_records(path) == [{"title": "A"}, {"title": "B"}]


def test_normalize_records_skips_non_objects():
    recipes = list(normalize_records([{"title": "A"}, "oops", None, {"title": "B"}]))
    assert [r.title for r in recipes] == ["A", "B"]
