"""
Tests for the persistence hand-off (records in, records out).
"""

from recipe_ingest.data.normalizer import normalize
from recipe_ingest.data.persistence import from_records, group_ingredients, sanitize_for_ai, to_records

RAW = {
    "title": "Lasagne",
    "servings": 6,
    "ingredients": [
        {"name": "gehakt", "amount": 500, "unit": "g", "group_name": "Saus"},
        {"name": "tomaten", "amount": 2, "unit": "blik", "group_name": "Saus"},
        {"name": "boter", "amount": 50, "unit": "g", "group_name": "Bechamel"},
        {"name": "lasagnevellen"},
    ],
    "instructions": ["Maak de saus", "Maak de bechamel", "Bouw op en bak"],
    "tools": ["ovenschaal"],
}


def test_to_records_splits_parent_and_children():
    records = to_records(normalize(RAW), recipe_id="r1")

    assert records.recipe["title"] == "Lasagne"
    assert "ingredients" not in records.recipe
    assert records.ingredients[0] == {
        "recipe_id": "r1",
        "name": "gehakt",
        "quantity": 500,
        "unit": "g",
        "group_name": "Saus",
        "notes": None,
        "order_index": 0,
    }
    assert [s["step_number"] for s in records.steps] == [1, 2, 3]
    assert records.tools == [{"recipe_id": "r1", "name": "ovenschaal", "notes": None}]


def test_from_records_restores_recipe():
    recipe = normalize(RAW)
    records = to_records(recipe, recipe_id="r1")
    row = {**records.recipe, "id": "r1", "user_id": "u1", "created_at": "2024-01-01"}

    restored = from_records(
        row,
        reversed(records.ingredients),
        reversed(records.steps),
        records.tools,
    )
    assert restored == recipe


def test_group_ingredients():
    recipe = normalize(RAW)
    groups = group_ingredients(recipe.ingredients)

    assert list(groups) == ["Saus", "Bechamel", None]
    assert [i.name for i in groups["Saus"]] == ["gehakt", "tomaten"]
    assert [i.name for i in groups[None]] == ["lasagnevellen"]


def test_sanitize_for_ai_drops_storage_keys():
    record = {"title": "Soep", "search_vector": "'soep':1", "user_id": "u1", "extraction_history": []}
    assert sanitize_for_ai(record) == {"title": "Soep"}
