"""
Tests for amount and servings coercion.
"""

import math

import pytest

from recipe_ingest.data.quantities import parse_amount, parse_servings


@pytest.mark.parametrize(
    "value, expected",
    [
        (250, 250),
        (0.5, 0.5),
        ("250", 250),
        ("1,5", 1.5),
        ("0.75", 0.75),
        ("1/2", 0.5),
        ("1 1/2", 1.5),
        ("1½", 1.5),
        ("¼", 0.25),
    ],
)
def test_parse_amount_reads_common_notations(value, expected):
    assert parse_amount(value) == expected


def test_parse_amount_returns_int_for_whole_values():
    assert isinstance(parse_amount("2"), int)
    assert isinstance(parse_amount("4/2"), int)


@pytest.mark.parametrize("value", [None, True, "", "veel", "1/0", "2-3", math.nan, math.inf, [1], {"a": 1}])
def test_parse_amount_rejects_unreadable_values(value):
    assert parse_amount(value) is None


@pytest.mark.parametrize(
    "value, expected",
    [
        (4, 4),
        ("4 personen", 4),
        ("Serves 6-8", 6),
        (["12 pancakes", "12"], 12),
        ([None, "2"], 2),
    ],
)
def test_parse_servings(value, expected):
    assert parse_servings(value) == expected


@pytest.mark.parametrize("value", [None, 0, -2, "a few", "0", [], False])
def test_parse_servings_rejects_unreadable_values(value):
    assert parse_servings(value) is None


@pytest.mark.parametrize(
    "value",
    [
        "1" * 400,
        "1" * 400 + "/2",
        "1" * 5000 + "/2",
        "1" * 400 + " 1/2",
        "1" * 5000 + "½",
    ],
)
def test_parse_amount_rejects_out_of_range_digit_runs(value):
    assert parse_amount(value) is None


def test_parse_servings_ignores_oversized_digit_run():
    assert parse_servings("1" * 5000 + " personen") is None
