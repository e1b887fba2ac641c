"""
Hand-off between canonical recipes and the persistence collaborator.

Storage layout expected by the collaborator:
- one parent record holding the scalar fields
- ingredient rows (amount stored as `quantity`), ordered by order_index within group_name
- step rows, ordered by step_number
- tool rows, unordered

Transactions, retries and rollback belong to the collaborator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..schemas.canonical import Ingredient, Recipe
from .normalizer import normalize

logger = logging.getLogger(__name__)

PARENT_FIELDS = (
    "title",
    "subtitle",
    "introduction",
    "description",
    "servings",
    "prep_time",
    "cook_time",
    "difficulty",
    "cuisine",
    "author",
    "cookbook_name",
    "isbn",
    "source_language",
    "ai_tags",
    "extra_data",
)

# Keys that only make sense inside storage and are never sent to the AI.
STORAGE_ONLY_KEYS = frozenset(
    {"search_vector", "user_id", "created_at", "updated_at", "extraction_history"}
)


@dataclass
class RecipeRecords:
    recipe: Dict[str, Any]
    ingredients: List[Dict[str, Any]] = field(default_factory=list)
    steps: List[Dict[str, Any]] = field(default_factory=list)
    tools: List[Dict[str, Any]] = field(default_factory=list)


def to_records(recipe: Recipe, recipe_id: Optional[str] = None) -> RecipeRecords:
    """Split a canonical recipe into a parent record and child rows."""
    data = recipe.model_dump()
    parent = {key: data[key] for key in PARENT_FIELDS}
    link = {"recipe_id": recipe_id} if recipe_id is not None else {}

    ingredients = [
        {
            **link,
            "name": ing.name,
            "quantity": ing.amount,
            "unit": ing.unit,
            "group_name": ing.group_name,
            "notes": ing.notes,
            "order_index": ing.order_index,
        }
        for ing in recipe.ingredients
    ]
    steps = [
        {**link, "step_number": step.step_number, "description": step.description, "extra": step.extra}
        for step in recipe.instructions
    ]
    tools = [{**link, "name": tool.name, "notes": tool.notes} for tool in recipe.tools]

    return RecipeRecords(recipe=parent, ingredients=ingredients, steps=steps, tools=tools)


def from_records(
    recipe_row: Mapping[str, Any],
    ingredient_rows: Iterable[Mapping[str, Any]] = (),
    step_rows: Iterable[Mapping[str, Any]] = (),
    tool_rows: Iterable[Mapping[str, Any]] = (),
) -> Recipe:
    """Rebuild a canonical recipe from stored rows (quantity -> amount)."""
    raw = {key: value for key, value in recipe_row.items() if key not in STORAGE_ONLY_KEYS}
    raw["ingredients"] = sorted(
        (dict(row) for row in ingredient_rows),
        key=lambda row: _sort_key(row.get("order_index")),
    )
    raw["instructions"] = sorted(
        (dict(row) for row in step_rows),
        key=lambda row: _sort_key(row.get("step_number")),
    )
    raw["tools"] = [dict(row) for row in tool_rows]
    return normalize(raw)


def _sort_key(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return float("inf")


def group_ingredients(ingredients: Iterable[Ingredient]) -> Dict[Optional[str], List[Ingredient]]:
    """
    Group ingredients for display.

    Groups keep first-appearance order; the default group has key None.
    Within a group, ingredients are ordered by order_index.
    """
    groups: Dict[Optional[str], List[Ingredient]] = {}
    for ingredient in ingredients:
        groups.setdefault(ingredient.group_name, []).append(ingredient)
    return {
        name: sorted(members, key=lambda ing: ing.order_index)
        for name, members in groups.items()
    }


def sanitize_for_ai(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop storage-only keys before sending a stored recipe to the AI."""
    dropped = STORAGE_ONLY_KEYS.intersection(record)
    if dropped:
        logger.debug("Dropping storage-only keys: %s", sorted(dropped))
    return {key: value for key, value in record.items() if key not in STORAGE_ONLY_KEYS}
