"""
Recipe diff for the AI review step.

Advisory only: the change set drives an accept/reject screen, it is not a
merge algorithm. Ingredients are never compared item by item; when both
sides have them they are reported as a structural change with the count
delta ("N items (was M)").
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping

from pydantic import BaseModel

from ..schemas.review import FieldChange, RecipeDiff, StructuredChange

logger = logging.getLogger(__name__)

DIFF_FIELDS = (
    "title",
    "description",
    "prep_time",
    "cook_time",
    "servings",
    "cuisine",
    "difficulty",
    "introduction",
    "subtitle",
    "ai_tags",
)


def has_value(value: Any) -> bool:
    """False for None, empty collections and blank strings."""
    if value is None:
        return False
    if isinstance(value, (list, tuple, dict)) and len(value) == 0:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def _as_dict(document: Any) -> Dict[str, Any]:
    if isinstance(document, BaseModel):
        return document.model_dump()
    if isinstance(document, Mapping):
        return dict(document)
    return {}


def _whole_numbers(value: Any) -> Any:
    """4.0 -> 4, so equal numbers from different sources compare equal."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, list):
        return [_whole_numbers(item) for item in value]
    if isinstance(value, dict):
        return {key: _whole_numbers(item) for key, item in value.items()}
    return value


def _serialized(value: Any) -> str:
    return json.dumps(_whole_numbers(value), sort_keys=True, ensure_ascii=False, default=str)


def diff_recipes(original: Any, candidate: Any) -> RecipeDiff:
    """
    Categorize the changes a candidate would make to an original recipe.

    - added: original had no value, candidate has one
    - modified: both have values that serialize differently
    - structured: ingredients present on both sides (count comparison only)
    """
    old_doc = _as_dict(original)
    new_doc = _as_dict(candidate)
    result = RecipeDiff()

    for key in DIFF_FIELDS:
        old_value = old_doc.get(key)
        new_value = new_doc.get(key)
        if not has_value(new_value):
            continue
        if not has_value(old_value):
            result.added[key] = FieldChange(old=old_value, new=new_value)
        elif _serialized(old_value) != _serialized(new_value):
            result.modified[key] = FieldChange(old=old_value, new=new_value)

    new_ingredients = new_doc.get("ingredients")
    if isinstance(new_ingredients, list) and new_ingredients:
        old_ingredients = old_doc.get("ingredients")
        if not isinstance(old_ingredients, list) or not old_ingredients:
            result.added["ingredients"] = FieldChange(old=[], new=new_ingredients)
        else:
            result.structured["ingredients"] = StructuredChange(
                old=old_ingredients,
                new=new_ingredients,
                count_diff=len(new_ingredients) - len(old_ingredients),
            )

    logger.debug(
        "Recipe diff: %d added, %d modified, %d structured",
        len(result.added),
        len(result.modified),
        len(result.structured),
    )
    return result


def apply_changes(original: Any, candidate: Any, identity_key: str = "id") -> Dict[str, Any]:
    """
    Accept a reviewed candidate.

    The candidate wins on every key it defines; the original's identity key
    is kept. Returns a new dict, neither input is modified.
    """
    merged = _as_dict(original)
    merged.update(_as_dict(candidate))

    old_doc = _as_dict(original)
    if identity_key in old_doc:
        merged[identity_key] = old_doc[identity_key]
    return merged
