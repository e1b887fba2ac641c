"""
Recipe normalizer.

Canonicalizes raw recipe-like records (AI output, structured data, edit
forms) into a `Recipe`. Historical field names are resolved through an
ordered candidate-key table; the first present (non-None) value wins.

`normalize` is total and idempotent: it never raises, and feeding its
output back in yields an equal document.
"""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from ..schemas.canonical import DEFAULT_LANGUAGE, DEFAULT_TITLE, Ingredient, Recipe, Step, Tool
from .quantities import parse_amount, parse_servings

logger = logging.getLogger(__name__)


FIELD_CANDIDATES: Dict[str, tuple[str, ...]] = {
    "title": ("title", "name"),
    "subtitle": ("subtitle", "sub_title"),
    "introduction": ("introduction", "intro"),
    "description": ("description", "desc", "summary"),
    "servings": ("servings", "portions", "yield"),
    "prep_time": ("prep_time", "prepTime", "preparation_time"),
    "cook_time": ("cook_time", "cookTime", "cooking_time"),
    "difficulty": ("difficulty", "level", "skill_level"),
    "cuisine": ("cuisine", "category", "type"),
    "author": ("author", "chef", "creator", "by"),
    "cookbook_name": ("cookbook_name", "cookbook", "book", "source_book"),
    "isbn": ("isbn", "ISBN"),
    "source_language": ("source_language", "language", "lang"),
    "ai_tags": ("ai_tags", "tags", "keywords"),
    "total_time": ("total_time", "totalTime", "total_duration"),
}

INGREDIENT_CANDIDATES: Dict[str, tuple[str, ...]] = {
    "amount": ("amount", "quantity"),
    "name": ("name", "item"),
    "group_name": ("group_name", "group"),
}

STEP_CANDIDATES: Dict[str, tuple[str, ...]] = {
    "description": ("description", "text"),
}

TEXT_FIELDS = (
    "subtitle",
    "introduction",
    "prep_time",
    "cook_time",
    "difficulty",
    "cuisine",
    "author",
    "cookbook_name",
    "isbn",
)


def first_present(record: Mapping[str, Any], keys: Sequence[str]) -> Any:
    """Return the value of the first key holding a non-None value."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _as_text(value: Any) -> Optional[str]:
    """Readable text or None; objects with a `name` (e.g. authors) use it."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        return text or None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, Mapping):
        return _as_text(value.get("name"))
    if isinstance(value, (list, tuple)):
        for item in value:
            text = _as_text(item)
            if text:
                return text
    return None


def _first_text(record: Mapping[str, Any], keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        text = _as_text(record.get(key))
        if text:
            return text
    return None


def _as_index(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _as_tags(value: Any) -> List[str]:
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    if isinstance(value, (list, tuple)):
        tags = []
        for item in value:
            text = _as_text(item) if not isinstance(item, Mapping) else None
            if text:
                tags.append(text)
        return tags
    return []


def copy_tree(value: Any) -> Any:
    """
    Copy nested mappings and lists without recursion.

    Decoded JSON can nest deeper than the interpreter stack allows for
    `copy.deepcopy`. Tuples come back as lists; leaf values are shared.
    """
    if not isinstance(value, (Mapping, list, tuple)):
        return value

    root: Any = {} if isinstance(value, Mapping) else []
    copies = {id(value): root}
    stack = [(value, root)]
    while stack:
        source, target = stack.pop()
        items = source.items() if isinstance(source, Mapping) else enumerate(source)
        for key, child in items:
            if isinstance(child, (Mapping, list, tuple)):
                copied = copies.get(id(child))
                if copied is None:
                    copied = {} if isinstance(child, Mapping) else []
                    copies[id(child)] = copied
                    stack.append((child, copied))
            else:
                copied = child
            if isinstance(target, dict):
                target[key] = copied
            else:
                target.append(copied)
    return root


def _as_list(value: Any, field: str) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    logger.debug("Ignoring non-list %s: %r", field, type(value).__name__)
    return []


# ============================================================================
# Collections
# ============================================================================

def normalize_ingredient(item: Any, position: int) -> Optional[Ingredient]:
    """Map a bare string or a partial object onto `Ingredient`."""
    if item is None:
        return None
    if isinstance(item, str):
        return Ingredient(name=item.strip(), order_index=position)
    if isinstance(item, (int, float)) and not isinstance(item, bool):
        return Ingredient(name=str(item), order_index=position)
    if not isinstance(item, Mapping):
        return None

    # Falsy values fall through ("" name -> legacy `item`).
    name = _first_text(item, INGREDIENT_CANDIDATES["name"]) or ""
    group_name = _first_text(item, INGREDIENT_CANDIDATES["group_name"])
    order_index = _as_index(item.get("order_index"))

    if group_name:
        logger.debug("Ingredient group found: %s -> %s", name, group_name)

    return Ingredient(
        amount=parse_amount(first_present(item, INGREDIENT_CANDIDATES["amount"])),
        unit=_as_text(item.get("unit")),
        name=name,
        group_name=group_name,
        notes=_as_text(item.get("notes")),
        order_index=order_index if order_index is not None and order_index >= 0 else position,
    )


def _reindex_collisions(ingredients: List[Ingredient]) -> List[Ingredient]:
    """Re-number any group whose order_index values collide, keeping input order."""
    groups: Dict[Optional[str], List[int]] = defaultdict(list)
    for idx, ingredient in enumerate(ingredients):
        groups[ingredient.group_name].append(idx)

    result = list(ingredients)
    for group_name, members in groups.items():
        indexes = [ingredients[i].order_index for i in members]
        if len(set(indexes)) == len(indexes):
            continue
        logger.debug("Re-indexing ingredient group %r (duplicate order_index)", group_name)
        for new_index, i in enumerate(members):
            result[i] = ingredients[i].model_copy(update={"order_index": new_index})
    return result


def normalize_ingredients(value: Any) -> List[Ingredient]:
    ingredients: List[Ingredient] = []
    for item in _as_list(value, "ingredients"):
        ingredient = normalize_ingredient(item, len(ingredients))
        if ingredient is not None:
            ingredients.append(ingredient)
    return _reindex_collisions(ingredients)


def normalize_step(item: Any, position: int) -> Optional[Step]:
    """Map a bare string or a step object onto `Step` (position is 0-based)."""
    if item is None:
        return None
    if isinstance(item, str):
        return Step(step_number=position + 1, description=item.strip())
    if not isinstance(item, Mapping):
        return Step(step_number=position + 1, description=str(item))

    raw_description = first_present(item, STEP_CANDIDATES["description"])
    if raw_description is None:
        description = json.dumps(item, ensure_ascii=False, default=str, skipkeys=True)
    elif isinstance(raw_description, str):
        description = raw_description.strip()
    else:
        description = str(raw_description)

    step_number = _as_index(item.get("step_number"))
    extra = item.get("extra")

    return Step(
        step_number=step_number if step_number is not None and step_number >= 1 else position + 1,
        description=description,
        extra=copy_tree(extra) if isinstance(extra, Mapping) and extra else None,
    )


def normalize_steps(value: Any) -> List[Step]:
    steps: List[Step] = []
    for item in _as_list(value, "instructions"):
        step = normalize_step(item, len(steps))
        if step is not None:
            steps.append(step)

    # Upstream numbering is only kept when it is already 1..N in order.
    if [s.step_number for s in steps] != list(range(1, len(steps) + 1)):
        logger.debug("Renumbering %d steps from position", len(steps))
        steps = [s.model_copy(update={"step_number": i + 1}) for i, s in enumerate(steps)]
    return steps


def normalize_tools(value: Any) -> List[Tool]:
    tools: List[Tool] = []
    for item in _as_list(value, "tools"):
        if isinstance(item, str):
            tools.append(Tool(name=item.strip()))
        elif isinstance(item, Mapping):
            tools.append(Tool(name=_as_text(item.get("name")) or "", notes=_as_text(item.get("notes"))))
    return tools


# ============================================================================
# Document
# ============================================================================

def normalize(raw: Any) -> Recipe:
    """
    Canonicalize a raw recipe record.

    Args:
        raw: Mapping from AI output / structured data / edit form, or a
            `Recipe`. Anything else is treated as an empty record.

    Returns:
        A complete `Recipe`; missing or unreadable fields take their defaults.
    """
    if isinstance(raw, BaseModel):
        raw = raw.model_dump()
    if not isinstance(raw, Mapping):
        logger.debug("normalize() received %s, using empty record", type(raw).__name__)
        raw = {}

    def pick(field: str) -> Any:
        return first_present(raw, FIELD_CANDIDATES[field])

    extra_data = raw.get("extra_data")
    extra_data = copy_tree(extra_data) if isinstance(extra_data, Mapping) else {}
    total_time = _as_text(pick("total_time"))
    if total_time:
        extra_data["total_time"] = total_time

    texts = {field: _as_text(pick(field)) for field in TEXT_FIELDS}
    language = _as_text(pick("source_language"))

    return Recipe(
        title=_as_text(pick("title")) or DEFAULT_TITLE,
        description=_as_text(pick("description")) or "",
        ingredients=normalize_ingredients(raw.get("ingredients")),
        instructions=normalize_steps(raw.get("instructions")),
        tools=normalize_tools(raw.get("tools")),
        servings=parse_servings(pick("servings")),
        source_language=language.lower() if language else DEFAULT_LANGUAGE,
        ai_tags=_as_tags(pick("ai_tags")),
        extra_data=extra_data,
        **texts,
    )
