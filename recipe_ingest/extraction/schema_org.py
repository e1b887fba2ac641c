"""
schema.org Recipe extraction.

Most recipe sites embed a machine-readable Recipe in a JSON-LD script block.
When it is complete we can build the recipe directly and skip the AI call.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Iterator, List, Mapping, Optional

from bs4 import BeautifulSoup

from ..core.config import get_settings
from ..data.normalizer import normalize
from ..data.quantities import AMOUNT_PATTERN, parse_amount, parse_servings
from ..schemas.canonical import Recipe
from .soup import make_soup, plain_text

logger = logging.getLogger(__name__)

JSON_LD_TYPE_RE = re.compile(r"application/ld\+json", re.IGNORECASE)

# P[n]DT[n]H[n]M[n]S, e.g. PT30M, PT1H30M, P0DT0H20M
DURATION_RE = re.compile(r"P(?:(\d+)D)?T?(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")

DURATION_WORDS: Dict[str, Dict[str, tuple[str, str]]] = {
    "nl": {"day": ("dag", "dagen"), "hour": ("uur", "uur"), "minute": ("min", "min")},
    "en": {"day": ("day", "days"), "hour": ("hour", "hours"), "minute": ("min", "min")},
}

# Amount must be followed by whitespace or a letter ("250g"), not "12-15".
INGREDIENT_LINE_RE = re.compile(rf"^(?P<amount>{AMOUNT_PATTERN})(?=\s|[^\W\d_])\s*(?P<rest>.+)$")

KNOWN_UNITS = frozenset(
    {
        # metric
        "g", "gr", "gram", "grams", "kg", "mg", "ml", "cl", "dl", "l", "liter", "liters", "litre", "litres",
        # spoons & cups
        "el", "tl", "eetlepel", "eetlepels", "theelepel", "theelepels",
        "tbsp", "tsp", "tablespoon", "tablespoons", "teaspoon", "teaspoons", "cup", "cups",
        # imperial
        "oz", "ounce", "ounces", "lb", "lbs", "pound", "pounds", "pint", "pints", "quart", "quarts",
        # counts & pinches
        "snuf", "snufje", "mespunt", "scheut", "pinch", "dash", "handful", "handje",
        "teen", "teentje", "teentjes", "clove", "cloves", "blik", "blikje", "can", "cans",
        "stuk", "stuks", "piece", "pieces", "bos", "bosje", "bunch", "plak", "plakken", "slice", "slices",
        "stick", "sticks", "zakje", "pak",
    }
)

MAX_SEARCH_DEPTH = 6


# ============================================================================
# JSON-LD discovery
# ============================================================================

def iter_json_ld_blocks(soup: BeautifulSoup) -> Iterator[Any]:
    """Decoded JSON-LD blocks; malformed blocks are skipped."""
    for script in soup.find_all("script", attrs={"type": JSON_LD_TYPE_RE}):
        content = script.string
        if not content or not content.strip():
            continue
        try:
            yield json.loads(content.strip(), strict=False)
        except ValueError as exc:
            logger.debug("Skipping malformed JSON-LD block: %s", exc)
            continue


def is_recipe_type(item: Any) -> bool:
    """True when `@type` is or includes Recipe (prefixes like schema:Recipe allowed)."""
    if not isinstance(item, Mapping):
        return False
    item_type = item.get("@type")
    types = item_type if isinstance(item_type, list) else [item_type]
    for value in types:
        if isinstance(value, str) and re.split(r"[/:#]", value)[-1].lower() == "recipe":
            return True
    return False


def find_recipe(node: Any, depth: int = 0) -> Optional[Dict[str, Any]]:
    """Search a decoded block: @graph containers first, then the item, then arrays."""
    if depth > MAX_SEARCH_DEPTH:
        return None

    if isinstance(node, list):
        for item in node:
            found = find_recipe(item, depth + 1)
            if found is not None:
                return found
        return None

    if not isinstance(node, Mapping):
        return None

    graph = node.get("@graph")
    if isinstance(graph, (list, Mapping)):
        found = find_recipe(graph, depth + 1)
        if found is not None:
            return found

    if is_recipe_type(node):
        return dict(node)

    main_entity = node.get("mainEntity")
    if isinstance(main_entity, (list, Mapping)):
        return find_recipe(main_entity, depth + 1)
    return None


def find_schema_recipe(soup: BeautifulSoup) -> Optional[Dict[str, Any]]:
    for block in iter_json_ld_blocks(soup):
        recipe = find_recipe(block)
        if recipe is not None:
            return recipe
    return None


def extract_schema(html: str) -> Optional[Dict[str, Any]]:
    """
    Find the first schema.org Recipe embedded in a page.

    Returns:
        The raw Recipe item, or None (caller falls back to text extraction).
    """
    return find_schema_recipe(make_soup(html))


# ============================================================================
# Field conversion
# ============================================================================

def format_duration(value: Any, locale: Optional[str] = None) -> Optional[str]:
    """
    Render an ISO 8601 duration as readable text ("PT1H30M" -> "1 uur 30 min").

    Seconds are parsed but not rendered. Strings without any duration group
    are returned unchanged; an all-zero duration gives None.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()

    match = DURATION_RE.search(text)
    if not match or not any(group is not None for group in match.groups()):
        return text

    words = DURATION_WORDS.get(locale or get_settings().duration_locale, DURATION_WORDS["en"])
    days, hours, minutes = (int(group or 0) for group in match.groups()[:3])

    parts: List[str] = []
    if days:
        singular, plural = words["day"]
        parts.append(f"{days} {singular if days == 1 else plural}")
    if hours:
        singular, plural = words["hour"]
        parts.append(f"{hours} {singular if hours == 1 else plural}")
    if minutes:
        singular, plural = words["minute"]
        parts.append(f"{minutes} {singular if minutes == 1 else plural}")

    return " ".join(parts) if parts else None


def parse_ingredient_line(line: str, position: int) -> Dict[str, Any]:
    """
    Light positional parse: leading amount, optional known unit, then name.

    "250 g bloem" -> amount 250, unit "g", name "bloem".
    Lines that don't start with an amount keep the whole text as name.
    """
    text = plain_text(line)
    parsed = {
        "amount": None,
        "unit": None,
        "name": text,
        "group_name": None,
        "notes": None,
        "order_index": position,
    }

    match = INGREDIENT_LINE_RE.match(text)
    if not match:
        return parsed

    amount = parse_amount(match.group("amount"))
    rest = match.group("rest").strip()
    if amount is None or not rest:
        return parsed

    unit = None
    head, _, tail = rest.partition(" ")
    if tail.strip() and head.lower().rstrip(".") in KNOWN_UNITS:
        unit, rest = head, tail.strip()

    parsed.update(amount=amount, unit=unit, name=rest)
    return parsed


def _instruction_texts(value: Any, depth: int = 0) -> List[str]:
    """Flatten strings, HowToStep objects and HowToSection lists into step texts."""
    if value is None or depth > MAX_SEARCH_DEPTH:
        return []
    if isinstance(value, str):
        return [plain_text(line) for line in value.splitlines()]
    if isinstance(value, list):
        texts: List[str] = []
        for item in value:
            texts.extend(_instruction_texts(item, depth + 1))
        return texts
    if isinstance(value, Mapping):
        if "itemListElement" in value:
            return _instruction_texts(value.get("itemListElement"), depth + 1)
        return [plain_text(value.get("text")) or plain_text(value.get("name"))]
    return []


def _ingredient_lines(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and plain_text(item)]


def _tool_names(value: Any) -> List[str]:
    if isinstance(value, (str, Mapping)):
        value = [value]
    if not isinstance(value, list):
        return []
    names = []
    for item in value:
        name = plain_text(item.get("name")) if isinstance(item, Mapping) else plain_text(item)
        if name:
            names.append(name)
    return names


def schema_to_recipe(schema: Any) -> Optional[Recipe]:
    """
    Convert a schema.org Recipe item into a canonical Recipe.

    Returns None when the item has no name.
    """
    if not isinstance(schema, Mapping):
        return None

    title = plain_text(schema.get("name")) or plain_text(schema.get("headline"))
    if not title:
        return None

    lines = _ingredient_lines(schema.get("recipeIngredient") or schema.get("ingredients"))
    steps = [text for text in _instruction_texts(schema.get("recipeInstructions")) if text]

    extra_data: Dict[str, Any] = {}
    total_time = format_duration(schema.get("totalTime"))
    if total_time:
        extra_data["total_time"] = total_time

    raw = {
        "title": title,
        "description": plain_text(schema.get("description")),
        "ingredients": [parse_ingredient_line(line, idx) for idx, line in enumerate(lines)],
        "instructions": steps,
        "tools": _tool_names(schema.get("tool")),
        "servings": parse_servings(schema.get("recipeYield")),
        "prep_time": format_duration(schema.get("prepTime")),
        "cook_time": format_duration(schema.get("cookTime")),
        "cuisine": schema.get("recipeCuisine"),
        "author": schema.get("author"),
        # No language detection from structured data.
        "source_language": "en",
        "ai_tags": schema.get("keywords"),
        "extra_data": extra_data,
    }
    return normalize(raw)
