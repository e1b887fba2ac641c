"""
Numeric coercion for ingredient amounts and servings.

Both helpers are total: anything they cannot read becomes None.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional, Union

Number = Union[int, float]

VULGAR_FRACTIONS = {
    "½": 0.5,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "¼": 0.25,
    "¾": 0.75,
    "⅕": 0.2,
    "⅛": 0.125,
    "⅜": 0.375,
    "⅝": 0.625,
    "⅞": 0.875,
}

_VULGAR_CHARS = "".join(VULGAR_FRACTIONS)

AMOUNT_PATTERN = (
    rf"\d+\s*[{_VULGAR_CHARS}]"          # 1½
    r"|\d+\s+\d+\s*/\s*\d+"              # 1 1/2
    r"|\d+\s*/\s*\d+"                    # 1/2
    r"|\d+(?:[.,]\d+)?"                  # 250, 1,5, 0.75
    rf"|[{_VULGAR_CHARS}]"               # ½
)

_AMOUNT_RE = re.compile(rf"^(?:{AMOUNT_PATTERN})$")
_MIXED_RE = re.compile(r"^(\d+)\s+(\d+)\s*/\s*(\d+)$")
_FRACTION_RE = re.compile(r"^(\d+)\s*/\s*(\d+)$")
_WHOLE_VULGAR_RE = re.compile(rf"^(\d*)\s*([{_VULGAR_CHARS}])$")
_FIRST_INT_RE = re.compile(r"\d+")


def _tidy(value: float) -> Number:
    if value.is_integer():
        return int(value)
    return round(value, 4)


def parse_amount(value: Any) -> Optional[Number]:
    """
    Coerce an ingredient amount.

    Accepts numbers and strings such as "250", "1,5", "1/2", "1 1/2", "1½".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text or not _AMOUNT_RE.match(text):
        return None

    # Digit runs past float range (or int() digit limits) are not amounts.
    try:
        amount = _convert(text)
    except (OverflowError, ValueError):
        return None
    if amount is None or not math.isfinite(amount):
        return None
    return _tidy(amount)


def _convert(text: str) -> Optional[float]:
    vulgar = _WHOLE_VULGAR_RE.match(text)
    if vulgar:
        whole = int(vulgar.group(1)) if vulgar.group(1) else 0
        return whole + VULGAR_FRACTIONS[vulgar.group(2)]

    mixed = _MIXED_RE.match(text)
    if mixed:
        whole, num, den = (int(g) for g in mixed.groups())
        if den == 0:
            return None
        return whole + num / den

    fraction = _FRACTION_RE.match(text)
    if fraction:
        num, den = (int(g) for g in fraction.groups())
        if den == 0:
            return None
        return num / den

    return float(text.replace(",", "."))


def parse_servings(value: Any) -> Optional[Number]:
    """Servings from a number, the first integer in a string, or a list of either."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (list, tuple)):
        for item in value:
            parsed = parse_servings(item)
            if parsed is not None:
                return parsed
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value if value > 0 else None
    if isinstance(value, str):
        match = _FIRST_INT_RE.search(value)
        if match:
            try:
                count = int(match.group(0))
            except ValueError:
                return None
            return count or None
    return None
