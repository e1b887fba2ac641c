"""
Recipe data: normalization, quantities, persistence hand-off, loaders.
"""

from .normalizer import FIELD_CANDIDATES, normalize
from .persistence import from_records, group_ingredients, sanitize_for_ai, to_records
from .quantities import parse_amount, parse_servings

__all__ = [
    "FIELD_CANDIDATES",
    "normalize",
    "parse_amount",
    "parse_servings",
    "to_records",
    "from_records",
    "group_ingredients",
    "sanitize_for_ai",
]
