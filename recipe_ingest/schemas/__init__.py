"""
Recipe Ingest Schemas
=====================

Pydantic schemas for structured data.

- canonical: Recipe, Ingredient, Step, Tool
- extraction: ExtractionResult, ImportResult
- review: RecipeDiff and its change entries
"""

from .canonical import DEFAULT_LANGUAGE, DEFAULT_TITLE, Ingredient, Recipe, Step, Tool
from .extraction import ExtractionResult, ImportResult
from .review import FieldChange, RecipeDiff, StructuredChange

__all__ = [
    "DEFAULT_LANGUAGE",
    "DEFAULT_TITLE",
    "Ingredient",
    "Recipe",
    "Step",
    "Tool",
    "ExtractionResult",
    "ImportResult",
    "FieldChange",
    "RecipeDiff",
    "StructuredChange",
]
