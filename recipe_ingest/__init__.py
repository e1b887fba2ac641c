"""
Recipe Ingest
=============

Normalization, schema.org extraction and review diffing for captured recipes.
"""

from .data.normalizer import normalize
from .extraction import (
    clean_text,
    extract_image_candidates,
    extract_schema,
    format_duration,
    process_for_extraction,
    schema_to_recipe,
)
from .review.diff import apply_changes, diff_recipes, has_value
from .schemas.canonical import Ingredient, Recipe, Step, Tool

__version__ = "1.0.0"

__all__ = [
    "normalize",
    "clean_text",
    "extract_image_candidates",
    "extract_schema",
    "format_duration",
    "process_for_extraction",
    "schema_to_recipe",
    "apply_changes",
    "diff_recipes",
    "has_value",
    "Ingredient",
    "Recipe",
    "Step",
    "Tool",
]
