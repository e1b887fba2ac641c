"""
HTML -> recipe extraction.

- schema_org: JSON-LD Recipe discovery and conversion
- html_cleaner: page text for AI extraction
- images: ranked image candidates
- pipeline: schema-or-text decision
"""

from .html_cleaner import clean_text
from .images import extract_image_candidates
from .pipeline import process_for_extraction
from .schema_org import extract_schema, format_duration, parse_ingredient_line, schema_to_recipe

__all__ = [
    "clean_text",
    "extract_image_candidates",
    "process_for_extraction",
    "extract_schema",
    "format_duration",
    "parse_ingredient_line",
    "schema_to_recipe",
]
