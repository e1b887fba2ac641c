"""
Page -> extraction input.

Structured data first; cleaned page text for the AI otherwise.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from ..core.config import get_settings
from ..schemas.extraction import ExtractionResult
from .html_cleaner import clean_text
from .schema_org import extract_schema, schema_to_recipe

logger = logging.getLogger(__name__)


def process_for_extraction(html: str, max_chars: Optional[int] = None) -> ExtractionResult:
    """
    Decide how a page should be turned into a recipe.

    - Complete schema.org recipe (title, ingredients, instructions): kind="schema",
      the caller skips the AI call.
    - Incomplete schema: kind="text", schema JSON prepended as context.
    - No schema: kind="text" with the cleaned page text.

    Cleaned text is capped at `max_chars` (settings.max_content_chars).
    """
    max_chars = max_chars or get_settings().max_content_chars
    schema = extract_schema(html)

    if schema is not None:
        recipe = schema_to_recipe(schema)
        if recipe is not None and recipe.is_complete():
            logger.info(
                "Complete schema.org recipe found: %r (%d ingredients, %d steps)",
                recipe.title,
                len(recipe.ingredients),
                len(recipe.instructions),
            )
            return ExtractionResult(kind="schema", recipe=recipe, schema_data=schema)

        logger.info("Incomplete schema.org recipe found, sending to AI with page text")
        schema_json = json.dumps(schema, indent=2, ensure_ascii=False, default=str)
        content = (
            f"STRUCTURED DATA FOUND:\n{schema_json}\n\n"
            f"PAGE CONTENT:\n{clean_text(html)[:max_chars]}"
        )
        return ExtractionResult(kind="text", content=content, schema_data=schema)

    logger.info("No schema.org recipe found, using cleaned page text")
    return ExtractionResult(kind="text", content=clean_text(html)[:max_chars])
