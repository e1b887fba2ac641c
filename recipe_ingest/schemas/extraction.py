"""
Extraction Schemas
==================

Results of turning a fetched page into either a ready recipe or text for
the AI extractor.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from .canonical import Recipe


class ExtractionResult(BaseModel):
    """
    Outcome of `process_for_extraction`.

    - kind="schema": `recipe` is complete, no AI call needed
    - kind="text": `content` must go through AI extraction
    """

    kind: Literal["schema", "text"]
    recipe: Optional[Recipe] = None
    content: Optional[str] = None
    schema_data: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Raw schema.org Recipe item, when one was found",
    )


class ImportResult(BaseModel):
    """A recipe imported from a page, ready for review and persistence."""

    recipe: Recipe
    source: Literal["schema", "ai"]
    source_url: Optional[str] = None
    image_candidates: List[str] = Field(default_factory=list)
