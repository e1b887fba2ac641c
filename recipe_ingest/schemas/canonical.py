"""
Canonical Recipe Schema
=======================

Single internal representation for recipes coming from:
- AI extraction output (photo or page text)
- schema.org structured data embedded in a page
- Manual edit form state

Rules:
- Every key is always present; absence is `None` or an empty collection
- `order_index` is unique within a `group_name` (None = default group)
- `step_number` is a dense 1..N sequence
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

Number = Union[int, float]

DEFAULT_TITLE = "Untitled Recipe"
DEFAULT_LANGUAGE = "en"


class Ingredient(BaseModel):
    """One ingredient line, optionally grouped ("For the sauce")."""

    amount: Optional[Number] = None
    unit: Optional[str] = None
    name: str = ""
    group_name: Optional[str] = None
    notes: Optional[str] = None
    order_index: int = 0


class Step(BaseModel):
    step_number: int = Field(default=1, ge=1)
    description: str
    extra: Optional[Dict[str, Any]] = None


class Tool(BaseModel):
    name: str = ""
    notes: Optional[str] = None


class Recipe(BaseModel):
    """Canonical recipe document handed to persistence and review."""

    # Identity
    title: str = Field(default=DEFAULT_TITLE, min_length=1)
    subtitle: Optional[str] = None
    introduction: Optional[str] = None
    description: str = ""

    # Content
    ingredients: List[Ingredient] = Field(default_factory=list)
    instructions: List[Step] = Field(default_factory=list)
    tools: List[Tool] = Field(default_factory=list)

    # Metadata (durations are free text, e.g. "1 uur 30 min")
    servings: Optional[Number] = None
    prep_time: Optional[str] = None
    cook_time: Optional[str] = None
    difficulty: Optional[str] = None
    cuisine: Optional[str] = None

    # Provenance
    author: Optional[str] = None
    cookbook_name: Optional[str] = None
    isbn: Optional[str] = None
    source_language: str = DEFAULT_LANGUAGE

    ai_tags: List[str] = Field(default_factory=list)
    extra_data: Dict[str, Any] = Field(default_factory=dict)

    def is_complete(self) -> bool:
        """Enough content to skip AI extraction."""
        return bool(self.title and self.ingredients and self.instructions)
