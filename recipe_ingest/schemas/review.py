"""
Review Schemas
==============

Change set shown to a user before AI-proposed edits are accepted.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class FieldChange(BaseModel):
    old: Any = None
    new: Any = None


class StructuredChange(BaseModel):
    """Collection reshaped by the candidate; compared by count only."""

    old: List[Any] = Field(default_factory=list)
    new: List[Any] = Field(default_factory=list)
    count_diff: int = 0


class RecipeDiff(BaseModel):
    added: Dict[str, FieldChange] = Field(default_factory=dict)
    modified: Dict[str, FieldChange] = Field(default_factory=dict)
    structured: Dict[str, StructuredChange] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.modified or self.structured)

    @property
    def has_modifications(self) -> bool:
        """Existing facts would be overwritten; the review screen warns."""
        return bool(self.modified)

    def summary(self) -> List[str]:
        """Plain-text lines for the review screen."""
        lines: List[str] = []
        for key, change in self.added.items():
            lines.append(f"Added {key}: {_display(change.new)}")
        for key, change in self.modified.items():
            lines.append(f"Changed {key}: {_display(change.old)} -> {_display(change.new)}")
        for key, change in self.structured.items():
            lines.append(f"Restructured {key}: {len(change.new)} items (was {len(change.old)})")
        return lines


def _display(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return str(value)
