"""
Errors raised by the collaborators around the pure core.

Normalization, extraction and diffing never raise; only network and AI
collaborators do.
"""

from typing import Optional


class RecipeIngestError(Exception):
    """Base class for recipe ingest failures."""

    def __init__(self, message: str, *, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict:
        body = {"error": type(self).__name__, "message": self.message}
        if self.detail:
            body["detail"] = self.detail
        return body


class PageFetchError(RecipeIngestError):
    """The source page could not be fetched."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch {url}", detail=reason)
        self.url = url


class ExtractionError(RecipeIngestError):
    """No usable recipe: no structured data and the AI extraction failed."""
