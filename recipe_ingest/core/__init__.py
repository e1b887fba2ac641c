"""
Recipe Ingest Core
==================

Configuration and error types.
"""

from .config import Settings, get_settings
from .exceptions import ExtractionError, PageFetchError, RecipeIngestError

__all__ = [
    "Settings",
    "get_settings",
    "RecipeIngestError",
    "PageFetchError",
    "ExtractionError",
]
