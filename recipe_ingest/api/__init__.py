"""
HTTP surface for the recipe ingest core.
"""

from .routes import get_importer, router

__all__ = ["router", "get_importer"]
