"""
Network-facing services around the pure core.
"""

from .importer import RecipeImporter
from .page_fetcher import PageFetcher

__all__ = ["PageFetcher", "RecipeImporter"]
