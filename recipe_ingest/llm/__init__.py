"""
LLM collaborator for recipe extraction and review.
"""

from .recipe_extractor import EXTRACTION_SYSTEM_PROMPT, REVIEW_SYSTEM_PROMPT, RecipeExtractor

__all__ = [
    "RecipeExtractor",
    "EXTRACTION_SYSTEM_PROMPT",
    "REVIEW_SYSTEM_PROMPT",
]
