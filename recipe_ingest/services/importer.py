"""
Recipe importer: page -> canonical recipe + image candidates.

The fetcher and the AI extractor are passed in explicitly; the pure
extraction core knows nothing about either.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..extraction.images import extract_image_candidates
from ..extraction.pipeline import process_for_extraction
from ..llm.recipe_extractor import RecipeExtractor
from ..schemas.extraction import ImportResult
from .page_fetcher import PageFetcher

logger = logging.getLogger(__name__)


class RecipeImporter:
    def __init__(self, fetcher: PageFetcher, extractor: RecipeExtractor):
        self.fetcher = fetcher
        self.extractor = extractor

    async def import_html(self, html: str, base_url: Optional[str] = None) -> ImportResult:
        """
        Build a recipe from page HTML.

        A complete schema.org recipe is used as-is (no AI call); otherwise the
        cleaned text goes to the extractor, which raises ExtractionError on failure.
        """
        result = process_for_extraction(html)
        images = extract_image_candidates(html, base_url)

        if result.kind == "schema" and result.recipe is not None:
            return ImportResult(
                recipe=result.recipe,
                source="schema",
                source_url=base_url,
                image_candidates=images,
            )

        recipe = await self.extractor.extract_from_text(result.content or "")
        return ImportResult(recipe=recipe, source="ai", source_url=base_url, image_candidates=images)

    async def import_url(self, url: str) -> ImportResult:
        """Fetch a page and import it (PageFetchError when the fetch fails)."""
        html = await self.fetcher.fetch(url)
        imported = await self.import_html(html, base_url=url)
        logger.info("Imported %s via %s: %r", url, imported.source, imported.recipe.title)
        return imported
