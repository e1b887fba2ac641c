"""
Tests for the page -> recipe importer.
"""

import json

import pytest

from recipe_ingest.core.exceptions import ExtractionError
from recipe_ingest.schemas.canonical import Recipe
from recipe_ingest.services.importer import RecipeImporter

SCHEMA_PAGE = (
    '<html><head><script type="application/ld+json">'
    + json.dumps(
        {
            "@type": "Recipe",
            "name": "Pannenkoeken",
            "image": "/img/pannenkoeken.jpg",
            "recipeIngredient": ["250 g bloem", "500 ml melk"],
            "recipeInstructions": ["Meng", "Bak"],
        }
    )
    + "</script></head><body><p>Blog</p></body></html>"
)

TEXT_PAGE = "<html><body><article><h1>Oma's soep</h1><p>Neem een ui.</p></article></body></html>"


class FakeFetcher:
    def __init__(self, html):
        self.html = html
        self.urls = []

    async def fetch(self, url):
        self.urls.append(url)
        return self.html


class FakeExtractor:
    def __init__(self, recipe=None, error=None):
        self.recipe = recipe
        self.error = error
        self.contents = []

    async def extract_from_text(self, content):
        self.contents.append(content)
        if self.error is not None:
            raise self.error
        return self.recipe


@pytest.mark.asyncio
async def test_schema_page_does_not_call_ai():
    extractor = FakeExtractor()
    importer = RecipeImporter(FakeFetcher(SCHEMA_PAGE), extractor)

    result = await importer.import_url("https://example.com/pannenkoeken")

    assert result.source == "schema"
    assert result.recipe.title == "Pannenkoeken"
    assert result.source_url == "https://example.com/pannenkoeken"
    assert result.image_candidates == ["https://example.com/img/pannenkoeken.jpg"]
    assert extractor.contents == []


@pytest.mark.asyncio
async def test_text_page_goes_through_ai():
    extractor = FakeExtractor(recipe=Recipe(title="Oma's soep"))
    importer = RecipeImporter(FakeFetcher(TEXT_PAGE), extractor)

    result = await importer.import_url("https://example.com/soep")

    assert result.source == "ai"
    assert result.recipe.title == "Oma's soep"
    assert extractor.contents == ["Oma's soep\n\nNeem een ui."]


@pytest.mark.asyncio
async def test_extraction_failure_propagates():
    importer = RecipeImporter(FakeFetcher(TEXT_PAGE), FakeExtractor(error=ExtractionError("AI extraction failed")))

    with pytest.raises(ExtractionError):
        await importer.import_html(TEXT_PAGE)
