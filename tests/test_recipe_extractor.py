"""
Tests for the AI recipe extractor (OpenAI client replaced by a fake).
"""

import json
from types import SimpleNamespace

import pytest

from recipe_ingest.core.exceptions import ExtractionError
from recipe_ingest.llm.recipe_extractor import RecipeExtractor


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(completions: FakeCompletions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


@pytest.mark.asyncio
async def test_extract_from_text_normalizes_response():
    completions = FakeCompletions(
        json.dumps(
            {
                "title": "Hutspot",
                "ingredients": [{"item": "aardappel", "quantity": "1", "unit": "kg"}],
                "instructions": ["Kook", "Stamp"],
                "total_time": "45 min",
            }
        )
    )
    extractor = RecipeExtractor(api_key="test", model="test-model", client=_client(completions))

    recipe = await extractor.extract_from_text("Hutspot: 1 kg aardappel...")

    assert recipe.title == "Hutspot"
    assert recipe.ingredients[0].name == "aardappel"
    assert recipe.ingredients[0].amount == 1
    assert [s.step_number for s in recipe.instructions] == [1, 2]
    assert recipe.extra_data == {"total_time": "45 min"}

    call = completions.calls[0]
    assert call["model"] == "test-model"
    assert call["response_format"] == {"type": "json_object"}
    assert call["messages"][1]["content"] == "Hutspot: 1 kg aardappel..."


@pytest.mark.asyncio
async def test_wrapped_and_fenced_responses_are_accepted():
    content = '```json\n{"recipe": {"title": "Stamppot"}}\n```'
    extractor = RecipeExtractor(api_key="test", client=_client(FakeCompletions(content)))

    recipe = await extractor.extract_from_text("...")
    assert recipe.title == "Stamppot"


@pytest.mark.asyncio
async def test_invalid_json_raises_extraction_error():
    extractor = RecipeExtractor(api_key="test", client=_client(FakeCompletions("not json")))
    with pytest.raises(ExtractionError):
        await extractor.extract_from_text("...")


@pytest.mark.asyncio
async def test_non_object_response_raises_extraction_error():
    extractor = RecipeExtractor(api_key="test", client=_client(FakeCompletions("[1, 2]")))
    with pytest.raises(ExtractionError):
        await extractor.extract_from_text("...")


@pytest.mark.asyncio
async def test_client_failure_is_wrapped():
    completions = FakeCompletions(error=RuntimeError("rate limited"))
    extractor = RecipeExtractor(api_key="test", client=_client(completions))

    with pytest.raises(ExtractionError) as exc_info:
        await extractor.extract_from_text("...")
    assert exc_info.value.detail == "rate limited"


@pytest.mark.asyncio
async def test_missing_api_key_raises():
    extractor = RecipeExtractor()
    assert extractor.client is None

    with pytest.raises(ExtractionError):
        await extractor.extract_from_text("...")


@pytest.mark.asyncio
async def test_review_recipe_strips_storage_keys():
    completions = FakeCompletions(json.dumps({"title": "Soep", "cuisine": "Frans"}))
    extractor = RecipeExtractor(api_key="test", client=_client(completions))

    recipe = await extractor.review_recipe({"title": "Soep", "user_id": "u1", "search_vector": "x"}, "bron")

    assert recipe.cuisine == "Frans"
    payload = json.loads(completions.calls[0]["messages"][1]["content"])
    assert payload == {"recipe": {"title": "Soep"}, "source": "bron"}
