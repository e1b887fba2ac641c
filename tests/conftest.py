import pytest

from recipe_ingest.core.config import get_settings


@pytest.fixture(autouse=True)
def offline_settings(monkeypatch):
    # Never reach OpenAI from tests; pin the duration wording.
    monkeypatch.setenv("OPENAI_API_KEY", "")
    monkeypatch.setenv("DURATION_LOCALE", "nl")
    monkeypatch.delenv("FETCH_PROXY_TEMPLATE", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
