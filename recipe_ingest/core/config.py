"""
Recipe Ingest Configuration
===========================

Centralized application settings.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App info
    app_name: str = "Recipe Ingest"
    app_version: str = "1.0.0"
    debug: bool = False

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api"

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = False  # Must be False with wildcard origins
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # OpenAI (recipe extraction from cleaned page text)
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.1
    llm_max_tokens: int = 4000

    # Page fetching
    fetch_timeout: float = 20.0
    fetch_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    # e.g. "https://proxy.example.com/raw?url={url}"
    fetch_proxy_template: Optional[str] = None

    # Extraction limits
    max_content_chars: int = 50_000
    max_image_candidates: int = 12

    # Human-readable durations ("1 uur 30 min")
    duration_locale: Literal["nl", "en"] = "nl"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
