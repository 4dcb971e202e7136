"""Configuration helpers for TrustLens."""

from __future__ import annotations

import os

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration container."""

    llm_provider: str = os.getenv("LLM_PROVIDER", "gemini")

    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-3-flash-preview")
    # A missing key is not fatal here; every assessment fails instead.
    gemini_api_key: str = Field(
        "", validation_alias=AliasChoices("api_key", "gemini_api_key")
    )

    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    openai_api_key: str = ""

    max_image_bytes: int = 20 * 1024 * 1024
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra="allow")

    def api_key_for(self, provider: str | None = None) -> str:
        """Credential for the given provider, defaulting to the configured one."""
        provider = (provider or self.llm_provider).lower()
        return getattr(self, f"{provider}_api_key", "") or ""


settings = Settings()
