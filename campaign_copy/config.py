"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import ClassVar, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "CampaignCopy"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"

    # LLM Configuration
    default_llm_model: str = "openai:gpt-4o"
    openrouter_api_key: str | None = None
    llm_max_retries: int = 3
    llm_timeout_fast: int = 120
    llm_timeout_standard: int = 300
    llm_timeout_reasoning: int = 600

    def get_llm_timeout(self, tier: str = "standard") -> int:
        """Return the LLM timeout in seconds for a given model tier."""
        return getattr(self, f"llm_timeout_{tier}", self.llm_timeout_standard)

    # Per-tier model overrides (optional, override the built-in defaults below)
    dev_model_reasoning: str | None = None
    dev_model_standard: str | None = None
    dev_model_fast: str | None = None
    prod_model_reasoning: str | None = None
    prod_model_standard: str | None = None
    prod_model_fast: str | None = None

    _MODEL_DEFAULTS: ClassVar[dict[str, dict[str, str]]] = {
        "development": {
            "reasoning": "openrouter:google/gemini-2.5-pro",
            "standard": "openrouter:google/gemini-2.5-flash",
            "fast": "openrouter:google/gemini-2.5-flash",
        },
        "staging": {
            "reasoning": "openrouter:google/gemini-2.5-pro",
            "standard": "openrouter:google/gemini-2.5-pro",
            "fast": "openrouter:google/gemini-2.5-flash",
        },
        "production": {
            "reasoning": "google-gla:gemini-2.5-pro",
            "standard": "google-gla:gemini-2.5-pro",
            "fast": "google-gla:gemini-2.5-flash",
        },
    }

    def get_model(self, tier: str = "standard") -> str:
        """Resolve the model string for a given tier based on environment.

        Priority: env var override > built-in defaults > default_llm_model fallback.
        """
        env_prefix = "dev" if self.environment in ("development", "staging") else "prod"
        override = getattr(self, f"{env_prefix}_model_{tier}", None)
        if isinstance(override, str) and override:
            return override

        env_defaults = self._MODEL_DEFAULTS.get(self.environment, {})
        resolved = env_defaults.get(tier, self.default_llm_model)
        if isinstance(resolved, str):
            return resolved
        return self.default_llm_model

    # Embeddings
    openai_api_key: str | None = None
    embeddings_url: str = "https://api.openai.com/v1/embeddings"
    embeddings_model: str = "text-embedding-3-small"

    # Supabase (vector search + intake store)
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_timeout_seconds: float = 30.0

    # Retrieval
    retrieval_match_threshold: float = 0.3
    retrieval_match_count: int = 15

    # Headline correction round-trip
    headline_correction_enabled: bool = True
    headline_correction_timeout_seconds: float = 45.0

    @field_validator("supabase_url", mode="before")
    @classmethod
    def _normalize_supabase_url(cls, value: object) -> object:
        """Strip trailing slashes so REST paths can be appended safely."""
        if not isinstance(value, str):
            return value
        raw = value.strip()
        return raw.rstrip("/") or None

    @field_validator("retrieval_match_threshold")
    @classmethod
    def _validate_match_threshold(cls, value: float) -> float:
        if not 0.0 <= value <= 1.0:
            raise ValueError("RETRIEVAL_MATCH_THRESHOLD must be between 0 and 1.")
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()

    return settings


settings = get_settings()
