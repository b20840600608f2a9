"""Configuration management for Catalog RAG."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _sanitize_secret(value: str) -> str:
    """Remove BOM characters and whitespace from secrets.

    Secrets copied from dashboards or mounted by a platform may carry BOM
    characters that break HTTP headers.
    """
    if not value:
        return value
    return value.lstrip("\ufeff").strip()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Google AI API (embeddings + generation)
    google_api_key: str = ""

    # Stripe
    stripe_webhook_secret: str = ""

    # Qdrant settings; an empty URL runs an in-process store
    qdrant_url: str = ""
    qdrant_api_key: str = ""
    qdrant_collection: str = "products"

    @field_validator(
        "google_api_key",
        "stripe_webhook_secret",
        "qdrant_api_key",
        "qdrant_url",
        mode="after",
    )
    @classmethod
    def sanitize_secrets(cls, value: str) -> str:
        """Remove BOM and whitespace from secret values."""
        return _sanitize_secret(value)

    # Model settings
    embedding_model: str = "gemini-embedding-001"
    embedding_dimension: int = 768
    llm_model: str = "gemini-2.0-flash"
    llm_temperature: float = 0.2
    llm_max_tokens: int = 1024

    # RAG settings
    similar_products_top_k: int = 3
    answer_top_k: int = 3

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # API
    debug: bool = False


# Global settings instance
settings = Settings()
