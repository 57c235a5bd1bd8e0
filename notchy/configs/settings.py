"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from notchy.configs.base import BaseSettings
from notchy.configs.llm import OpenAISettings
from notchy.configs.pipeline import PipelineSettings
from notchy.configs.s3_documents import S3DocumentsSettings
from notchy.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    s3_documents: S3DocumentsSettings = Field(default_factory=S3DocumentsSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from notchy.configs import get_settings
        settings = get_settings()
    """
    return Settings()
