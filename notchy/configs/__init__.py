"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from notchy.configs.llm import OpenAISettings
from notchy.configs.pipeline import PipelineSettings
from notchy.configs.s3_documents import S3DocumentsSettings
from notchy.configs.settings import Settings, get_settings
from notchy.configs.vector_store import VectorStoreSettings

__all__ = [
    "OpenAISettings",
    "PipelineSettings",
    "S3DocumentsSettings",
    "Settings",
    "VectorStoreSettings",
    "get_settings",
]
