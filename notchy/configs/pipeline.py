"""
Configuration settings for the RAG pipeline.

Chunking, summary, concurrency and request budget settings shared by the
chat and study-aid routes.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineSettings(BaseSettings):
    """Settings for document ingestion and generation requests."""

    model_config = SettingsConfigDict(
        env_prefix="PIPELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=500,
        ge=1,
        description="Target chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=100,
        ge=0,
        description="Overlap between consecutive chunks",
    )

    summary_chars: int = Field(
        default=500,
        ge=0,
        description="Characters of each document used as its prompt summary",
    )

    embedding_concurrency: int = Field(
        default=16,
        ge=1,
        description="Maximum embedding calls in flight per request",
    )

    max_context_chars: int | None = Field(
        default=None,
        ge=1,
        description="Optional cap on retrieved context length (unset = no truncation)",
    )

    request_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Wall-clock budget for a whole request",
    )

    temp_dir_prefix: str = Field(
        default="notchy_",
        description="Prefix of request-scoped temp directories",
    )

    @model_validator(mode="after")
    def _overlap_smaller_than_chunk(self) -> "PipelineSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self
