"""
Vector store configuration settings.

Manages Pinecone index configuration for vector storage and retrieval.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Pinecone vector index configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PINECONE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="Pinecone API key")
    index_name: str = Field(default="notchy", description="Pinecone index name")

    chat_top_k: int = Field(
        default=3,
        ge=1,
        description="Chunks retrieved per document for chat turns",
    )
    artifact_top_k: int = Field(
        default=5,
        ge=1,
        description="Chunks retrieved per document for flashcards, MCQs and mind maps",
    )
    upsert_batch_size: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Vectors per Pinecone upsert request",
    )
