"""
OpenAI configuration settings.

Model identifiers and sampling defaults for chat, structured generation
and embeddings.

Dependencies: pydantic, pydantic_settings
System role: Generation and embedding model configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OpenAISettings(BaseSettings):
    """Settings for OpenAI chat and embedding models."""

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        description="OpenAI API key (falls back to the client's own env lookup when unset)",
    )
    chat_model: str = Field(
        default="gpt-4o-mini",
        description="Model used for streamed chat answers",
    )
    structured_model: str = Field(
        default="gpt-4o-mini",
        description="Model used for topics, MCQ, flashcard and mind map generation",
    )
    embedding_model: str = Field(
        default="text-embedding-ada-002",
        description="Embedding model (must match the Pinecone index dimension)",
    )
    chat_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    chat_max_tokens: int = Field(default=500, ge=1)
    request_timeout_seconds: float = Field(
        default=30.0,
        description="Per-call HTTP timeout passed to the OpenAI client",
    )
    max_retries: int = Field(
        default=0,
        ge=0,
        description="Client-level retries; generation and embedding failures surface immediately by default",
    )
