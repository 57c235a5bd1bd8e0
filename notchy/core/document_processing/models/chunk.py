"""
Chunk domain models for the document processing pipeline.

A chunk is an immutable slice of one document's extracted text. Its id is
synthetic (`{source_key}-{index}`) so re-ingesting a document overwrites the
same vector ids instead of accumulating duplicates.

Dependencies: pydantic
System role: Data structure for document chunks in ingestion pipeline
"""

from pydantic import BaseModel, ConfigDict, Field


def make_chunk_id(source_key: str, index: int) -> str:
    """Build the vector id for the index-th chunk of a document."""
    return f"{source_key}-{index}"


class Chunk(BaseModel):
    """Document chunk tagged with its originating source key."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Synthetic chunk identifier ({source_key}-{index})")
    content: str = Field(description="Chunk text content")
    source_key: str = Field(description="Storage key of the originating document")
    index: int = Field(ge=0, description="Position of the chunk within its document")
    start_index: int = Field(
        default=-1,
        description="Character offset in the document text (-1 when unknown)",
    )


class EmbeddedChunk(BaseModel):
    """Chunk paired with its embedding vector."""

    model_config = ConfigDict(frozen=True)

    chunk: Chunk
    vector: list[float] = Field(min_length=1)

    @property
    def source_key(self) -> str:
        return self.chunk.source_key
