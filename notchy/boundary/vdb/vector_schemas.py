"""
Vector database schemas.

Pydantic models for vector operations (records and query matches).
Used for type-safe vector index interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, Field

from notchy.core.document_processing.models import EmbeddedChunk


class VectorMetadata(BaseModel):
    """Metadata stored with each vector."""

    text: str = Field(description="Chunk text content")
    source: str = Field(description="Storage key of the originating document")


class VectorRecord(BaseModel):
    """Single (id, vector, metadata) triple sent to the index."""

    id: str = Field(description="Chunk identifier")
    values: list[float] = Field(min_length=1, description="Embedding vector")
    metadata: VectorMetadata

    @classmethod
    def from_embedded_chunk(cls, embedded: EmbeddedChunk) -> "VectorRecord":
        return cls(
            id=embedded.chunk.id,
            values=embedded.vector,
            metadata=VectorMetadata(
                text=embedded.chunk.content,
                source=embedded.chunk.source_key,
            ),
        )

    def to_pinecone(self) -> dict[str, Any]:
        return {"id": self.id, "values": self.values, "metadata": self.metadata.model_dump()}


class VectorMatch(BaseModel):
    """Single result from a similarity query."""

    id: str = Field(description="Chunk identifier")
    score: float = Field(description="Similarity score reported by the index")
    text: str = Field(default="", description="Chunk text from metadata")
    source: str = Field(default="", description="Source key from metadata")
