"""
Ingestion result model.

Represents the outcome of pushing a batch of documents into the vector index.

Dependencies: pydantic
System role: Return type for IngestionPipeline.ingest()
"""

from pydantic import BaseModel, Field


class IngestionResult(BaseModel):
    """Result of embedding and upserting one request's documents."""

    chunk_counts: dict[str, int] = Field(
        default_factory=dict,
        description="Chunks upserted per source key",
    )
    namespaces: dict[str, str] = Field(
        default_factory=dict,
        description="Namespace written per source key",
    )
    processing_time_ms: float = Field(default=0.0, description="Total ingestion time")

    @property
    def total_chunks(self) -> int:
        return sum(self.chunk_counts.values())
