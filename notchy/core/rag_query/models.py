"""
Retrieval models.

Dependencies: pydantic
System role: Data passed from retrieval to prompt assembly
"""

from pydantic import BaseModel, ConfigDict, Field

from notchy.core.document_processing.models import SourceDocument, display_name_for


class RetrievedChunk(BaseModel):
    """Chunk returned by a per-document similarity query."""

    model_config = ConfigDict(frozen=True)

    text: str
    source_key: str
    score: float = 0.0

    @property
    def display_name(self) -> str:
        return display_name_for(self.source_key)


class PreparedContext(BaseModel):
    """Documents and retrieved chunks gathered for one request."""

    documents: list[SourceDocument] = Field(default_factory=list)
    retrieved: list[RetrievedChunk] = Field(default_factory=list)

    @property
    def source_keys(self) -> list[str]:
        return [document.source_key for document in self.documents]


class AssembledContext(BaseModel):
    """Prompt-ready summaries and retrieved context."""

    summaries: str = ""
    context: str = ""
    dropped_chunks: int = 0
