"""
Models for document processing pipeline.

Exports: Chunk, EmbeddedChunk, SourceDocument, IngestionResult
"""

from .chunk import Chunk, EmbeddedChunk, make_chunk_id
from .ingestion_result import IngestionResult
from .source_document import SourceDocument, display_name_for

__all__ = [
    "Chunk",
    "EmbeddedChunk",
    "IngestionResult",
    "SourceDocument",
    "display_name_for",
    "make_chunk_id",
]
