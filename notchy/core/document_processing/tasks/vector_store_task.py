"""
Vector index upsert task.

Groups embedded chunks by source key and writes each group into that
document's namespace. Groups are written concurrently; the first failing
group fails the whole request.

Dependencies: notchy.boundary.vdb, asyncio
System role: Final stage of document ingestion pipeline
"""

import asyncio
import logging
import time

from notchy.boundary.vdb import PineconeVectorIndex, VectorRecord, namespace_for
from notchy.core.document_processing.models import EmbeddedChunk, IngestionResult

logger = logging.getLogger(__name__)


class VectorStoreTask:
    """Upload embedded chunks into per-document namespaces."""

    def __init__(self, vector_index: PineconeVectorIndex) -> None:
        """
        Initialize vector store task.

        Args:
            vector_index: Namespaced vector index adapter
        """
        self._vector_index = vector_index

    @staticmethod
    def group_by_source(embedded_chunks: list[EmbeddedChunk]) -> dict[str, list[VectorRecord]]:
        """Group records by source key, keeping first-seen key order."""
        groups: dict[str, list[VectorRecord]] = {}
        for embedded in embedded_chunks:
            groups.setdefault(embedded.source_key, []).append(
                VectorRecord.from_embedded_chunk(embedded)
            )
        return groups

    async def upsert(self, embedded_chunks: list[EmbeddedChunk]) -> IngestionResult:
        """
        Upsert all chunks of a request.

        Args:
            embedded_chunks: Embedded chunks of one or more documents

        Returns:
            IngestionResult: Per-source chunk counts and namespaces

        Raises:
            VectorStoreError: When any group fails to upsert
        """
        start = time.perf_counter()
        groups = self.group_by_source(embedded_chunks)
        if not groups:
            return IngestionResult()

        tasks = [
            asyncio.create_task(self._vector_index.upsert(source_key, records))
            for source_key, records in groups.items()
        ]
        try:
            counts = await asyncio.gather(*tasks)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

        result = IngestionResult(
            chunk_counts=dict(zip(groups.keys(), counts)),
            namespaces={key: namespace_for(key) for key in groups},
            processing_time_ms=(time.perf_counter() - start) * 1000,
        )
        logger.info(
            f"{__name__}:upsert - Upserted {result.total_chunks} chunks",
            extra={
                "documents": len(groups),
                "processing_time_ms": round(result.processing_time_ms, 1),
            },
        )
        return result
