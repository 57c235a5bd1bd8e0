"""
Per-document retriever.

Runs one similarity query per document and concatenates the results in
document order. Scores are never compared across documents, so every
document contributes up to top_k chunks.

Dependencies: notchy.boundary.vdb, asyncio
System role: Retrieval stage of the RAG pipeline
"""

import asyncio
import logging

from notchy.boundary.vdb import PineconeVectorIndex
from notchy.core.rag_query.models import RetrievedChunk

logger = logging.getLogger(__name__)


class DocumentRetriever:
    """Query each document's namespace independently."""

    def __init__(self, vector_index: PineconeVectorIndex) -> None:
        self._vector_index = vector_index

    async def retrieve(
        self,
        query_vector: list[float],
        source_keys: list[str],
        top_k: int,
    ) -> list[RetrievedChunk]:
        """
        Retrieve up to top_k chunks from every document.

        Args:
            query_vector: Embedded query
            source_keys: Documents to search, in output order
            top_k: Matches per document

        Returns:
            list[RetrievedChunk]: Results grouped by document in input order

        Raises:
            VectorStoreError: When any query fails
        """
        if not source_keys:
            return []

        results = await asyncio.gather(
            *(self._vector_index.query(query_vector, key, top_k) for key in source_keys)
        )

        retrieved = [
            RetrievedChunk(text=match.text, source_key=key, score=match.score)
            for key, matches in zip(source_keys, results)
            for match in matches
            if match.text
        ]
        logger.info(
            f"{__name__}:retrieve - Retrieved {len(retrieved)} chunks",
            extra={"documents": len(source_keys), "top_k": top_k},
        )
        return retrieved
