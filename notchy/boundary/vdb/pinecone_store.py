"""
Pinecone vector index adapter.

Upserts chunk vectors into per-document namespaces and answers top-K
similarity queries against a single namespace. The Pinecone SDK is
synchronous, so calls are pushed to the thread pool.

Namespace writes take no lock: concurrent upserts of the same ids from
different requests resolve as last-write-wins inside Pinecone.

Dependencies: pinecone, fastapi.concurrency
System role: Production vector store (Pinecone)
"""

import logging
from typing import Any

from fastapi.concurrency import run_in_threadpool

from notchy.boundary.vdb.namespace import namespace_for
from notchy.boundary.vdb.vector_schemas import VectorMatch, VectorRecord
from notchy.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


def _field(obj: Any, name: str, default: Any = None) -> Any:
    """Read a field from an SDK model or a plain dict."""
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


class PineconeVectorIndex:
    """
    Namespaced vector index backed by a Pinecone `Index` handle.

    One namespace per source key; a query never crosses namespaces.
    """

    def __init__(self, index: Any, batch_size: int = 100) -> None:
        """
        Initialize adapter around an index handle.

        Args:
            index: pinecone.Index (or any object with upsert/query of the same shape)
            batch_size: Vectors per upsert request
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._index = index
        self._batch_size = batch_size

    async def upsert(self, source_key: str, records: list[VectorRecord]) -> int:
        """
        Upsert one document's vectors into its namespace.

        Args:
            source_key: Storage key whose namespace is written
            records: Vectors of that document only

        Returns:
            int: Number of vectors written

        Raises:
            ValueError: When a record belongs to another source key
            VectorStoreError: When Pinecone rejects a batch
        """
        if not records:
            return 0

        foreign = [r.id for r in records if r.metadata.source != source_key]
        if foreign:
            raise ValueError(
                f"{len(foreign)} records do not belong to source {source_key!r}"
            )

        namespace = namespace_for(source_key)
        payload = [record.to_pinecone() for record in records]

        try:
            for start in range(0, len(payload), self._batch_size):
                batch = payload[start:start + self._batch_size]
                await run_in_threadpool(self._index.upsert, vectors=batch, namespace=namespace)
        except Exception as e:
            logger.exception(
                "Failed to upsert vectors to Pinecone",
                extra={"source_key": source_key, "namespace": namespace, "error": str(e)},
            )
            raise VectorStoreError(
                f"Failed to upsert vectors: {e}",
                operation="upsert",
                details={"source_key": source_key, "namespace": namespace},
            ) from e

        logger.info(
            f"{__name__}:upsert - Upserted {len(payload)} vectors",
            extra={"source_key": source_key, "namespace": namespace},
        )
        return len(payload)

    async def query(
        self,
        vector: list[float],
        source_key: str,
        top_k: int,
    ) -> list[VectorMatch]:
        """
        Return the top-K nearest chunks of one document.

        Args:
            vector: Query embedding
            source_key: Document whose namespace is searched
            top_k: Maximum matches to return

        Returns:
            list[VectorMatch]: Matches in index order (best first)

        Raises:
            VectorStoreError: When the query fails
        """
        namespace = namespace_for(source_key)
        try:
            response = await run_in_threadpool(
                self._index.query,
                vector=vector,
                top_k=top_k,
                include_metadata=True,
                namespace=namespace,
            )
        except Exception as e:
            logger.exception(
                "Pinecone query failed",
                extra={"source_key": source_key, "namespace": namespace, "error": str(e)},
            )
            raise VectorStoreError(
                f"Failed to query vectors: {e}",
                operation="query",
                details={"source_key": source_key, "namespace": namespace},
            ) from e

        matches: list[VectorMatch] = []
        for match in _field(response, "matches", None) or []:
            metadata = _field(match, "metadata", None) or {}
            source = str(metadata.get("source", ""))
            if source != source_key:
                logger.warning(
                    "Dropping match from foreign source",
                    extra={"namespace": namespace, "match_id": _field(match, "id")},
                )
                continue
            matches.append(
                VectorMatch(
                    id=str(_field(match, "id", "")),
                    score=float(_field(match, "score", 0.0) or 0.0),
                    text=str(metadata.get("text", "")),
                    source=source,
                )
            )

        return matches[:top_k]
