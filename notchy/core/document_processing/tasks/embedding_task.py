"""
Embedding generation task.

Embeds every chunk with one call per chunk. Calls run concurrently (bounded
by a semaphore); the first failure cancels the calls still in flight and
fails the whole batch, so a document never reaches the index with missing
chunks.

Dependencies: langchain_core.embeddings, asyncio
System role: Third stage of document ingestion pipeline
"""

import asyncio
import logging

from langchain_core.embeddings import Embeddings

from notchy.core.document_processing.models import Chunk, EmbeddedChunk
from notchy.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Generate chunk and query embeddings through a LangChain Embeddings model."""

    def __init__(self, embeddings: Embeddings, max_concurrency: int = 16) -> None:
        """
        Initialize embedding task.

        Args:
            embeddings: LangChain embeddings model (OpenAIEmbeddings in production)
            max_concurrency: Maximum embedding calls in flight

        Raises:
            ValueError: When max_concurrency is not positive
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._embeddings = embeddings
        self._max_concurrency = max_concurrency

    async def embed_chunks(self, chunks: list[Chunk]) -> list[EmbeddedChunk]:
        """
        Embed chunks concurrently, failing fast.

        Args:
            chunks: Chunks to embed

        Returns:
            list[EmbeddedChunk]: Embedded chunks in input order

        Raises:
            EmbeddingError: When any single embedding call fails
        """
        if not chunks:
            return []

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def _embed_one(chunk: Chunk) -> EmbeddedChunk:
            async with semaphore:
                try:
                    vector = await self._embeddings.aembed_query(chunk.content)
                except Exception as e:
                    raise EmbeddingError(
                        f"Failed to embed chunk {chunk.id}: {e}",
                        chunk.source_key,
                        {"chunk_id": chunk.id},
                    ) from e
            if not vector:
                raise EmbeddingError(
                    f"Empty embedding for chunk {chunk.id}",
                    chunk.source_key,
                    {"chunk_id": chunk.id},
                )
            return EmbeddedChunk(chunk=chunk, vector=list(vector))

        tasks = [asyncio.create_task(_embed_one(chunk)) for chunk in chunks]
        try:
            embedded = list(await asyncio.gather(*tasks))
        except EmbeddingError as e:
            logger.error(
                f"{__name__}:embed_chunks - Batch failed, cancelling remaining calls",
                extra={"chunk_count": len(chunks), "error": e.message},
            )
            raise
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

        dimensions = {len(item.vector) for item in embedded}
        if len(dimensions) > 1:
            raise EmbeddingError(
                "Embedding model returned vectors of differing dimensions",
                details={"dimensions": sorted(dimensions)},
            )

        logger.info(
            f"{__name__}:embed_chunks - Embedded {len(embedded)} chunks",
            extra={"dimension": dimensions.pop()},
        )
        return embedded

    async def embed_query(self, text: str) -> list[float]:
        """
        Embed a retrieval query.

        Args:
            text: Query text

        Returns:
            list[float]: Query vector

        Raises:
            EmbeddingError: When the embedding call fails
        """
        try:
            vector = await self._embeddings.aembed_query(text)
        except Exception as e:
            raise EmbeddingError(f"Failed to embed query: {e}") from e
        if not vector:
            raise EmbeddingError("Empty embedding for query")
        return list(vector)
