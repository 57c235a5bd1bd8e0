"""
RAG preparation pipeline.

Loads the requested documents, chunks and embeds them, upserts the vectors
into per-document namespaces and retrieves the chunks most similar to the
request's query. Every stage runs inside the request budget. Downloaded
files live in a request workspace that is removed before this returns,
whichever way it returns.

Dependencies: notchy.core.document_processing, notchy.core.rag_query
System role: Shared front half of chat and study-aid requests
"""

import logging
import time
from collections.abc import Callable

from notchy.core.document_processing.loader import DocumentLoader
from notchy.core.document_processing.tasks import ChunkingTask, EmbeddingTask, VectorStoreTask
from notchy.core.document_processing.workspace import TempWorkspace
from notchy.core.exceptions import InvalidRequestError, NoDocumentContentError
from notchy.core.rag_query.budget import RequestBudget
from notchy.core.rag_query.models import PreparedContext
from notchy.core.rag_query.retriever import DocumentRetriever

logger = logging.getLogger(__name__)


class RagPipeline:
    """Load, index and retrieve context for one request."""

    def __init__(
        self,
        loader: DocumentLoader,
        chunking_task: ChunkingTask,
        embedding_task: EmbeddingTask,
        vector_store_task: VectorStoreTask,
        retriever: DocumentRetriever,
        workspace_factory: Callable[[], TempWorkspace] = TempWorkspace,
    ) -> None:
        self._loader = loader
        self._chunking_task = chunking_task
        self._embedding_task = embedding_task
        self._vector_store_task = vector_store_task
        self._retriever = retriever
        self._workspace_factory = workspace_factory

    async def prepare(
        self,
        source_keys: list[str],
        query: str,
        top_k: int,
        budget: RequestBudget,
    ) -> PreparedContext:
        """
        Build the retrieval context for a request.

        Args:
            source_keys: Documents selected by the caller
            query: Text embedded for retrieval
            top_k: Matches per document
            budget: Request budget shared with the generation step

        Returns:
            PreparedContext: Loaded documents and retrieved chunks

        Raises:
            InvalidRequestError: When no source keys are given
            NoDocumentContentError: When no document yielded text
            EmbeddingError: When any chunk or the query fails to embed
            VectorStoreError: When upsert or query fails
            PipelineTimeoutError: When the budget runs out
        """
        if not source_keys:
            raise InvalidRequestError("No file keys provided", field="fileKeys")

        start = time.perf_counter()
        logger.info(
            f"{__name__}:prepare - START",
            extra={"documents_requested": len(source_keys), "top_k": top_k},
        )

        async with self._workspace_factory() as workspace:
            documents = await budget.run(self._loader.load_many(source_keys, workspace), "load")

        if not documents:
            raise NoDocumentContentError(source_keys)

        chunks = self._chunking_task.chunk(documents)
        embedded = await budget.run(self._embedding_task.embed_chunks(chunks), "embed")
        await budget.run(self._vector_store_task.upsert(embedded), "upsert")

        query_vector = await budget.run(self._embedding_task.embed_query(query), "embed_query")
        loaded_keys = [document.source_key for document in documents]
        retrieved = await budget.run(
            self._retriever.retrieve(query_vector, loaded_keys, top_k), "retrieve"
        )

        logger.info(
            f"{__name__}:prepare - END",
            extra={
                "documents_loaded": len(documents),
                "chunks": len(chunks),
                "retrieved": len(retrieved),
                "elapsed_ms": round((time.perf_counter() - start) * 1000, 1),
            },
        )
        return PreparedContext(documents=documents, retrieved=retrieved)
