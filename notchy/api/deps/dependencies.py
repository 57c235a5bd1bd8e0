"""
Dependency injection container.

Client handles (S3, OpenAI models, Pinecone index, chat store) are built
once per process by the service cache; services are assembled per request
from those handles.

Dependencies: notchy.configs, notchy.application, notchy.boundary, notchy.core
System role: DI container for service injection
"""

from functools import lru_cache

from notchy.application.adapters import InMemoryChatRepository
from notchy.application.services import ChatService, StudyAidService
from notchy.configs import Settings, get_settings
from notchy.core.document_processing.loader import DocumentLoader
from notchy.core.document_processing.tasks import (
    ChunkingTask,
    EmbeddingTask,
    ParsingTask,
    S3DownloadTask,
    VectorStoreTask,
)
from notchy.core.document_processing.workspace import TempWorkspace
from notchy.core.generation import GenerationClient, StudyAidGenerator
from notchy.core.rag_query import ContextAssembler, DocumentRetriever, RagPipeline


class ServiceCache:
    """Container for cached client handles and stateless components."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._s3_download_task = None
        self._embeddings = None
        self._chat_model = None
        self._structured_model = None
        self._vector_index = None
        self._chat_repository = None
        self._rag_pipeline = None
        self._generation_client = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def s3_download_task(self) -> S3DownloadTask:
        """Get cached S3 download task."""
        if self._s3_download_task is None:
            s3 = self.settings.s3_documents
            self._s3_download_task = S3DownloadTask(
                bucket=s3.bucket,
                region=s3.region,
                max_attempts=s3.download_max_attempts,
                backoff_seconds=s3.download_backoff_seconds,
            )
        return self._s3_download_task

    @property
    def embeddings(self):
        """Get cached embeddings model."""
        if self._embeddings is None:
            from notchy.boundary.llm import get_embeddings
            self._embeddings = get_embeddings(self.settings.openai)
        return self._embeddings

    @property
    def chat_model(self):
        """Get cached chat model."""
        if self._chat_model is None:
            from notchy.boundary.llm import get_chat_model
            self._chat_model = get_chat_model(self.settings.openai)
        return self._chat_model

    @property
    def structured_model(self):
        """Get cached model for structured generation."""
        if self._structured_model is None:
            from notchy.boundary.llm import get_chat_model
            self._structured_model = get_chat_model(self.settings.openai, structured=True)
        return self._structured_model

    @property
    def vector_index(self):
        """Get cached Pinecone index adapter."""
        if self._vector_index is None:
            from notchy.boundary.vdb.vector_store_factory import get_vector_index
            self._vector_index = get_vector_index(self.settings.vector_store)
        return self._vector_index

    @property
    def chat_repository(self) -> InMemoryChatRepository:
        """Get cached chat repository."""
        if self._chat_repository is None:
            self._chat_repository = InMemoryChatRepository()
        return self._chat_repository

    @property
    def rag_pipeline(self) -> RagPipeline:
        """Get cached RAG pipeline (stateless; request state lives in its arguments)."""
        if self._rag_pipeline is None:
            pipeline = self.settings.pipeline
            self._rag_pipeline = RagPipeline(
                loader=DocumentLoader(
                    download_task=self.s3_download_task,
                    parsing_task=ParsingTask(),
                    summary_chars=pipeline.summary_chars,
                ),
                chunking_task=ChunkingTask(
                    chunk_size=pipeline.chunk_size,
                    chunk_overlap=pipeline.chunk_overlap,
                ),
                embedding_task=EmbeddingTask(
                    self.embeddings,
                    max_concurrency=pipeline.embedding_concurrency,
                ),
                vector_store_task=VectorStoreTask(self.vector_index),
                retriever=DocumentRetriever(self.vector_index),
                workspace_factory=lambda: TempWorkspace(prefix=pipeline.temp_dir_prefix),
            )
        return self._rag_pipeline

    @property
    def generation_client(self) -> GenerationClient:
        """Get cached generation client."""
        if self._generation_client is None:
            openai = self.settings.openai
            self._generation_client = GenerationClient(
                chat_model=self.chat_model,
                structured_model=self.structured_model,
                chat_temperature=openai.chat_temperature,
                chat_max_tokens=openai.chat_max_tokens,
            )
        return self._generation_client

    @property
    def context_assembler(self) -> ContextAssembler:
        return ContextAssembler(max_context_chars=self.settings.pipeline.max_context_chars)

    def clear(self) -> None:
        """Clear all cached instances."""
        self._s3_download_task = None
        self._embeddings = None
        self._chat_model = None
        self._structured_model = None
        self._vector_index = None
        self._chat_repository = None
        self._rag_pipeline = None
        self._generation_client = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_chat_service() -> ChatService:
    """
    Get chat service instance.

    Returns:
        ChatService: Chat service over the cached pipeline, models and chat store
    """
    cache = get_service_cache()
    return ChatService(
        pipeline=cache.rag_pipeline,
        client=cache.generation_client,
        assembler=cache.context_assembler,
        repository=cache.chat_repository,
        top_k=cache.settings.vector_store.chat_top_k,
        timeout_seconds=cache.settings.pipeline.request_timeout_seconds,
    )


def get_study_aid_service() -> StudyAidService:
    """
    Get study-aid service instance.

    Returns:
        StudyAidService: Service for MCQs, flashcards, mind maps and summaries
    """
    cache = get_service_cache()
    return StudyAidService(
        pipeline=cache.rag_pipeline,
        generator=StudyAidGenerator(cache.generation_client, cache.context_assembler),
        client=cache.generation_client,
        top_k=cache.settings.vector_store.artifact_top_k,
        timeout_seconds=cache.settings.pipeline.request_timeout_seconds,
    )
