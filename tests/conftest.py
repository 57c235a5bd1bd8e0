"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory Pinecone index, fake embeddings and chat models,
fake S3/PDF tasks, a fully wired RAG pipeline over those doubles
Dependencies: pytest, langchain_core fakes
System role: Test infrastructure and fixture management
"""

import math
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient
from langchain_core.embeddings import DeterministicFakeEmbedding
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from pydantic import Field

from notchy.api.main import create_app
from notchy.boundary.vdb import PineconeVectorIndex
from notchy.core.document_processing.loader import DocumentLoader
from notchy.core.document_processing.tasks import ChunkingTask, EmbeddingTask, VectorStoreTask
from notchy.core.document_processing.workspace import TempWorkspace
from notchy.core.exceptions import ParsingError, S3DownloadError
from notchy.core.rag_query import DocumentRetriever, RagPipeline


class InMemoryPineconeIndex:
    """Stand-in for `pinecone.Index` with namespaced upsert/query."""

    def __init__(self) -> None:
        self.namespaces: dict[str, dict[str, dict[str, Any]]] = {}
        self.upsert_calls: list[dict[str, Any]] = []
        self.query_calls: list[dict[str, Any]] = []

    def upsert(self, vectors: list[dict[str, Any]], namespace: str) -> dict[str, int]:
        self.upsert_calls.append({"namespace": namespace, "count": len(vectors)})
        store = self.namespaces.setdefault(namespace, {})
        for vector in vectors:
            store[vector["id"]] = vector
        return {"upserted_count": len(vectors)}

    def query(
        self,
        vector: list[float],
        top_k: int,
        include_metadata: bool,
        namespace: str,
    ) -> dict[str, Any]:
        self.query_calls.append({"namespace": namespace, "top_k": top_k})
        scored = [
            {
                "id": record["id"],
                "score": _cosine(vector, record["values"]),
                "metadata": record["metadata"] if include_metadata else None,
            }
            for record in self.namespaces.get(namespace, {}).values()
        ]
        scored.sort(key=lambda match: match["score"], reverse=True)
        return {"matches": scored[:top_k], "namespace": namespace}


def _cosine(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


class RecordingChatModel(FakeListChatModel):
    """FakeListChatModel that records the messages and call kwargs it receives."""

    calls: list[dict[str, Any]] = Field(default_factory=list)

    def _call(self, messages, stop=None, run_manager=None, **kwargs):
        self.calls.append({"messages": messages, "kwargs": kwargs})
        return super()._call(messages, stop, run_manager, **kwargs)

    async def _astream(self, messages, stop=None, run_manager=None, **kwargs):
        self.calls.append({"messages": messages, "kwargs": kwargs})
        async for chunk in super()._astream(messages, stop, run_manager, **kwargs):
            yield chunk


class FakeDownloadTask:
    """Writes a placeholder file for known keys, fails for unknown ones."""

    def __init__(self, available: set[str]) -> None:
        self.available = available
        self.calls: list[str] = []

    def download(self, s3_key: str, workspace: TempWorkspace) -> Path:
        self.calls.append(s3_key)
        if s3_key not in self.available:
            raise S3DownloadError(f"File not found in S3: {s3_key}", s3_key)
        path = workspace.new_file_path(Path(s3_key).name)
        path.write_bytes(b"%PDF-1.4 placeholder")
        return path


class FakeParsingTask:
    """Returns configured pages per file name instead of reading PDFs."""

    def __init__(self, pages_by_name: dict[str, list[str]]) -> None:
        self.pages_by_name = pages_by_name

    def parse(self, file_path, source_key=None) -> list[str]:
        name = Path(source_key or file_path).name
        if name not in self.pages_by_name:
            raise ParsingError("Failed to parse PDF: not a PDF", source_key)
        return self.pages_by_name[name]


class TrackingWorkspaceFactory:
    """Workspace factory that remembers every workspace it created."""

    def __init__(self) -> None:
        self.created: list[TempWorkspace] = []

    def __call__(self) -> TempWorkspace:
        workspace = TempWorkspace(prefix="notchy_test_")
        self.created.append(workspace)
        return workspace


MATH_TEXT = (
    "Chapter 1: Limits.\n\nA limit describes the value a function approaches as the "
    "input approaches a point. Limits are the foundation of calculus.\n\n"
    "Chapter 2: Derivatives.\n\nThe derivative measures the rate of change of a function."
)
HISTORY_TEXT = (
    "Chapter 1: The Roman Republic.\n\nThe republic was founded in 509 BC after the "
    "overthrow of the monarchy.\n\nChapter 2: The Empire.\n\nAugustus became the first emperor."
)


@pytest.fixture
def pinecone_index() -> InMemoryPineconeIndex:
    """Provide an empty in-memory Pinecone index."""
    return InMemoryPineconeIndex()


@pytest.fixture
def vector_index(pinecone_index: InMemoryPineconeIndex) -> PineconeVectorIndex:
    """Provide the Pinecone adapter over the in-memory index."""
    return PineconeVectorIndex(pinecone_index, batch_size=2)


@pytest.fixture
def fake_embeddings() -> DeterministicFakeEmbedding:
    """Provide deterministic fake embeddings."""
    return DeterministicFakeEmbedding(size=16)


@pytest.fixture
def make_chat_model():
    """Factory for recording fake chat models with canned responses."""

    def _make(*responses: str) -> RecordingChatModel:
        return RecordingChatModel(responses=list(responses))

    return _make


@pytest.fixture
def document_pages() -> dict[str, list[str]]:
    """Pages per document name; blank.pdf has no extractable text."""
    return {
        "math.pdf": [MATH_TEXT, "   "],
        "history.pdf": [HISTORY_TEXT],
        "blank.pdf": ["", "  \n "],
    }


@pytest.fixture
def download_task(document_pages: dict[str, list[str]]) -> FakeDownloadTask:
    """Download task that knows every configured document."""
    return FakeDownloadTask({f"uploads/{name}" for name in document_pages})


@pytest.fixture
def loader(download_task: FakeDownloadTask, document_pages: dict[str, list[str]]) -> DocumentLoader:
    """Document loader over fake download and parsing tasks."""
    return DocumentLoader(download_task, FakeParsingTask(document_pages), summary_chars=500)


@pytest.fixture
def workspace_factory() -> TrackingWorkspaceFactory:
    """Workspace factory recording created workspaces."""
    return TrackingWorkspaceFactory()


@pytest.fixture
def rag_pipeline(
    loader: DocumentLoader,
    fake_embeddings: DeterministicFakeEmbedding,
    vector_index: PineconeVectorIndex,
    workspace_factory: TrackingWorkspaceFactory,
) -> RagPipeline:
    """RAG pipeline wired to in-memory doubles."""
    return RagPipeline(
        loader=loader,
        chunking_task=ChunkingTask(chunk_size=120, chunk_overlap=20),
        embedding_task=EmbeddingTask(fake_embeddings, max_concurrency=4),
        vector_store_task=VectorStoreTask(vector_index),
        retriever=DocumentRetriever(vector_index),
        workspace_factory=workspace_factory,
    )


@pytest.fixture
def api_app():
    """Application with dependency overrides cleared after each test."""
    app = create_app()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(api_app) -> TestClient:
    """Test client that returns server errors as responses."""
    return TestClient(api_app, raise_server_exceptions=False)


def mcq_payload(count: int = 5) -> dict[str, Any]:
    """Well-formed MCQ JSON object with `count` questions."""
    return {
        "questions": [
            {
                "question": f"Question {i}?",
                "options": [f"A) one {i}", f"B) two {i}", f"C) three {i}", f"D) four {i}"],
                "correctAnswer": f"A) one {i}",
                "explanation": f"Because {i}.",
            }
            for i in range(count)
        ]
    }


def flashcard_payload(count: int = 5) -> list[dict[str, str]]:
    """Well-formed flashcard array with `count` cards."""
    return [{"front": f"Front {i}", "back": f"Back {i}"} for i in range(count)]


@pytest.fixture
def sample_mcq_payload() -> dict[str, Any]:
    return mcq_payload()


@pytest.fixture
def sample_flashcard_payload() -> list[dict[str, str]]:
    return flashcard_payload()


@pytest.fixture
def sample_mindmap_payload() -> dict[str, Any]:
    return {
        "title": "Calculus",
        "rootNode": {
            "id": "root",
            "text": "Calculus",
            "children": [
                {
                    "id": "limits",
                    "text": "Limits",
                    "note": "From math.pdf",
                    "color": "#ff0000",
                    "children": [{"id": "def", "text": "Definition"}],
                }
            ],
        },
    }


@pytest.fixture
def make_mcq_payload():
    """Factory for MCQ payloads with a chosen question count."""
    return mcq_payload


@pytest.fixture
def make_flashcard_payload():
    """Factory for flashcard payloads with a chosen card count."""
    return flashcard_payload
