"""
Test suite for ChunkingTask.

Covers chunk coverage of the source text, size bounds, id assignment and
empty input.

System role: Verification of the chunking stage
"""

import pytest

from notchy.core.document_processing.models import SourceDocument
from notchy.core.document_processing.tasks import ChunkingTask


@pytest.fixture
def long_text() -> str:
    """Multi-paragraph text several times longer than one chunk."""
    paragraphs = []
    for p in range(8):
        sentences = [
            f"Paragraph {p} sentence {s} talks about topic {p * 10 + s} in some detail."
            for s in range(6)
        ]
        paragraphs.append(" ".join(sentences))
    return "\n\n".join(paragraphs)


@pytest.fixture
def chunking_task() -> ChunkingTask:
    return ChunkingTask(chunk_size=500, chunk_overlap=100)


class TestChunkingTaskInit:
    """Test suite for ChunkingTask construction."""

    def test_init_should_reject_overlap_not_smaller_than_size(self) -> None:
        """Should refuse an overlap equal to the chunk size."""
        with pytest.raises(ValueError, match="chunk_overlap"):
            ChunkingTask(chunk_size=100, chunk_overlap=100)

    def test_init_should_keep_configuration(self) -> None:
        """Should expose the configured size and overlap."""
        task = ChunkingTask(chunk_size=300, chunk_overlap=50)

        assert task.chunk_size == 300
        assert task.chunk_overlap == 50


class TestChunkText:
    """Test suite for ChunkingTask.chunk_text."""

    def test_chunk_text_should_return_empty_list_for_blank_text(
        self,
        chunking_task: ChunkingTask,
    ) -> None:
        """Should produce no chunks for empty or whitespace-only text."""
        assert chunking_task.chunk_text("", "uploads/a.pdf") == []
        assert chunking_task.chunk_text("  \n\n ", "uploads/a.pdf") == []

    def test_chunk_text_should_keep_short_text_in_one_chunk(
        self,
        chunking_task: ChunkingTask,
    ) -> None:
        """Should return a single chunk for text shorter than chunk_size."""
        chunks = chunking_task.chunk_text("A short document.", "uploads/a.pdf")

        assert len(chunks) == 1
        assert chunks[0].content == "A short document."
        assert chunks[0].id == "uploads/a.pdf-0"
        assert chunks[0].start_index == 0

    def test_chunk_text_should_not_exceed_chunk_size(
        self,
        chunking_task: ChunkingTask,
        long_text: str,
    ) -> None:
        """Should keep every chunk within the configured size."""
        chunks = chunking_task.chunk_text(long_text, "uploads/a.pdf")

        assert len(chunks) > 1
        assert all(len(chunk.content) <= 500 for chunk in chunks)

    def test_chunk_text_should_cover_whole_text(
        self,
        chunking_task: ChunkingTask,
        long_text: str,
    ) -> None:
        """Should leave only whitespace uncovered between consecutive chunks."""
        chunks = chunking_task.chunk_text(long_text, "uploads/a.pdf")

        covered = [False] * len(long_text)
        for chunk in chunks:
            assert chunk.start_index >= 0
            assert long_text[chunk.start_index:chunk.start_index + len(chunk.content)] == chunk.content
            for i in range(chunk.start_index, chunk.start_index + len(chunk.content)):
                covered[i] = True

        uncovered = [long_text[i] for i, is_covered in enumerate(covered) if not is_covered]
        assert all(char.isspace() for char in uncovered)

    def test_chunk_text_should_overlap_consecutive_chunks_by_at_most_overlap(
        self,
        chunking_task: ChunkingTask,
        long_text: str,
    ) -> None:
        """Should not overlap consecutive chunks by more than chunk_overlap."""
        chunks = chunking_task.chunk_text(long_text, "uploads/a.pdf")

        for previous, current in zip(chunks, chunks[1:]):
            previous_end = previous.start_index + len(previous.content)
            assert current.start_index > previous.start_index
            assert previous_end - current.start_index <= 100

    def test_chunk_text_should_number_chunks_per_document(
        self,
        chunking_task: ChunkingTask,
        long_text: str,
    ) -> None:
        """Should assign sequential indexes and `{key}-{i}` ids."""
        chunks = chunking_task.chunk_text(long_text, "uploads/math.pdf")

        assert [chunk.index for chunk in chunks] == list(range(len(chunks)))
        assert [chunk.id for chunk in chunks] == [
            f"uploads/math.pdf-{i}" for i in range(len(chunks))
        ]
        assert {chunk.source_key for chunk in chunks} == {"uploads/math.pdf"}


class TestChunkDocuments:
    """Test suite for ChunkingTask.chunk."""

    def test_chunk_should_restart_numbering_for_each_document(
        self,
        chunking_task: ChunkingTask,
    ) -> None:
        """Should number chunks within each document, keeping document order."""
        documents = [
            SourceDocument(source_key="uploads/a.pdf", text="Alpha text.", summary="s"),
            SourceDocument(source_key="uploads/b.pdf", text="Beta text.", summary="s"),
        ]

        chunks = chunking_task.chunk(documents)

        assert [chunk.id for chunk in chunks] == ["uploads/a.pdf-0", "uploads/b.pdf-0"]
