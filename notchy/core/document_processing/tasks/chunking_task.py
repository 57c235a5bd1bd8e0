"""
Text chunking task using RecursiveCharacterTextSplitter.

Splits a document's text into overlapping chunks, preferring paragraph,
then line, then sentence, then word boundaries before hard cuts.

Dependencies: langchain_text_splitters
System role: Second stage of document ingestion pipeline
"""

from langchain_text_splitters import RecursiveCharacterTextSplitter

from notchy.core.document_processing.models import Chunk, SourceDocument, make_chunk_id

DEFAULT_SEPARATORS = ["\n\n", "\n", ". ", " ", ""]


class ChunkingTask:
    """Split documents into chunks using RecursiveCharacterTextSplitter."""

    def __init__(
        self,
        chunk_size: int = 500,
        chunk_overlap: int = 100,
        separators: list[str] | None = None,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Target chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
            separators: Boundary preference, coarsest first
        """
        if chunk_overlap >= chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            separators=separators or DEFAULT_SEPARATORS,
            keep_separator="end",
            add_start_index=True,
            length_function=len,
        )

    def chunk_text(self, text: str, source_key: str) -> list[Chunk]:
        """
        Split one document's text into ordered chunks.

        Args:
            text: Full extracted text
            source_key: Storage key recorded on every chunk

        Returns:
            list[Chunk]: Chunks in document order (empty for blank text)
        """
        if not text.strip():
            return []

        pieces = self._splitter.create_documents([text], metadatas=[{"source": source_key}])
        return [
            Chunk(
                id=make_chunk_id(source_key, i),
                content=piece.page_content,
                source_key=source_key,
                index=i,
                start_index=piece.metadata.get("start_index", -1),
            )
            for i, piece in enumerate(pieces)
        ]

    def chunk(self, documents: list[SourceDocument]) -> list[Chunk]:
        """
        Split several documents, keeping input order.

        Args:
            documents: Loaded documents

        Returns:
            list[Chunk]: All chunks, grouped by document
        """
        chunks: list[Chunk] = []
        for document in documents:
            chunks.extend(self.chunk_text(document.text, document.source_key))
        return chunks
