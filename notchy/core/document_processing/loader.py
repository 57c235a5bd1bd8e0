"""
Document loader.

Fetches each requested PDF from S3 into the request workspace, extracts its
text and builds the short summary used as prompt context. Loading is
best-effort: a document that cannot be downloaded, parsed, or that has no
text is skipped with a warning and the rest of the request continues.

Dependencies: notchy.core.document_processing.tasks, fastapi.concurrency
System role: First stage of the RAG pipeline
"""

import logging

from fastapi.concurrency import run_in_threadpool

from notchy.core.document_processing.models import SourceDocument, display_name_for
from notchy.core.document_processing.tasks import ParsingTask, S3DownloadTask
from notchy.core.document_processing.workspace import TempWorkspace
from notchy.core.exceptions import DocumentProcessingError

logger = logging.getLogger(__name__)


def build_summary(source_key: str, text: str, summary_chars: int = 500) -> str:
    """Return the prompt summary of a document: its name and a text prefix."""
    return f"Summary of {display_name_for(source_key)}:\n{text[:summary_chars]}..."


class DocumentLoader:
    """Download and extract documents, skipping the ones that fail."""

    def __init__(
        self,
        download_task: S3DownloadTask,
        parsing_task: ParsingTask,
        summary_chars: int = 500,
    ) -> None:
        self._download_task = download_task
        self._parsing_task = parsing_task
        self._summary_chars = summary_chars

    async def load(self, source_key: str, workspace: TempWorkspace) -> SourceDocument | None:
        """
        Load a single document.

        Args:
            source_key: S3 object key
            workspace: Request workspace receiving the downloaded file

        Returns:
            SourceDocument | None: Loaded document, or None when skipped
        """
        try:
            file_path = await run_in_threadpool(
                self._download_task.download, source_key, workspace
            )
            pages = await run_in_threadpool(self._parsing_task.parse, file_path, source_key)
        except DocumentProcessingError as e:
            logger.warning(
                f"{__name__}:load - Skipping document",
                extra={"source_key": source_key, "reason": e.message},
            )
            return None

        text = ParsingTask.join_pages(pages)
        if not text:
            logger.warning(
                f"{__name__}:load - Skipping document with no extractable text",
                extra={"source_key": source_key, "page_count": len(pages)},
            )
            return None

        return SourceDocument(
            source_key=source_key,
            text=text,
            summary=build_summary(source_key, text, self._summary_chars),
            page_count=len(pages),
        )

    async def load_many(
        self,
        source_keys: list[str],
        workspace: TempWorkspace,
    ) -> list[SourceDocument]:
        """
        Load several documents in input order.

        Duplicate keys are loaded once. Documents are fetched one after another
        so a large batch does not open many S3 transfers at once.

        Args:
            source_keys: S3 object keys
            workspace: Request workspace

        Returns:
            list[SourceDocument]: Successfully loaded documents (possibly empty)
        """
        unique_keys = list(dict.fromkeys(key for key in source_keys if key))
        documents: list[SourceDocument] = []

        for source_key in unique_keys:
            document = await self.load(source_key, workspace)
            if document is not None:
                documents.append(document)

        logger.info(
            f"{__name__}:load_many - Loaded {len(documents)}/{len(unique_keys)} documents",
            extra={"skipped": len(unique_keys) - len(documents)},
        )
        return documents
