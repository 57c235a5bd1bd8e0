"""
Document parsing task using LangChain PyPDFLoader.

Extracts page-level text from PDF documents.

Dependencies: langchain_community.document_loaders, pypdf
System role: Text extraction stage of document loading
"""

from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader

from notchy.core.exceptions import ParsingError


class ParsingTask:
    """Extract page texts from PDF documents."""

    def parse(self, file_path: str | Path, source_key: str | None = None) -> list[str]:
        """
        Extract the text of every page.

        Args:
            file_path: Path to the PDF document
            source_key: Storage key, attached to raised errors

        Returns:
            list[str]: Raw page texts in page order (may contain blanks)

        Raises:
            ParsingError: When the file is missing or cannot be read as a PDF
        """
        path = Path(file_path)
        if not path.exists():
            raise ParsingError(f"File not found: {path}", source_key)

        try:
            pages = PyPDFLoader(str(path)).load()
        except Exception as e:
            raise ParsingError(f"Failed to parse PDF: {e}", source_key) from e

        return [page.page_content or "" for page in pages]

    @staticmethod
    def join_pages(pages: list[str]) -> str:
        """Trim each page, drop blank pages and join the rest with blank lines."""
        return "\n\n".join(text for text in (page.strip() for page in pages) if text)
