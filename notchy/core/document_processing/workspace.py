"""
Request-scoped temporary workspace.

Downloaded PDFs live only for the duration of one request. The workspace
registers every file handed out and removes all of them, plus its directory,
on every exit path of the `with` block.

Dependencies: tempfile, shutil
System role: Temp file lifecycle for the document loader
"""

import logging
import shutil
import tempfile
import uuid
from pathlib import Path

logger = logging.getLogger(__name__)


class TempWorkspace:
    """Temp directory whose files are deleted exactly once on exit."""

    def __init__(self, prefix: str = "notchy_") -> None:
        self._prefix = prefix
        self._dir: Path | None = None
        self._files: list[Path] = []
        self._closed = False

    @property
    def path(self) -> Path:
        """Workspace directory, created on first use."""
        if self._closed:
            raise RuntimeError("Workspace already cleaned up")
        if self._dir is None:
            self._dir = Path(tempfile.mkdtemp(prefix=self._prefix))
        return self._dir

    @property
    def files(self) -> list[Path]:
        return list(self._files)

    @property
    def closed(self) -> bool:
        return self._closed

    def new_file_path(self, filename: str) -> Path:
        """
        Reserve a unique path for a file inside the workspace.

        Args:
            filename: Original file name (only its final component is kept)

        Returns:
            Path: Registered path; the file itself is not created
        """
        name = Path(filename).name or "document"
        path = self.path / f"{uuid.uuid4().hex[:8]}-{name}"
        self._files.append(path)
        return path

    def cleanup(self) -> int:
        """
        Delete every registered file and the workspace directory.

        Safe to call repeatedly; only the first call does any work.

        Returns:
            int: Number of files removed by this call
        """
        if self._closed:
            return 0
        self._closed = True

        removed = 0
        for file_path in self._files:
            try:
                file_path.unlink()
                removed += 1
            except FileNotFoundError:
                continue
            except OSError as e:
                logger.warning(
                    "Failed to delete temp file",
                    extra={"path": str(file_path), "error": str(e)},
                )

        if self._dir is not None:
            shutil.rmtree(self._dir, ignore_errors=True)

        logger.debug(
            "Temp workspace cleaned up",
            extra={"files_removed": removed, "directory": str(self._dir)},
        )
        return removed

    def __enter__(self) -> "TempWorkspace":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    async def __aenter__(self) -> "TempWorkspace":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.cleanup()
