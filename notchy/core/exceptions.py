"""
Exception hierarchy for the Notchy study-aid backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class NotchyException(Exception):
    """Base exception for all Notchy application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidRequestError(NotchyException):
    """Raised when request input is missing or malformed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ChatNotFoundError(NotchyException):
    """Raised when a chat record cannot be found."""

    def __init__(self, chat_id: int, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["chat_id"] = chat_id
        self.chat_id = chat_id
        super().__init__("Chat not found", details)


class DocumentProcessingError(NotchyException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        source_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            source_key: Storage key of the document that failed
            details: Additional context
        """
        details = details or {}
        if source_key:
            details["source_key"] = source_key
        self.source_key = source_key
        super().__init__(message, details)


class S3DownloadError(DocumentProcessingError):
    """Raised when a document cannot be fetched from the object store."""


class ParsingError(DocumentProcessingError):
    """Raised when text extraction fails."""


class EmbeddingError(DocumentProcessingError):
    """Raised when embedding generation fails."""


class VectorStoreError(NotchyException):
    """Raised when vector index operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class GenerationError(NotchyException):
    """Base exception for model generation failures surfaced to the caller."""

    error_label = "Generation Failed"

    @property
    def reason(self) -> str:
        """Reason string returned to the client in the `details` field."""
        return self.message


class GenerationFailedError(GenerationError):
    """Raised when a model call returns no content or unparsable JSON."""

    def __init__(
        self,
        step: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["step"] = step
        self.step = step
        super().__init__(reason, details)


class ArtifactValidationError(GenerationError):
    """Raised when model output does not satisfy the artifact schema."""

    def __init__(
        self,
        artifact: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["artifact"] = artifact
        self.artifact = artifact
        super().__init__(reason, details)

    @property
    def error_label(self) -> str:  # type: ignore[override]
        return f"Failed to generate valid {self.artifact}"


class NoDocumentContentError(GenerationError):
    """Raised when none of the requested documents yielded any text."""

    def __init__(self, source_keys: list[str]) -> None:
        super().__init__(
            "No content could be extracted from the provided documents",
            {"source_keys": list(source_keys)},
        )


class PipelineTimeoutError(NotchyException):
    """Raised when a request exceeds its wall-clock budget."""

    def __init__(self, budget_seconds: float, stage: str | None = None) -> None:
        details: dict[str, Any] = {"budget_seconds": budget_seconds}
        if stage:
            details["stage"] = stage
        super().__init__(f"Request exceeded {budget_seconds:g}s budget", details)
