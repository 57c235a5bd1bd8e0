"""
Pipeline error handling utilities.

Decorator and exception handler that turn pipeline exceptions into the
common error body `{error, details?, timestamp?}`.

Status mapping:
- InvalidRequestError / request validation: 400
- ChatNotFoundError: 404
- GenerationError (no content, invalid JSON, invalid artifact): 500 with details
- Embedding, vector index and unexpected errors: 500 with a generic message
- PipelineTimeoutError: 504
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from notchy.core.exceptions import (
    ChatNotFoundError,
    GenerationError,
    InvalidRequestError,
    PipelineTimeoutError,
)
from notchy.core.generation.response_validator import format_location
from notchy.models.errors import ErrorResponse, utc_timestamp

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def error_response(
    status_code: int,
    error: str,
    details: str | None = None,
    timestamp: bool = False,
) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        details=details,
        timestamp=utc_timestamp() if timestamp else None,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def handle_pipeline_errors(generic_message: str) -> Callable[[F], F]:
    """
    Decorator mapping pipeline exceptions to error responses.

    Args:
        generic_message: Error text for failures whose cause is not exposed

    Centralizes:
    - Logging of errors with context
    - Mapping specific exceptions to HTTP status codes
    - Uniform error bodies
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)

            except InvalidRequestError as e:
                logger.warning("Invalid request", extra={"error": str(e)})
                return error_response(status.HTTP_400_BAD_REQUEST, e.message)

            except ChatNotFoundError as e:
                logger.warning("Chat not found", extra={"chat_id": e.chat_id})
                return error_response(status.HTTP_404_NOT_FOUND, e.message)

            except GenerationError as e:
                logger.error(
                    "Generation failed",
                    extra={"error_label": e.error_label, "error": str(e)},
                )
                return error_response(
                    status.HTTP_500_INTERNAL_SERVER_ERROR,
                    e.error_label,
                    details=e.reason,
                    timestamp=True,
                )

            except PipelineTimeoutError as e:
                logger.error("Request timed out", extra={"error": str(e)})
                return error_response(
                    status.HTTP_504_GATEWAY_TIMEOUT,
                    "Request timed out",
                    details=e.message,
                    timestamp=True,
                )

            except Exception as e:
                logger.exception(
                    "Unexpected failure in pipeline operation",
                    extra={"error_type": type(e).__name__, "error": str(e)},
                )
                return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, generic_message)

        return wrapper  # type: ignore

    return decorator


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = tuple(error.get("loc", ()))
        if loc and loc[0] == "body":
            loc = loc[1:]
        parts.append(f"{format_location(loc, 'body')}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Return 400 with the common error body for malformed request bodies."""
    details = _describe_validation_errors(exc)
    logger.warning(
        "Request validation failed",
        extra={"path": request.url.path, "details": details},
    )
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", details=details)
