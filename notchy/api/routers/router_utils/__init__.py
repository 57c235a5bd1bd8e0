"""Router utilities: error mapping."""

from notchy.api.routers.router_utils.error_handling import (
    error_response,
    handle_pipeline_errors,
    request_validation_exception_handler,
)

__all__ = [
    "error_response",
    "handle_pipeline_errors",
    "request_validation_exception_handler",
]
