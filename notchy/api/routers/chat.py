"""
Chat API endpoint.

Routes: POST /generate-chat-turn

Streams the answer as plain text. Errors raised before the first byte is
sent are returned as JSON error bodies; failures after that can only end
the stream.

Dependencies: notchy.application.services.chat_service
System role: Chat streaming HTTP API
"""

import logging
from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from notchy.api.deps import get_chat_service
from notchy.api.routers.router_utils import handle_pipeline_errors
from notchy.application.services import ChatService
from notchy.core.generation import ChatStream
from notchy.models.chat import ChatTurnRequest
from notchy.models.errors import ErrorResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["chat"])


async def relay_stream(stream: ChatStream, chat_id: int | None) -> AsyncIterator[str]:
    """Forward deltas to the response body, logging failures mid-stream."""
    try:
        async for delta in stream:
            yield delta
    except Exception as e:
        logger.error(
            f"{__name__}:relay_stream - Stream aborted",
            extra={"chat_id": chat_id, "error_type": type(e).__name__, "error": str(e)},
        )
        raise


@router.post(
    "/generate-chat-turn",
    response_class=StreamingResponse,
    responses={
        200: {"content": {"text/plain": {}}, "description": "Streamed answer"},
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
@handle_pipeline_errors("Internal server error")
async def generate_chat_turn(
    request: ChatTurnRequest,
    chat_service: ChatService = Depends(get_chat_service),
):
    """
    Answer the last message of a conversation over the selected documents.

    Args:
        request: Messages, chat id and file keys
        chat_service: Injected chat service

    Returns:
        StreamingResponse: text/plain token stream
    """
    stream = await chat_service.start_turn(request)
    return StreamingResponse(
        relay_stream(stream, request.chat_id),
        media_type="text/plain; charset=utf-8",
    )
