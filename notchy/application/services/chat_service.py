"""
Chat service for document-grounded conversation.

Orchestrates one chat turn: chat resolution, document preparation,
prompt assembly, message persistence and the streamed answer.

Dependencies: notchy.core.rag_query, notchy.core.generation, notchy.application.adapters
System role: Chat service orchestration layer
"""

import logging

from notchy.application.adapters.chat_repository import ChatRepository
from notchy.core.exceptions import ChatNotFoundError, InvalidRequestError
from notchy.core.generation import ChatStream, GenerationClient
from notchy.core.rag_query import (
    ContextAssembler,
    RagPipeline,
    RequestBudget,
    render_chat_system_prompt,
)
from notchy.models.chat import ChatRecord, ChatTurnRequest
from notchy.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class ChatService:
    """
    Chat service for streamed answers over selected documents.

    Persists the user's message before streaming starts and the assistant's
    answer once the stream has been fully delivered.
    """

    def __init__(
        self,
        pipeline: RagPipeline,
        client: GenerationClient,
        assembler: ContextAssembler,
        repository: ChatRepository,
        top_k: int = 3,
        timeout_seconds: float = 60.0,
    ) -> None:
        """
        Initialize chat service.

        Args:
            pipeline: RAG preparation pipeline
            client: Generation client
            assembler: Context assembler
            repository: Chat persistence
            top_k: Chunks retrieved per document
            timeout_seconds: Request budget
        """
        self.pipeline = pipeline
        self.client = client
        self.assembler = assembler
        self.repository = repository
        self.top_k = top_k
        self.timeout_seconds = timeout_seconds

    async def resolve_chat(self, request: ChatTurnRequest) -> tuple[ChatRecord, list[str]]:
        """
        Find or create the chat and decide which documents to use.

        Without a chat id, a chat is created for the request's file keys.
        When the request names no file keys, the chat's stored keys are used.

        Returns:
            tuple[ChatRecord, list[str]]: Chat record and file keys

        Raises:
            InvalidRequestError: When neither a chat id nor file keys are given
            ChatNotFoundError: When the chat id is unknown
        """
        file_keys = request.resolved_file_keys()

        if request.chat_id is None:
            if not file_keys:
                raise InvalidRequestError("chatId or fileKeys are required", field="chatId")
            chat = await self.repository.create_chat(file_keys)
            logger.info(
                f"{__name__}:resolve_chat - Created chat",
                extra={"chat_id": chat.id, "documents": len(file_keys)},
            )
        else:
            chat = await self.repository.get_chat(request.chat_id)
            if chat is None:
                raise ChatNotFoundError(request.chat_id)

        keys = file_keys or list(chat.file_keys)
        if not keys:
            raise InvalidRequestError("No file keys provided", field="fileKeys")
        return chat, keys

    async def _save_message(self, chat_id: int, role: str, content: str) -> None:
        try:
            await self.repository.add_message(chat_id, role, content)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"Error saving {role} message",
                e,
                chat_id=chat_id,
                content_len=len(content),
            )

    async def start_turn(self, request: ChatTurnRequest) -> ChatStream:
        """
        Prepare a chat turn and return its answer stream.

        Flow:
        1. Resolve chat and file keys
        2. Load, index and retrieve context for the last message
        3. Assemble the system prompt
        4. Store the user message
        5. Return the stream; the assistant message is stored when it completes

        Args:
            request: Validated chat-turn body

        Returns:
            ChatStream: Answer deltas, consumed by the HTTP response

        Raises:
            InvalidRequestError, ChatNotFoundError, NoDocumentContentError,
            EmbeddingError, VectorStoreError, PipelineTimeoutError
        """
        budget = RequestBudget(self.timeout_seconds)
        chat, file_keys = await self.resolve_chat(request)
        question = request.last_message.content

        prepared = await self.pipeline.prepare(file_keys, question, self.top_k, budget)
        assembled = self.assembler.assemble(prepared.documents, prepared.retrieved)
        system_prompt = render_chat_system_prompt(assembled)

        await self._save_message(chat.id, "user", question)

        async def on_complete(full_text: str) -> None:
            await self._save_message(chat.id, "assistant", full_text)

        logger.info(
            f"{__name__}:start_turn - Streaming answer",
            extra={
                "chat_id": chat.id,
                "history_len": len(request.messages),
                "prompt_len": len(system_prompt),
            },
        )
        return self.client.stream_chat(
            system_prompt,
            request.messages,
            on_complete=on_complete,
            budget=budget,
        )
