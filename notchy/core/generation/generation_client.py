"""
Generation client.

Thin layer over LangChain chat models. Chat answers are streamed through
`ChatStream`; structured artifacts are single-shot calls in JSON-object
mode whose output is parsed here. Empty output and unparsable JSON fail
with `GenerationFailedError`. Nothing is retried.

Dependencies: langchain_core, json
System role: Model invocation for chat, structured and text generation
"""

import json
import logging
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from notchy.core.exceptions import GenerationFailedError
from notchy.core.generation.chat_stream import ChatStream, OnComplete, message_text
from notchy.core.rag_query.budget import RequestBudget
from notchy.models.chat import ChatMessageIn
from notchy.observability.log_utils import preview

logger = logging.getLogger(__name__)

JSON_RESPONSE_FORMAT = {"type": "json_object"}


def to_chat_messages(system_prompt: str, history: list[ChatMessageIn]) -> list[BaseMessage]:
    """
    Build the model prompt for a chat turn.

    Messages with role "user" stay user messages; every other role is sent
    as an assistant message.
    """
    messages: list[BaseMessage] = [SystemMessage(content=system_prompt)]
    for message in history:
        if message.is_user:
            messages.append(HumanMessage(content=message.content))
        else:
            messages.append(AIMessage(content=message.content))
    return messages


class GenerationClient:
    """Invoke chat models for streamed, JSON and plain-text generation."""

    def __init__(
        self,
        chat_model: BaseChatModel,
        structured_model: BaseChatModel | None = None,
        chat_temperature: float = 0.7,
        chat_max_tokens: int = 500,
    ) -> None:
        """
        Args:
            chat_model: Model used for streamed chat answers
            structured_model: Model used for JSON and text calls (defaults to chat_model)
            chat_temperature: Sampling temperature of chat answers
            chat_max_tokens: Token cap of chat answers
        """
        self._chat_model = chat_model
        self._structured_model = structured_model or chat_model
        self._chat_temperature = chat_temperature
        self._chat_max_tokens = chat_max_tokens

    def stream_chat(
        self,
        system_prompt: str,
        history: list[ChatMessageIn],
        on_complete: OnComplete | None = None,
        budget: RequestBudget | None = None,
    ) -> ChatStream:
        """
        Prepare a streamed chat answer.

        Args:
            system_prompt: Assembled system prompt
            history: Full conversation, oldest first
            on_complete: Hook receiving the full answer
            budget: Request budget

        Returns:
            ChatStream: Lazy stream; the model is called when iteration starts
        """
        model = self._chat_model.bind(
            temperature=self._chat_temperature,
            max_tokens=self._chat_max_tokens,
        )
        return ChatStream(
            model=model,
            messages=to_chat_messages(system_prompt, history),
            on_complete=on_complete,
            budget=budget,
        )

    async def complete_json(
        self,
        messages: list[BaseMessage],
        temperature: float,
        max_tokens: int | None = None,
        step: str = "generation",
    ) -> Any:
        """
        Run one JSON-object mode call and parse its output.

        Args:
            messages: Prompt messages
            temperature: Sampling temperature
            max_tokens: Optional token cap
            step: Step name reported on failure ("topics", "mcq", ...)

        Returns:
            Any: Parsed JSON value

        Raises:
            GenerationFailedError: When the model returns no content or invalid JSON
        """
        bind_kwargs: dict[str, Any] = {
            "response_format": JSON_RESPONSE_FORMAT,
            "temperature": temperature,
        }
        if max_tokens is not None:
            bind_kwargs["max_tokens"] = max_tokens

        response = await self._structured_model.bind(**bind_kwargs).ainvoke(messages)
        content = message_text(response.content).strip()

        if not content:
            logger.error(f"{__name__}:complete_json - Empty response", extra={"step": step})
            raise GenerationFailedError(step, "The model response did not contain any content")

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(
                f"{__name__}:complete_json - Invalid JSON",
                extra={"step": step, "response_preview": preview(content, 200)},
            )
            raise GenerationFailedError(step, f"The model returned invalid JSON: {e.msg}") from e

        logger.info(
            f"{__name__}:complete_json - OK",
            extra={"step": step, "response_len": len(content)},
        )
        return parsed

    async def complete_text(
        self,
        messages: list[BaseMessage],
        temperature: float,
        max_tokens: int | None = None,
    ) -> str:
        """
        Run one plain-text call.

        Returns:
            str: Stripped model output (possibly empty)
        """
        bind_kwargs: dict[str, Any] = {"temperature": temperature}
        if max_tokens is not None:
            bind_kwargs["max_tokens"] = max_tokens
        response = await self._structured_model.bind(**bind_kwargs).ainvoke(messages)
        return message_text(response.content).strip()
