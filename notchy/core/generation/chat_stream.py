"""
Streamed chat answer.

`ChatStream` is an async iterable of text deltas. Nothing is sent to the
model until iteration starts, and every new iteration starts a fresh
generation from an empty buffer. When an iteration runs to the end, the
completion hook receives exactly the concatenation of the deltas that were
yielded. An iteration that fails, times out or is abandoned never calls
the hook.

Dependencies: langchain_core.language_models
System role: Token relay between the chat model and the HTTP response
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_core.runnables import Runnable

from notchy.core.rag_query.budget import RequestBudget

logger = logging.getLogger(__name__)

OnComplete = Callable[[str], Awaitable[None]]

_END = object()


def message_text(content: Any) -> str:
    """Flatten message content (plain string or list of content parts) to text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str)
            else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content or "")


class ChatStream:
    """Lazy, restartable stream of chat deltas with a completion hook."""

    def __init__(
        self,
        model: BaseChatModel | Runnable,
        messages: list[BaseMessage],
        on_complete: OnComplete | None = None,
        budget: RequestBudget | None = None,
    ) -> None:
        """
        Args:
            model: Chat model (or a bound runnable over one)
            messages: Full prompt: system message followed by the history
            on_complete: Awaited with the full text after a complete iteration
            budget: Request budget; each delta must arrive before it runs out
        """
        self._model = model
        self._messages = list(messages)
        self._on_complete = on_complete
        self._budget = budget

    @property
    def messages(self) -> list[BaseMessage]:
        return list(self._messages)

    def __aiter__(self) -> AsyncIterator[str]:
        return self._generate()

    async def _next_chunk(self, iterator: AsyncIterator[Any]) -> Any:
        if self._budget is None:
            return await anext(iterator, _END)
        return await self._budget.run(anext(iterator, _END), "chat_stream")

    async def _generate(self) -> AsyncIterator[str]:
        parts: list[str] = []
        iterator = self._model.astream(self._messages).__aiter__()
        try:
            while True:
                chunk = await self._next_chunk(iterator)
                if chunk is _END:
                    break
                text = message_text(getattr(chunk, "content", chunk))
                if not text:
                    continue
                parts.append(text)
                yield text
        finally:
            aclose = getattr(iterator, "aclose", None)
            if aclose is not None:
                await aclose()

        full_text = "".join(parts)
        logger.info(
            f"{__name__}:stream - Completed",
            extra={"deltas": len(parts), "answer_len": len(full_text)},
        )
        if self._on_complete is not None:
            await self._on_complete(full_text)

    async def collect(self) -> str:
        """Consume one full iteration and return the concatenated text."""
        return "".join([delta async for delta in self])
