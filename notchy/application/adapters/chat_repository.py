"""
Chat repository.

Chat records and their messages are owned by an external store. The
service talks to it through `ChatRepository`; `InMemoryChatRepository`
keeps everything in process memory so the service runs stand-alone.

Dependencies: asyncio, notchy.models.chat
System role: Chat persistence adapter
"""

import asyncio
from typing import Protocol

from notchy.core.document_processing.models import display_name_for
from notchy.models.chat import ChatRecord, StoredMessage


class ChatRepository(Protocol):
    """Persistence operations required by the chat service."""

    async def create_chat(self, file_keys: list[str]) -> ChatRecord: ...

    async def get_chat(self, chat_id: int) -> ChatRecord | None: ...

    async def add_message(self, chat_id: int, role: str, content: str) -> StoredMessage: ...

    async def list_messages(self, chat_id: int) -> list[StoredMessage]: ...


class InMemoryChatRepository:
    """Process-local chat store."""

    def __init__(self) -> None:
        self._chats: dict[int, ChatRecord] = {}
        self._messages: dict[int, list[StoredMessage]] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def create_chat(self, file_keys: list[str]) -> ChatRecord:
        """
        Create a chat bound to the given documents.

        Args:
            file_keys: Storage keys of the chat's documents

        Returns:
            ChatRecord: New record with a fresh integer id
        """
        async with self._lock:
            record = ChatRecord(
                id=self._next_id,
                file_keys=list(file_keys),
                pdf_name=", ".join(display_name_for(key) for key in file_keys),
            )
            self._chats[record.id] = record
            self._messages[record.id] = []
            self._next_id += 1
        return record

    async def get_chat(self, chat_id: int) -> ChatRecord | None:
        return self._chats.get(chat_id)

    async def add_message(self, chat_id: int, role: str, content: str) -> StoredMessage:
        """
        Append a message to a chat.

        Raises:
            ValueError: If the chat does not exist
        """
        if chat_id not in self._chats:
            raise ValueError(f"Chat {chat_id} does not exist")
        message = StoredMessage(chat_id=chat_id, role=role, content=content)
        self._messages[chat_id].append(message)
        return message

    async def list_messages(self, chat_id: int) -> list[StoredMessage]:
        return list(self._messages.get(chat_id, []))
