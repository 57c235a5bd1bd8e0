"""
Chat models.

Request body of the chat-turn endpoint and the stored chat record.

Dependencies: pydantic
System role: Chat request and persistence schemas
"""

from datetime import datetime, timezone
from typing import Annotated, Literal

from pydantic import AfterValidator, AliasChoices, BaseModel, Field, StrictStr

from notchy.models.requests import FileKeysRequest


def _non_empty(value: str) -> str:
    if not value:
        raise ValueError("must be a non-empty string")
    return value


class ChatMessageIn(BaseModel):
    """One message of the conversation sent by the client."""

    role: Annotated[StrictStr, AfterValidator(_non_empty)]
    content: Annotated[StrictStr, AfterValidator(_non_empty)]

    @property
    def is_user(self) -> bool:
        return self.role == "user"


class ChatTurnRequest(FileKeysRequest):
    """Body of POST /generate-chat-turn."""

    messages: list[ChatMessageIn] = Field(min_length=1)
    chat_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("chatId", "id"),
    )

    @property
    def last_message(self) -> ChatMessageIn:
        return self.messages[-1]


class StoredMessage(BaseModel):
    """Message persisted for a chat."""

    chat_id: int
    role: Literal["user", "assistant"]
    content: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ChatRecord(BaseModel):
    """Chat bound to the documents it was created for."""

    id: int
    file_keys: list[str] = Field(default_factory=list)
    pdf_name: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
