"""
API and artifact models.

Exports request bodies, chat records, artifacts and the error body.
"""

from notchy.models.artifacts import (
    Flashcard,
    FlashcardDeck,
    MCQQuestion,
    MCQSet,
    MindMap,
    MindMapNode,
)
from notchy.models.chat import ChatMessageIn, ChatRecord, ChatTurnRequest, StoredMessage
from notchy.models.errors import ErrorResponse, utc_timestamp
from notchy.models.requests import FileKeysRequest, SummarizeRequest, SummaryResponse

__all__ = [
    "ChatMessageIn",
    "ChatRecord",
    "ChatTurnRequest",
    "ErrorResponse",
    "FileKeysRequest",
    "Flashcard",
    "FlashcardDeck",
    "MCQQuestion",
    "MCQSet",
    "MindMap",
    "MindMapNode",
    "StoredMessage",
    "SummarizeRequest",
    "SummaryResponse",
    "utc_timestamp",
]
