"""
Generation package.

Chat streaming, structured generation and artifact validation.
"""

from notchy.core.generation.chat_stream import ChatStream, message_text
from notchy.core.generation.generation_client import GenerationClient, to_chat_messages
from notchy.core.generation.response_validator import (
    FLASHCARD_VALIDATOR,
    MCQ_VALIDATOR,
    MINDMAP_VALIDATOR,
    Err,
    Ok,
    ResponseValidator,
    ValidationFailure,
)
from notchy.core.generation.study_aid_generator import (
    ARTIFACT_SPECS,
    ArtifactKind,
    StudyAidGenerator,
    parse_topics,
)

__all__ = [
    "ARTIFACT_SPECS",
    "ArtifactKind",
    "ChatStream",
    "Err",
    "FLASHCARD_VALIDATOR",
    "GenerationClient",
    "MCQ_VALIDATOR",
    "MINDMAP_VALIDATOR",
    "Ok",
    "ResponseValidator",
    "StudyAidGenerator",
    "ValidationFailure",
    "message_text",
    "parse_topics",
    "to_chat_messages",
]
