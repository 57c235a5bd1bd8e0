"""
Study-aid generator.

Produces MCQs, flashcards and mind maps from prepared retrieval context in
two sequential calls: a topics call over the document summaries, then an
artifact call over the topics and the retrieved chunks. The artifact is
validated before it is returned.

Dependencies: langchain_core.prompts, notchy.core.generation
System role: Structured generation orchestration
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel

from notchy.core.exceptions import GenerationFailedError
from notchy.core.generation.generation_client import GenerationClient
from notchy.core.generation.prompts import (
    FLASHCARD_PROMPT,
    FLASHCARD_TOPICS_PROMPT,
    MCQ_PROMPT,
    MCQ_TOPICS_PROMPT,
    MINDMAP_PROMPT,
    MINDMAP_TOPICS_PROMPT,
)
from notchy.core.generation.response_validator import (
    FLASHCARD_VALIDATOR,
    MCQ_VALIDATOR,
    MINDMAP_VALIDATOR,
    ResponseValidator,
)
from notchy.core.rag_query.context_assembler import ContextAssembler
from notchy.core.rag_query.models import AssembledContext, PreparedContext

logger = logging.getLogger(__name__)

TOPICS_TEMPERATURE = 0.3


class ArtifactKind(str, Enum):
    MCQ = "mcq"
    FLASHCARDS = "flashcards"
    MINDMAP = "mindmap"


@dataclass(frozen=True)
class ArtifactSpec:
    """Prompts, sampling and validation of one artifact kind."""

    kind: ArtifactKind
    retrieval_query: str
    topics_prompt: ChatPromptTemplate
    artifact_prompt: ChatPromptTemplate
    validator: ResponseValidator
    temperature: float
    max_tokens: int


ARTIFACT_SPECS: dict[ArtifactKind, ArtifactSpec] = {
    ArtifactKind.MCQ: ArtifactSpec(
        kind=ArtifactKind.MCQ,
        retrieval_query="Generate multiple choice questions from this content",
        topics_prompt=MCQ_TOPICS_PROMPT,
        artifact_prompt=MCQ_PROMPT,
        validator=MCQ_VALIDATOR,
        temperature=0.3,
        max_tokens=2500,
    ),
    ArtifactKind.FLASHCARDS: ArtifactSpec(
        kind=ArtifactKind.FLASHCARDS,
        retrieval_query="Create flashcards from this content",
        topics_prompt=FLASHCARD_TOPICS_PROMPT,
        artifact_prompt=FLASHCARD_PROMPT,
        validator=FLASHCARD_VALIDATOR,
        temperature=0.5,
        max_tokens=2000,
    ),
    ArtifactKind.MINDMAP: ArtifactSpec(
        kind=ArtifactKind.MINDMAP,
        retrieval_query="Create a mind map from this content",
        topics_prompt=MINDMAP_TOPICS_PROMPT,
        artifact_prompt=MINDMAP_PROMPT,
        validator=MINDMAP_VALIDATOR,
        temperature=0.5,
        max_tokens=2000,
    ),
}


def parse_topics(payload: Any) -> list[str]:
    """
    Extract topic strings from the topics call output.

    Accepts `{"topics": [...]}`, an object holding a single array under
    another key, or a bare array. Topic entries that are objects are
    reduced to their first string value.

    Raises:
        GenerationFailedError: When no topic can be found
    """
    items: Any = None
    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict):
        if isinstance(payload.get("topics"), list):
            items = payload["topics"]
        else:
            arrays = [value for value in payload.values() if isinstance(value, list)]
            if len(arrays) == 1:
                items = arrays[0]

    topics: list[str] = []
    for item in items or []:
        if isinstance(item, dict):
            item = next((v for v in item.values() if isinstance(v, str)), "")
        text = str(item).strip()
        if text:
            topics.append(text)

    if not topics:
        raise GenerationFailedError("topics", "Could not extract topics from the content")
    return topics


class StudyAidGenerator:
    """Generate validated study aids from prepared context."""

    def __init__(
        self,
        client: GenerationClient,
        assembler: ContextAssembler,
        topics_temperature: float = TOPICS_TEMPERATURE,
    ) -> None:
        self._client = client
        self._assembler = assembler
        self._topics_temperature = topics_temperature

    @staticmethod
    def spec_for(kind: ArtifactKind) -> ArtifactSpec:
        return ARTIFACT_SPECS[kind]

    async def extract_topics(self, spec: ArtifactSpec, assembled: AssembledContext) -> list[str]:
        """Run the topics call for an artifact kind."""
        messages = spec.topics_prompt.format_messages(summaries=assembled.summaries)
        payload = await self._client.complete_json(
            messages,
            temperature=self._topics_temperature,
            step="topics",
        )
        topics = parse_topics(payload)
        logger.info(
            f"{__name__}:extract_topics - Identified {len(topics)} topics",
            extra={"artifact": spec.kind.value},
        )
        return topics

    async def generate(self, kind: ArtifactKind, prepared: PreparedContext) -> BaseModel:
        """
        Generate and validate one artifact.

        Args:
            kind: Artifact kind
            prepared: Documents and retrieved chunks of the request

        Returns:
            BaseModel: MCQSet, FlashcardDeck or MindMap

        Raises:
            GenerationFailedError: When a call returns no content or invalid JSON
            ArtifactValidationError: When the artifact breaks its schema
        """
        spec = self.spec_for(kind)
        assembled = self._assembler.assemble(prepared.documents, prepared.retrieved)

        topics = await self.extract_topics(spec, assembled)

        messages = spec.artifact_prompt.format_messages(
            topics="\n".join(f"- {topic}" for topic in topics),
            context=assembled.context,
        )
        payload = await self._client.complete_json(
            messages,
            temperature=spec.temperature,
            max_tokens=spec.max_tokens,
            step=kind.value,
        )

        artifact = spec.validator.validate_or_raise(payload)
        logger.info(
            f"{__name__}:generate - {kind.value} generated successfully",
            extra={"documents": len(prepared.documents), "chunks": len(prepared.retrieved)},
        )
        return artifact
