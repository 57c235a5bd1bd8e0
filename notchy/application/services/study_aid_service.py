"""
Study-aid service.

Runs the shared preparation pipeline with the artifact's retrieval query,
then generates the artifact, all inside one request budget. Also hosts
the plain text summarizer.

Dependencies: notchy.core.rag_query, notchy.core.generation
System role: Study-aid orchestration layer
"""

import logging

from pydantic import BaseModel

from notchy.core.exceptions import InvalidRequestError
from notchy.core.generation import ArtifactKind, GenerationClient, StudyAidGenerator
from notchy.core.generation.prompts import SUMMARIZE_PROMPT
from notchy.core.rag_query import RagPipeline, RequestBudget
from notchy.models.artifacts import FlashcardDeck, MCQSet, MindMap

logger = logging.getLogger(__name__)

SUMMARY_FALLBACK = "Failed to generate summary"
SUMMARY_TEMPERATURE = 0.5
SUMMARY_MAX_TOKENS = 150


class StudyAidService:
    """Generate MCQs, flashcards, mind maps and summaries."""

    def __init__(
        self,
        pipeline: RagPipeline,
        generator: StudyAidGenerator,
        client: GenerationClient,
        top_k: int = 5,
        timeout_seconds: float = 60.0,
    ) -> None:
        """
        Initialize study-aid service.

        Args:
            pipeline: RAG preparation pipeline
            generator: Study-aid generator
            client: Generation client (summaries)
            top_k: Chunks retrieved per document
            timeout_seconds: Request budget
        """
        self.pipeline = pipeline
        self.generator = generator
        self.client = client
        self.top_k = top_k
        self.timeout_seconds = timeout_seconds

    async def generate(self, kind: ArtifactKind, file_keys: list[str]) -> BaseModel:
        """
        Generate one validated artifact over the given documents.

        Raises:
            InvalidRequestError: When no file keys are given
            NoDocumentContentError: When no document yielded text
            GenerationFailedError, ArtifactValidationError: On bad model output
            PipelineTimeoutError: When the request budget runs out
        """
        if not file_keys:
            raise InvalidRequestError("No file keys provided", field="fileKeys")

        budget = RequestBudget(self.timeout_seconds)
        spec = self.generator.spec_for(kind)
        logger.info(
            f"{__name__}:generate - Processing files",
            extra={"artifact": kind.value, "documents": len(file_keys)},
        )

        prepared = await self.pipeline.prepare(file_keys, spec.retrieval_query, self.top_k, budget)
        return await budget.run(self.generator.generate(kind, prepared), f"generate_{kind.value}")

    async def generate_mcq(self, file_keys: list[str]) -> MCQSet:
        return await self.generate(ArtifactKind.MCQ, file_keys)

    async def generate_flashcards(self, file_keys: list[str]) -> FlashcardDeck:
        return await self.generate(ArtifactKind.FLASHCARDS, file_keys)

    async def generate_mindmap(self, file_keys: list[str]) -> MindMap:
        return await self.generate(ArtifactKind.MINDMAP, file_keys)

    async def summarize(self, text: str) -> str:
        """
        Summarize free text in a few sentences.

        Args:
            text: Text to summarize

        Returns:
            str: Summary, or a fixed fallback when the model returns nothing

        Raises:
            InvalidRequestError: When text is empty
            PipelineTimeoutError: When the request budget runs out
        """
        if not text or not text.strip():
            raise InvalidRequestError("Text is required", field="text")

        budget = RequestBudget(self.timeout_seconds)
        messages = SUMMARIZE_PROMPT.format_messages(text=text)
        summary = await budget.run(
            self.client.complete_text(
                messages,
                temperature=SUMMARY_TEMPERATURE,
                max_tokens=SUMMARY_MAX_TOKENS,
            ),
            "summarize",
        )
        if not summary:
            logger.warning(f"{__name__}:summarize - Empty summary, using fallback")
            return SUMMARY_FALLBACK
        return summary
