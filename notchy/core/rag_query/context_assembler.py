"""
Context assembler.

Renders document summaries and retrieved chunks into prompt text. Chunks
keep retrieval order and are never deduplicated. Truncation is off unless
a character budget is configured.

Dependencies: notchy.core.rag_query.models
System role: Prompt context construction
"""

import logging

from notchy.core.document_processing.models import SourceDocument
from notchy.core.rag_query.models import AssembledContext, RetrievedChunk

logger = logging.getLogger(__name__)

CHAT_SYSTEM_PROMPT = """You are a helpful AI assistant analyzing multiple PDF documents. Here's what you know about the documents:

{summaries}

When answering questions, use the following relevant context from all documents:
{context}

If asked about the topic or content of the PDFs, use the summaries above to provide an overview. For specific questions, use the relevant context provided. Always mention which document you're referencing in your answers. If you can't find the answer in any of the documents, say so."""


def render_chunk(chunk: RetrievedChunk) -> str:
    return f"[From {chunk.display_name}]: {chunk.text}"


class ContextAssembler:
    """Join summaries and retrieved chunks into prompt sections."""

    def __init__(self, max_context_chars: int | None = None) -> None:
        """
        Args:
            max_context_chars: Optional cap on the rendered context section.
                Trailing chunks that would exceed it are dropped.
        """
        if max_context_chars is not None and max_context_chars < 1:
            raise ValueError("max_context_chars must be positive")
        self._max_context_chars = max_context_chars

    def assemble(
        self,
        documents: list[SourceDocument],
        retrieved: list[RetrievedChunk],
    ) -> AssembledContext:
        """
        Render summaries and context.

        Args:
            documents: Loaded documents, in request order
            retrieved: Retrieved chunks, in retrieval order

        Returns:
            AssembledContext: Summaries and context joined by blank lines
        """
        summaries = "\n\n".join(document.summary for document in documents)

        rendered = [render_chunk(chunk) for chunk in retrieved]
        kept = rendered
        if self._max_context_chars is not None:
            kept = []
            used = 0
            for block in rendered:
                cost = len(block) + (2 if kept else 0)
                if used + cost > self._max_context_chars:
                    break
                kept.append(block)
                used += cost

        dropped = len(rendered) - len(kept)
        if dropped:
            logger.warning(
                f"{__name__}:assemble - Context truncated",
                extra={
                    "dropped_chunks": dropped,
                    "kept_chunks": len(kept),
                    "max_context_chars": self._max_context_chars,
                },
            )

        return AssembledContext(
            summaries=summaries,
            context="\n\n".join(kept),
            dropped_chunks=dropped,
        )


def render_chat_system_prompt(assembled: AssembledContext) -> str:
    """Build the single system prompt used for a chat turn."""
    return CHAT_SYSTEM_PROMPT.format(
        summaries=assembled.summaries,
        context=assembled.context,
    )
