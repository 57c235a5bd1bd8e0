"""
RAG query package.

Retrieval, prompt context assembly and the request budget.
"""

from notchy.core.rag_query.budget import RequestBudget
from notchy.core.rag_query.context_assembler import (
    ContextAssembler,
    render_chat_system_prompt,
)
from notchy.core.rag_query.models import AssembledContext, PreparedContext, RetrievedChunk
from notchy.core.rag_query.pipeline import RagPipeline
from notchy.core.rag_query.retriever import DocumentRetriever

__all__ = [
    "AssembledContext",
    "ContextAssembler",
    "DocumentRetriever",
    "PreparedContext",
    "RagPipeline",
    "RequestBudget",
    "RetrievedChunk",
    "render_chat_system_prompt",
]
