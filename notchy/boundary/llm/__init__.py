"""Language model boundary: OpenAI chat and embedding model construction."""

from notchy.boundary.llm.openai_factory import get_chat_model, get_embeddings

__all__ = ["get_chat_model", "get_embeddings"]
