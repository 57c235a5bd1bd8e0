"""
OpenAI model factory.

Builds the LangChain chat and embedding models used by the pipeline.
Models are constructed once per process by the service cache.

Dependencies: langchain_openai
System role: Language model instantiation
"""

import logging

from langchain_openai import ChatOpenAI, OpenAIEmbeddings

from notchy.configs import OpenAISettings

logger = logging.getLogger(__name__)


def get_chat_model(settings: OpenAISettings, structured: bool = False) -> ChatOpenAI:
    """
    Build a chat model.

    Sampling parameters are bound per call, so one instance serves both the
    streamed chat and the structured generation paths.

    Args:
        settings: OpenAI settings
        structured: Use the structured-generation model id instead of the chat one

    Returns:
        ChatOpenAI: Configured chat model
    """
    model_id = settings.structured_model if structured else settings.chat_model
    logger.info(f"{__name__}:get_chat_model - model={model_id}")
    return ChatOpenAI(
        model=model_id,
        api_key=settings.api_key,
        timeout=settings.request_timeout_seconds,
        max_retries=settings.max_retries,
    )


def get_embeddings(settings: OpenAISettings) -> OpenAIEmbeddings:
    """
    Build the embeddings model.

    Args:
        settings: OpenAI settings

    Returns:
        OpenAIEmbeddings: Configured embeddings model
    """
    logger.info(f"{__name__}:get_embeddings - model={settings.embedding_model}")
    return OpenAIEmbeddings(
        model=settings.embedding_model,
        api_key=settings.api_key,
        timeout=settings.request_timeout_seconds,
        max_retries=settings.max_retries,
    )
