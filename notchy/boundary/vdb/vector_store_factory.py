"""
Vector index factory.

Builds the Pinecone-backed index adapter from settings.

Dependencies: pinecone, notchy.configs
System role: Vector index instantiation
"""

import logging

from pinecone import Pinecone

from notchy.boundary.vdb.pinecone_store import PineconeVectorIndex
from notchy.configs import VectorStoreSettings

logger = logging.getLogger(__name__)


def get_vector_index(settings: VectorStoreSettings) -> PineconeVectorIndex:
    """
    Connect to the configured Pinecone index.

    Args:
        settings: Vector store settings

    Returns:
        PineconeVectorIndex: Adapter around the index handle

    Raises:
        ValueError: If no Pinecone API key is configured
    """
    if not settings.api_key:
        raise ValueError("PINECONE_API_KEY is required")

    logger.info(f"{__name__}:get_vector_index - Connecting to index '{settings.index_name}'")
    client = Pinecone(api_key=settings.api_key)
    return PineconeVectorIndex(
        index=client.Index(settings.index_name),
        batch_size=settings.upsert_batch_size,
    )
