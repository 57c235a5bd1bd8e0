"""Vector database boundary: Pinecone adapter, schemas and namespace derivation."""

from notchy.boundary.vdb.namespace import namespace_for
from notchy.boundary.vdb.pinecone_store import PineconeVectorIndex
from notchy.boundary.vdb.vector_schemas import VectorMatch, VectorMetadata, VectorRecord

__all__ = [
    "PineconeVectorIndex",
    "VectorMatch",
    "VectorMetadata",
    "VectorRecord",
    "namespace_for",
]
