"""
Vector namespace derivation.

Maps an arbitrary storage key to an ASCII-safe Pinecone namespace. The name
is a readable slug of the key followed by a SHA-256 digest prefix, so two
distinct keys that fold to the same slug still land in different namespaces.
Both the write path and the read path go through `namespace_for`.

Dependencies: hashlib, unicodedata
System role: Namespace key derivation for the vector index
"""

import hashlib
import re
import unicodedata

SLUG_MAX_LENGTH = 40
DIGEST_LENGTH = 16

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _slugify(source_key: str) -> str:
    folded = unicodedata.normalize("NFKD", source_key).encode("ascii", "ignore").decode("ascii")
    slug = _UNSAFE_CHARS.sub("-", folded).strip("-._")
    return slug[:SLUG_MAX_LENGTH].rstrip("-._")


def namespace_for(source_key: str) -> str:
    """
    Derive the namespace for a source key.

    Args:
        source_key: Storage key of the document

    Returns:
        str: "<slug>-<sha256 prefix>", or just the digest when the key has no
        ASCII-representable characters

    Raises:
        ValueError: When source_key is empty
    """
    if not source_key:
        raise ValueError("source_key cannot be empty")

    digest = hashlib.sha256(source_key.encode("utf-8")).hexdigest()[:DIGEST_LENGTH]
    slug = _slugify(source_key)
    return f"{slug}-{digest}" if slug else digest
