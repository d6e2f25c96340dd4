"""Content fingerprinting for ingested files."""

from __future__ import annotations

from blake3 import blake3

CONTENT_HASH_SEED = 0
CONTENT_HASH_BYTES = 8

# BLAKE3 keyed mode with a constant key stands in for a seeded 64-bit hash.
_CONTENT_HASH_KEY = CONTENT_HASH_SEED.to_bytes(32, "little")


def content_hash(data: bytes) -> int:
    """Return the unsigned 64-bit fingerprint of ``data``.

    The value is stable across runs and processes. It is chosen for speed on
    large payloads and offers no protection against deliberate collisions.
    """
    digest = blake3(data, key=_CONTENT_HASH_KEY).digest(length=CONTENT_HASH_BYTES)
    return int.from_bytes(digest, "little")


def content_hash_text(data: bytes) -> str:
    """Return the canonical decimal text of :func:`content_hash`."""
    return str(content_hash(data))
