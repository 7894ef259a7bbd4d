#!/usr/bin/env python3
"""
SHA-256 digests of clipboard content for log lines.

Clipboard text may hold passwords or other secrets, so it is never logged
verbatim. Log lines identify content by a short digest instead, which is
enough to follow one value across instances and sides of the sync.
"""
import hashlib

__all__ = ["content_digest", "DIGEST_LENGTH"]

# Number of hex characters kept from the full SHA-256 digest.
DIGEST_LENGTH: int = 12


def content_digest(text: str) -> str:
    """
    Compute a short SHA-256 digest of clipboard text.

    Args:
        text: Clipboard text, encoded as UTF-8 before hashing.

    Returns:
        First DIGEST_LENGTH hex characters of the SHA-256 digest.
    """
    return hashlib.sha256(text.encode("utf-8", "surrogatepass")).hexdigest()[:DIGEST_LENGTH]
