#!/usr/bin/env python3
"""Unit tests for content_digest."""
import hashlib

from clippysync.hashing import DIGEST_LENGTH, content_digest


def test_content_digest_is_sha256_prefix() -> None:
    """Test the digest is the start of the SHA-256 hex digest of UTF-8 text."""
    expected = hashlib.sha256("héllo".encode("utf-8")).hexdigest()[:DIGEST_LENGTH]
    assert content_digest("héllo") == expected
    assert len(content_digest("")) == DIGEST_LENGTH


def test_content_digest_distinguishes_content() -> None:
    """Test different text gives different digests."""
    assert content_digest("a") != content_digest("b")


def test_content_digest_accepts_lone_surrogates() -> None:
    """Test text that is not valid UTF-8 still hashes."""
    assert len(content_digest("\ud800")) == DIGEST_LENGTH
