"""Content hashing for the archive integrity gate."""

from __future__ import annotations

import hashlib


def compute_sha256(data: bytes) -> str:
    """Get SHA256 hash of a byte buffer.

    Args:
        data: Raw content.

    Returns:
        Lowercase hex digest of the SHA256 hash.
    """
    return hashlib.sha256(data).hexdigest()


def digests_match(actual: str, expected: str) -> bool:
    """Compare two hex digests.

    Both sides are compared lowercase with surrounding whitespace removed,
    so publishers may declare either hex case.
    """
    return actual.strip().lower() == expected.strip().lower()


def verify_sha256(data: bytes, expected: str) -> bool:
    """Check that content hashes to the expected digest.

    Args:
        data: Raw content.
        expected: Hex digest declared by the publisher.

    Returns:
        True if the digests match.
    """
    return digests_match(compute_sha256(data), expected)
