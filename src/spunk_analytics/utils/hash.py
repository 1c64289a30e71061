# src/spunk_analytics/utils/hash.py
"""Privacy hashing for pseudonymous visitor identifiers."""

from __future__ import annotations

import hashlib
from typing import Final

FINGERPRINT_LENGTH: Final[int] = 16


def sha256_hexdigest(data: bytes) -> str:
    """Return the lowercase hexadecimal SHA-256 digest of the supplied data."""
    return hashlib.sha256(data).hexdigest()


def visitor_fingerprint(address: str, bucket: str) -> str:
    """Derive a stable visitor id from a network address and a time bucket.

    The same address maps to the same id only within one bucket (a day or an
    ISO week start), and the raw address cannot be recovered from the result.
    """
    return sha256_hexdigest(f"{address}{bucket}".encode())[:FINGERPRINT_LENGTH]
