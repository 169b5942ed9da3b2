"""Hashing helpers for archive digests and key fingerprints."""

from __future__ import annotations

import hashlib


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def key_fingerprint(public_key_der: bytes) -> str:
    """Compute a short fingerprint of a DER-encoded public key.

    Returns the first 16 hex characters of SHA-256(public_key_der), or an
    empty string when no key is given.
    """
    if not public_key_der:
        return ""
    return sha256_hex(public_key_der)[:16]
