"""Archive signing.

Scheme: RSASSA-PKCS1-v1_5 with SHA-1 over the exact archive bytes.  This
is the scheme CRX version 2 readers verify, so SigningKey fixes it rather
than configurable.
"""

from __future__ import annotations

import logging

from cryptography.exceptions import UnsupportedAlgorithm

from crxpack.core.errors import SigningFailed
from crxpack.models.container import ArchiveBlob, Signature
from crxpack.models.keys import SIGNATURE_ALGORITHM, SigningKey

logger = logging.getLogger(__name__)


def sign(archive: ArchiveBlob, key: SigningKey) -> Signature:
    """Sign *archive* with the private half of *key*."""
    try:
        data = key.sign_digest_input(archive.data)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise SigningFailed(f"Signing primitive rejected the key: {exc}") from exc

    logger.info(
        "Signed archive sha256:%s with key %s (%d-byte signature)",
        archive.sha256[:16],
        key.fingerprint,
        len(data),
    )
    return Signature(data=data, algorithm=SIGNATURE_ALGORITHM)
