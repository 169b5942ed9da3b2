"""Signing key capability."""

from __future__ import annotations

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from crxpack.core.hasher import key_fingerprint

# The only scheme a SigningKey will sign with; CRX version 2 readers verify it.
SIGNATURE_ALGORITHM: str = "RSASSA-PKCS1-v1_5/SHA-1"


class SigningKey:
    """An RSA key pair held for the duration of one packaging run.

    The private component never leaves this object: callers can ask it to
    sign bytes, or read the DER-encoded public half, but there is no
    accessor that exports the private key, and the padding and hash are
    fixed to SIGNATURE_ALGORITHM.

    Parameters
    ----------
    private_key:
        The RSA private key produced by the KeyProvider.
    generated:
        True when the key was freshly generated for this run.
    """

    __slots__ = ("_private_key", "_public_der", "generated")

    def __init__(self, private_key: rsa.RSAPrivateKey, *, generated: bool = False) -> None:
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise TypeError("SigningKey requires an RSA private key")
        self._private_key = private_key
        self._public_der = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        self.generated = generated

    @property
    def key_size(self) -> int:
        return self._private_key.key_size

    def public_key_der(self) -> bytes:
        """Return the public key as a DER SubjectPublicKeyInfo structure."""
        return self._public_der

    @property
    def fingerprint(self) -> str:
        """First 16 hex chars of SHA-256 over the DER public key."""
        return key_fingerprint(self._public_der)

    def sign_digest_input(self, data: bytes) -> bytes:
        """Sign *data* with RSASSA-PKCS1-v1_5 over its SHA-1 digest."""
        return self._private_key.sign(data, padding.PKCS1v15(), hashes.SHA1())

    def __repr__(self) -> str:
        return f"SigningKey(bits={self.key_size}, fingerprint={self.fingerprint!r})"
