"""Container models — archive, signature, and the fixed CRX header.

Wire layout (all integers unsigned 32-bit little-endian)::

    offset  size  field
    0       4     magic           b"Cr24"
    4       4     version         2
    8       4     key_size        length of the DER public key section
    12      4     signature_size  length of the signature section
    16      ...   public key, then signature, then the zip archive
"""

from __future__ import annotations

import struct

from pydantic import BaseModel, ConfigDict

from crxpack.core.errors import ContainerFormatError
from crxpack.core.hasher import sha256_hex

CRX_MAGIC: bytes = b"Cr24"
CRX_VERSION: int = 2

_HEADER_STRUCT = struct.Struct("<4sIII")
HEADER_SIZE: int = _HEADER_STRUCT.size  # 16


class ArchiveBlob(BaseModel):
    """The compressed contents of a source directory."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    entry_names: tuple[str, ...] = ()

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def sha256(self) -> str:
        return sha256_hex(self.data)


class Signature(BaseModel):
    """A signature over the exact bytes of an ArchiveBlob."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    algorithm: str


class ContainerHeader(BaseModel):
    """The fixed-size record at the start of every container.

    Encoded field by field with an explicit byte order, never by
    copying an in-memory struct.
    """

    model_config = ConfigDict(frozen=True)

    magic: bytes = CRX_MAGIC
    version: int = CRX_VERSION
    key_size: int
    signature_size: int

    def pack(self) -> bytes:
        """Encode the header into its 16-byte wire form."""
        try:
            return _HEADER_STRUCT.pack(
                self.magic, self.version, self.key_size, self.signature_size
            )
        except struct.error as exc:
            raise ContainerFormatError(f"Header field out of range: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> ContainerHeader:
        """Decode a header from the first HEADER_SIZE bytes of *data*."""
        if len(data) < HEADER_SIZE:
            raise ContainerFormatError(
                f"Container too short for header: {len(data)} < {HEADER_SIZE} bytes"
            )
        magic, version, key_size, signature_size = _HEADER_STRUCT.unpack_from(data)
        if magic != CRX_MAGIC:
            raise ContainerFormatError(f"Bad magic {magic!r}, expected {CRX_MAGIC!r}")
        if version != CRX_VERSION:
            raise ContainerFormatError(
                f"Unsupported container version {version}, expected {CRX_VERSION}"
            )
        return cls(
            magic=magic, version=version, key_size=key_size, signature_size=signature_size
        )


class ContainerSections(BaseModel):
    """A container split into its header and the three sections that follow."""

    model_config = ConfigDict(frozen=True)

    header: ContainerHeader
    public_key: bytes
    signature: bytes
    archive: bytes

    @property
    def total_size(self) -> int:
        return HEADER_SIZE + len(self.public_key) + len(self.signature) + len(self.archive)
