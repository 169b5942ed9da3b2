"""Container emission and header parsing.

A container is the 16-byte header (see ``crxpack.models.container``)
followed by the DER public key, the signature, and the zip archive.
The file appears at its destination complete or not at all.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

from crxpack.core.errors import ContainerFormatError, OutputWriteFailed
from crxpack.core.scratch import scratch_file
from crxpack.models.container import (
    HEADER_SIZE,
    ArchiveBlob,
    ContainerHeader,
    ContainerSections,
    Signature,
)
from crxpack.models.keys import SigningKey

logger = logging.getLogger(__name__)


class ContainerWriter:
    """Writes signed containers atomically."""

    def write(
        self,
        output_path: Path,
        key: SigningKey,
        signature: Signature,
        archive: ArchiveBlob,
    ) -> None:
        """Emit header, public key, signature and archive to *output_path*.

        The bytes go to a scratch file beside *output_path* which is
        renamed into place only after everything was written and synced.
        On failure the scratch file is removed and whatever was at
        *output_path* before is left untouched.
        """
        output_path = Path(output_path)
        public_key = key.public_key_der()
        header = ContainerHeader(
            key_size=len(public_key),
            signature_size=len(signature.data),
        )

        try:
            with scratch_file(output_path.parent, prefix=f".{output_path.name}.") as scratch:
                with scratch.path.open("wb") as fh:
                    self._emit(fh, header, public_key, signature.data, archive.data)
                scratch.commit(output_path)
        except (OSError, ContainerFormatError) as exc:
            raise OutputWriteFailed(f"Cannot write container {output_path}: {exc}") from exc

        logger.info(
            "Wrote %s (%d bytes)",
            output_path,
            HEADER_SIZE + header.key_size + header.signature_size + archive.size,
        )

    def _emit(
        self,
        fh: BinaryIO,
        header: ContainerHeader,
        public_key: bytes,
        signature: bytes,
        archive: bytes,
    ) -> None:
        fh.write(header.pack())
        fh.write(public_key)
        fh.write(signature)
        fh.write(archive)


def parse_container(data: bytes) -> ContainerSections:
    """Split container bytes into header, public key, signature and archive.

    The two size fields must fit inside *data*; whatever follows the
    signature is the archive.
    """
    header = ContainerHeader.unpack(data)
    key_end = HEADER_SIZE + header.key_size
    sig_end = key_end + header.signature_size
    if sig_end > len(data):
        raise ContainerFormatError(
            f"Declared sections ({header.key_size} + {header.signature_size} bytes) "
            f"exceed container size {len(data)}"
        )
    return ContainerSections(
        header=header,
        public_key=data[HEADER_SIZE:key_end],
        signature=data[key_end:sig_end],
        archive=data[sig_end:],
    )


def read_container(path: Path) -> ContainerSections:
    """Read and split the container at *path*."""
    return parse_container(Path(path).read_bytes())
