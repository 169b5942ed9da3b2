"""Tests for the container models — header encoding and section bounds."""

from __future__ import annotations

import struct

import pytest

from crxpack.core.errors import ContainerFormatError
from crxpack.models.container import (
    CRX_MAGIC,
    CRX_VERSION,
    HEADER_SIZE,
    ArchiveBlob,
    ContainerHeader,
    ContainerSections,
)
from crxpack.core.hasher import sha256_hex


class TestContainerHeader:
    def test_header_is_sixteen_bytes(self):
        assert HEADER_SIZE == 16
        assert len(ContainerHeader(key_size=294, signature_size=256).pack()) == 16

    def test_pack_layout_is_little_endian(self):
        packed = ContainerHeader(key_size=0x01020304, signature_size=256).pack()
        assert packed[:4] == b"Cr24"
        assert packed[4:8] == b"\x02\x00\x00\x00"
        assert packed[8:12] == b"\x04\x03\x02\x01"
        assert packed[12:16] == b"\x00\x01\x00\x00"

    def test_defaults(self):
        header = ContainerHeader(key_size=1, signature_size=2)
        assert header.magic == CRX_MAGIC
        assert header.version == CRX_VERSION == 2

    def test_unpack_reads_packed_fields(self):
        raw = ContainerHeader(key_size=294, signature_size=256).pack() + b"trailing"
        header = ContainerHeader.unpack(raw)
        assert header.key_size == 294
        assert header.signature_size == 256

    def test_unpack_rejects_short_input(self):
        with pytest.raises(ContainerFormatError, match="too short"):
            ContainerHeader.unpack(b"Cr24\x02\x00")

    def test_unpack_rejects_bad_magic(self):
        raw = struct.pack("<4sIII", b"PK\x03\x04", 2, 0, 0)
        with pytest.raises(ContainerFormatError, match="magic"):
            ContainerHeader.unpack(raw)

    def test_unpack_rejects_other_versions(self):
        raw = struct.pack("<4sIII", b"Cr24", 3, 0, 0)
        with pytest.raises(ContainerFormatError, match="version"):
            ContainerHeader.unpack(raw)

    def test_pack_rejects_oversized_field(self):
        with pytest.raises(ContainerFormatError):
            ContainerHeader(key_size=2**32, signature_size=0).pack()

    def test_header_is_frozen(self):
        header = ContainerHeader(key_size=1, signature_size=2)
        with pytest.raises(Exception):
            header.key_size = 5  # type: ignore[misc]


class TestArchiveBlob:
    def test_sha256_and_size(self):
        blob = ArchiveBlob(data=b"zipbytes", entry_names=("a.txt",))
        assert blob.size == 8
        assert blob.sha256 == sha256_hex(b"zipbytes")


class TestContainerSections:
    def test_total_size(self):
        sections = ContainerSections(
            header=ContainerHeader(key_size=3, signature_size=2),
            public_key=b"key",
            signature=b"sg",
            archive=b"archive",
        )
        assert sections.total_size == 16 + 3 + 2 + 7
