"""Shared test fixtures for crxpack."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from crxpack.config import PackConfig
from crxpack.core.archiver import Archiver
from crxpack.core.key_provider import KeyProvider
from crxpack.core.packager import Packager
from crxpack.models.container import ContainerSections
from crxpack.models.keys import SigningKey


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """One RSA key shared by the whole session; generation is slow."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def signing_key(rsa_private_key: rsa.RSAPrivateKey) -> SigningKey:
    return SigningKey(rsa_private_key)


@pytest.fixture
def key_pem_file(tmp_path: Path, rsa_private_key: rsa.RSAPrivateKey) -> Path:
    """The session key written as an unencrypted PKCS#8 PEM file."""
    path = tmp_path / "existing.pem"
    path.write_bytes(
        rsa_private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    return path


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    """Directory used for scratch archives, so leftovers can be detected."""
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def config(scratch_dir: Path) -> PackConfig:
    return PackConfig(temp_dir=scratch_dir)


@pytest.fixture
def archiver(config: PackConfig) -> Archiver:
    return Archiver(config)


@pytest.fixture
def key_provider(config: PackConfig) -> KeyProvider:
    return KeyProvider(config)


@pytest.fixture
def packager(config: PackConfig) -> Packager:
    return Packager(config)


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """A small extension directory with nested and hidden files."""
    root = tmp_path / "extension"
    (root / "js").mkdir(parents=True)
    (root / "images" / "icons").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "manifest.json").write_text(
        '{"name": "Test Extension", "version": "1.0"}', encoding="utf-8"
    )
    (root / "js" / "background.js").write_text("console.log('hi');\n", encoding="utf-8")
    (root / "js" / "Popup.js").write_text("// popup\n", encoding="utf-8")
    (root / "images" / "icons" / "icon16.png").write_bytes(bytes(range(256)) * 4)
    (root / ".hidden").write_text("kept\n", encoding="utf-8")
    return root


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def verify_sections() -> Callable[[ContainerSections], None]:
    """Return a checker that raises InvalidSignature on a bad container."""

    def _verify(sections: ContainerSections) -> None:
        public_key = serialization.load_der_public_key(sections.public_key)
        public_key.verify(
            sections.signature,
            sections.archive,
            padding.PKCS1v15(),
            hashes.SHA1(),
        )

    return _verify
