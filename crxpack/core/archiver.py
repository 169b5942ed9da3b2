"""Deterministic zip archival of a source directory.

Entry naming policy
-------------------
- Paths are relative to the source directory, POSIX separators (``/``),
  no leading ``./``.
- Case is preserved exactly; no case folding.
- Names are Unicode NFC-normalized so that the same tree produces the
  same names on every filesystem.
- Entries are ordered by normalized name (code-point order).
- Only regular files become entries; empty directories are dropped.

Every entry carries the same timestamp (1980-01-01, the zip epoch),
Unix permissions 0644, and DEFLATE at the configured level, so an
unchanged tree always produces identical archive bytes.
"""

from __future__ import annotations

import logging
import stat
import unicodedata
import zipfile
from pathlib import Path

from crxpack.config import PackConfig
from crxpack.core.errors import ArchiveWriteFailed, InputNotFound
from crxpack.core.scratch import scratch_file
from crxpack.models.container import ArchiveBlob

logger = logging.getLogger(__name__)

_ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)  # earliest valid zip timestamp
_FILE_ATTR = (stat.S_IFREG | 0o644) << 16


def normalize_entry_name(relative: Path) -> str:
    """Canonical archive name for a path relative to the source root."""
    return unicodedata.normalize("NFC", relative.as_posix())


def collect_entries(source_dir: Path) -> list[tuple[str, Path]]:
    """Return ``(entry_name, file_path)`` pairs in archive order."""
    entries: dict[str, Path] = {}
    for path in source_dir.rglob("*"):
        if not path.is_file():
            continue
        name = normalize_entry_name(path.relative_to(source_dir))
        if name in entries:
            raise ArchiveWriteFailed(
                f"Two files normalize to the same entry name {name!r}"
            )
        entries[name] = path
    return sorted(entries.items())


class Archiver:
    """Packs a directory into a single zip byte stream.

    Parameters
    ----------
    config:
        Packaging configuration (``compression_level`` and ``temp_dir``).
    """

    def __init__(self, config: PackConfig | None = None) -> None:
        self._config = config or PackConfig()

    def package(self, source_dir: Path) -> ArchiveBlob:
        """Archive every file under *source_dir*.

        The zip is built in a scratch file which is removed before this
        method returns, whether it succeeds or not.
        """
        source_dir = Path(source_dir)
        if not source_dir.is_dir():
            raise InputNotFound(f"Source directory {source_dir} does not exist or is not a directory")

        try:
            entries = collect_entries(source_dir)
            with scratch_file(self._config.temp_dir, suffix=".zip") as scratch:
                self._write_zip(scratch.path, entries)
                data = scratch.path.read_bytes()
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as exc:
            raise ArchiveWriteFailed(f"Cannot archive {source_dir}: {exc}") from exc

        names = tuple(name for name, _ in entries)
        logger.info(
            "Archived %d files from %s (%d bytes)", len(names), source_dir, len(data)
        )
        return ArchiveBlob(data=data, entry_names=names)

    def _write_zip(self, zip_path: Path, entries: list[tuple[str, Path]]) -> None:
        level = self._config.compression_level
        with zipfile.ZipFile(zip_path, mode="w") as zf:
            for name, path in entries:
                info = zipfile.ZipInfo(filename=name, date_time=_ZIP_EPOCH)
                info.create_system = 3  # Unix
                info.external_attr = _FILE_ATTR
                zf.writestr(
                    info,
                    path.read_bytes(),
                    compress_type=zipfile.ZIP_DEFLATED,
                    compresslevel=level,
                )
                logger.debug("Added %s", name)
