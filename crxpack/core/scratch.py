"""Scoped scratch files with guaranteed cleanup.

A scratch file lives for the duration of a ``with`` block.  It is either
committed (moved or linked onto its destination) or deleted when the
block exits, whichever exit path is taken.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


class ScratchFile:
    """An owned temporary path that can be committed exactly once."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.committed = False

    def commit(self, destination: Path, *, mode: int | None = None) -> Path:
        """fsync the scratch file and atomically move it onto *destination*.

        ``os.replace`` is atomic only within one filesystem, so callers
        place the scratch file next to its destination.
        """
        with self.path.open("rb+") as fh:
            os.fsync(fh.fileno())
        if mode is not None:
            os.chmod(self.path, mode)
        os.replace(self.path, destination)
        self.committed = True
        return destination

    def commit_new(self, destination: Path, *, mode: int | None = None) -> Path:
        """Like ``commit`` but never replaces an existing *destination*.

        The scratch file is hard-linked onto *destination*, which fails with
        ``FileExistsError`` if anything is already there, then unlinked.
        """
        with self.path.open("rb+") as fh:
            os.fsync(fh.fileno())
        if mode is not None:
            os.chmod(self.path, mode)
        os.link(self.path, destination)
        self.committed = True
        self.path.unlink()
        return destination


@contextmanager
def scratch_file(
    directory: Path | None = None,
    *,
    prefix: str = ".crxpack-",
    suffix: str = ".tmp",
) -> Iterator[ScratchFile]:
    """Create an empty scratch file and remove it unless it was committed."""
    fd, name = tempfile.mkstemp(
        prefix=prefix,
        suffix=suffix,
        dir=str(directory) if directory is not None else None,
    )
    os.close(fd)
    scratch = ScratchFile(Path(name))
    try:
        yield scratch
    finally:
        if not scratch.committed:
            try:
                scratch.path.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Could not remove scratch file %s: %s", scratch.path, exc)
