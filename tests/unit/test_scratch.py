"""Tests for scratch files — commit or guaranteed removal."""

from __future__ import annotations

from pathlib import Path

import pytest

from crxpack.core.scratch import scratch_file


class TestScratchFile:
    def test_removed_when_not_committed(self, tmp_path: Path):
        with scratch_file(tmp_path) as scratch:
            scratch.path.write_bytes(b"data")
            assert scratch.path.exists()
        assert list(tmp_path.iterdir()) == []

    def test_removed_on_exception(self, tmp_path: Path):
        with pytest.raises(RuntimeError):
            with scratch_file(tmp_path) as scratch:
                scratch.path.write_bytes(b"data")
                raise RuntimeError("stage failed")
        assert list(tmp_path.iterdir()) == []

    def test_commit_moves_into_place(self, tmp_path: Path):
        dest = tmp_path / "final.bin"
        with scratch_file(tmp_path) as scratch:
            scratch.path.write_bytes(b"payload")
            scratch.commit(dest)
        assert dest.read_bytes() == b"payload"
        assert [p.name for p in tmp_path.iterdir()] == ["final.bin"]
        assert scratch.committed is True

    def test_prefix_and_suffix(self, tmp_path: Path):
        with scratch_file(tmp_path, prefix=".out.", suffix=".zip") as scratch:
            assert scratch.path.name.startswith(".out.")
            assert scratch.path.suffix == ".zip"
            assert scratch.path.parent == tmp_path

    def test_commit_new_creates_destination(self, tmp_path: Path):
        dest = tmp_path / "key.pem"
        with scratch_file(tmp_path) as scratch:
            scratch.path.write_bytes(b"payload")
            scratch.commit_new(dest, mode=0o600)
        assert dest.read_bytes() == b"payload"
        assert dest.stat().st_mode & 0o777 == 0o600
        assert [p.name for p in tmp_path.iterdir()] == ["key.pem"]

    def test_commit_new_keeps_existing_destination(self, tmp_path: Path):
        dest = tmp_path / "key.pem"
        dest.write_bytes(b"previous")
        with pytest.raises(FileExistsError):
            with scratch_file(tmp_path) as scratch:
                scratch.path.write_bytes(b"payload")
                scratch.commit_new(dest)
        assert dest.read_bytes() == b"previous"
        assert [p.name for p in tmp_path.iterdir()] == ["key.pem"]
