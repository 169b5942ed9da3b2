"""Outcome of a packaging run."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from crxpack.models.stages import PackState, StageTransition


class PackageResult(BaseModel):
    """Success flag plus error message, with the details a caller may log.

    On failure ``error_message`` names the failing stage and its cause,
    and ``output_path`` is None.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    error_message: str = ""
    error_code: str = ""
    failed_stage: PackState | None = None
    output_path: Path | None = None
    archive_sha256: str = ""
    key_fingerprint: str = ""
    generated_key: bool = False
    transitions: list[StageTransition] = Field(default_factory=list)
