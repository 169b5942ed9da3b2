"""Runtime configuration — env-driven.

Centralized config using pydantic-settings for environment variable
support. Reads from .env file and CRXPACK_* environment variables.

None of these settings change the container wire format or the signing
scheme; those are fixed in code.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS: tuple[str, ...] = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class PackConfig(BaseSettings):
    """Packaging configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export CRXPACK_LOG_LEVEL=DEBUG
        export CRXPACK_TEMP_DIR=/var/tmp/crxpack
        export CRXPACK_KEY_FILE_MODE=600    # octal, like chmod

    Or via .env file::

        CRXPACK_COMPRESSION_LEVEL=6
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CRXPACK_",
        env_file_encoding="utf-8",
    )

    log_level: str = "INFO"

    # Deflate level used for every archive entry (0-9)
    compression_level: int = Field(default=9, ge=0, le=9)

    # Where scratch archives are built; None means the system temp dir
    temp_dir: Path | None = None

    # Permission bits applied to a freshly persisted private key
    key_file_mode: int = Field(default=0o600, ge=0, le=0o777)

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_log_level(cls, v: Any) -> str:
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("key_file_mode", mode="before")
    @classmethod
    def _parse_octal_mode(cls, v: Any) -> int:
        # Strings ("600", "0o640") are permission bits as chmod reads them.
        if isinstance(v, str):
            return int(v.strip().lower().removeprefix("0o"), 8)
        return v


# Module-level singleton: import as `from crxpack.config import config`
config = PackConfig()
