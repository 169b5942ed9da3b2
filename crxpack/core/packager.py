"""Packager — the orchestrator for a single packaging run.

Wires together the KeyProvider, Archiver, Signer and ContainerWriter
behind a PackStateMachine.  Stages run strictly in order, each exactly
once; the first failure ends the run and is reported as a failed
``PackageResult`` carrying a message that names the stage.
"""

from __future__ import annotations

import logging
from pathlib import Path

from crxpack.config import PackConfig
from crxpack.core import signer
from crxpack.core.archiver import Archiver
from crxpack.core.container_writer import ContainerWriter
from crxpack.core.errors import (
    InputNotFound,
    InvalidKeyFormat,
    KeyPersistFailed,
    OutputWriteFailed,
    PackagingError,
)
from crxpack.core.key_provider import KeyProvider
from crxpack.core.stage_machine import PackStateMachine
from crxpack.models.result import PackageResult
from crxpack.models.stages import STAGE_LABELS, PackState

logger = logging.getLogger(__name__)


def _is_inside(path: Path, root: Path) -> bool:
    return Path(path).resolve().is_relative_to(root)


class Packager:
    """Produces one signed container from a source directory.

    A Packager instance runs once; create a new one for every run.

    Parameters
    ----------
    config:
        Packaging configuration.  Uses defaults if not provided.
    key_provider, archiver, container_writer:
        Replacement components.  Built from *config* when omitted.
    """

    def __init__(
        self,
        config: PackConfig | None = None,
        *,
        key_provider: KeyProvider | None = None,
        archiver: Archiver | None = None,
        container_writer: ContainerWriter | None = None,
    ) -> None:
        self.config = config or PackConfig()
        self.key_provider = key_provider or KeyProvider(self.config)
        self.archiver = archiver or Archiver(self.config)
        self.container_writer = container_writer or ContainerWriter()
        self.stage_machine = PackStateMachine()
        self._error_message = ""

    @property
    def error_message(self) -> str:
        """The message of the last failed run, or an empty string."""
        return self._error_message

    @property
    def state(self) -> PackState:
        return self.stage_machine.state

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(
        self,
        source_dir: Path,
        output_path: Path,
        private_key_path: Path | None = None,
        private_key_output_path: Path | None = None,
    ) -> PackageResult:
        """Package *source_dir* into a signed container at *output_path*.

        If *private_key_path* is given the key is loaded from it;
        otherwise a new key is generated and, when
        *private_key_output_path* is given, written there.

        Returns a PackageResult.  Packaging errors never escape this
        method; anything else marks the run failed and is re-raised.
        """
        source_dir = Path(source_dir)
        output_path = Path(output_path)
        machine = self.stage_machine

        try:
            machine.transition(PackState.VALIDATING_INPUT)
            self._validate_input(
                source_dir, output_path, private_key_path, private_key_output_path
            )

            machine.transition(PackState.OBTAINING_KEY)
            key = self.key_provider.obtain(
                Path(private_key_path) if private_key_path is not None else None,
                Path(private_key_output_path) if private_key_output_path is not None else None,
            )

            machine.transition(PackState.ARCHIVING)
            archive = self.archiver.package(source_dir)

            machine.transition(PackState.SIGNING)
            signature = signer.sign(archive, key)

            machine.transition(PackState.WRITING)
            self.container_writer.write(output_path, key, signature, archive)

            machine.transition(PackState.DONE)
        except PackagingError as exc:
            return self._failed(exc)
        except Exception as exc:
            if not machine.is_terminal:
                machine.fail(f"{self._stage_label()} failed unexpectedly: {exc}")
            raise

        logger.info("Packaged %s -> %s", source_dir, output_path)
        return PackageResult(
            success=True,
            output_path=output_path,
            archive_sha256=archive.sha256,
            key_fingerprint=key.fingerprint,
            generated_key=key.generated,
            transitions=machine.history,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_input(
        source_dir: Path,
        output_path: Path,
        private_key_path: Path | None = None,
        private_key_output_path: Path | None = None,
    ) -> None:
        """Check paths before any key material is touched.

        Nothing the run writes or reads as a key may sit inside the source
        directory, or it would be archived into the container.
        """
        if not source_dir.is_dir():
            raise InputNotFound(
                f"Source directory {source_dir} does not exist or is not a directory"
            )
        source_root = source_dir.resolve()
        if _is_inside(output_path, source_root):
            raise OutputWriteFailed(
                f"Output {output_path} must not be inside the source directory {source_dir}"
            )
        if private_key_path is not None and _is_inside(private_key_path, source_root):
            raise InvalidKeyFormat(
                f"Private key {private_key_path} must not be inside the source directory {source_dir}"
            )
        if (
            private_key_path is None
            and private_key_output_path is not None
            and _is_inside(private_key_output_path, source_root)
        ):
            raise KeyPersistFailed(
                f"Private key output {private_key_output_path} must not be inside "
                f"the source directory {source_dir}"
            )

    def _stage_label(self) -> str:
        return STAGE_LABELS.get(self.stage_machine.state, self.stage_machine.state.value)

    def _failed(self, exc: PackagingError) -> PackageResult:
        stage = self.stage_machine.state
        message = f"{self._stage_label()} failed: {exc.message}"
        self.stage_machine.fail(message)
        self._error_message = message
        logger.error("%s", message)
        return PackageResult(
            success=False,
            error_message=message,
            error_code=exc.code,
            failed_stage=stage,
            transitions=self.stage_machine.history,
        )


def package(
    source_dir: Path,
    output_path: Path,
    private_key_path: Path | None = None,
    private_key_output_path: Path | None = None,
    *,
    config: PackConfig | None = None,
) -> PackageResult:
    """Run a fresh Packager once and return its result."""
    return Packager(config).run(
        source_dir, output_path, private_key_path, private_key_output_path
    )
