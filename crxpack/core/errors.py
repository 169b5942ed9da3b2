"""Packaging error taxonomy.

Every failure in a packaging run is one of the ``PackagingError``
subclasses below.  Components raise them; only the Packager turns them
into a failed ``PackageResult``.  None of them is retried.
"""

from __future__ import annotations


class PackagingError(RuntimeError):
    """Base class for all packaging failures.

    Parameters
    ----------
    message:
        Human-readable description of the underlying cause.
    """

    code: str = "packaging_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputNotFound(PackagingError):
    """The source directory does not exist or is not a directory."""

    code = "input_not_found"


class KeyNotFound(PackagingError):
    """The existing private key location could not be read."""

    code = "key_not_found"


class InvalidKeyFormat(PackagingError):
    """The existing private key bytes do not decode as an RSA private key."""

    code = "invalid_key_format"


class KeyPersistFailed(PackagingError):
    """A freshly generated private key could not be written out."""

    code = "key_persist_failed"


class ArchiveWriteFailed(PackagingError):
    """Building the compressed archive failed."""

    code = "archive_write_failed"


class SigningFailed(PackagingError):
    """The signing primitive reported an error."""

    code = "signing_failed"


class OutputWriteFailed(PackagingError):
    """The container file could not be written to its destination."""

    code = "output_write_failed"


class ContainerFormatError(ValueError):
    """Raised when a container file cannot be parsed."""
