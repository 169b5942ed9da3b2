"""crxpack: package a directory into a signed CRX (version 2) container.

Pipeline: validate input -> obtain RSA key (load or generate) ->
deterministic zip -> RSASSA-PKCS1-v1_5/SHA-1 signature -> atomic write of
header + DER public key + signature + archive.
"""

__version__ = "0.1.0"
__description__ = "Deterministic, signed CRX container packager"

from crxpack.core.packager import Packager, package
from crxpack.models.result import PackageResult

__all__ = ["Packager", "PackageResult", "package", "__version__"]
