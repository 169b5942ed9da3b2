"""crxpack data models — Pydantic v2 and frozen, except the key capability."""

from crxpack.models.container import (
    CRX_MAGIC,
    CRX_VERSION,
    HEADER_SIZE,
    ArchiveBlob,
    ContainerHeader,
    ContainerSections,
    Signature,
)
from crxpack.models.keys import SigningKey
from crxpack.models.result import PackageResult
from crxpack.models.stages import (
    PIPELINE_ORDER,
    STAGE_LABELS,
    VALID_TRANSITIONS,
    PackState,
    StageTransition,
)

__all__ = [
    # container
    "CRX_MAGIC",
    "CRX_VERSION",
    "HEADER_SIZE",
    "ArchiveBlob",
    "ContainerHeader",
    "ContainerSections",
    "Signature",
    # keys
    "SigningKey",
    # stages
    "PackState",
    "StageTransition",
    "PIPELINE_ORDER",
    "STAGE_LABELS",
    "VALID_TRANSITIONS",
    # result
    "PackageResult",
]
