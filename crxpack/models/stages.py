"""Packaging run state machine models — strictly sequential transitions."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PackState(str, Enum):
    """State of a single packaging run."""

    IDLE = "idle"
    VALIDATING_INPUT = "validating_input"
    OBTAINING_KEY = "obtaining_key"
    ARCHIVING = "archiving"
    SIGNING = "signing"
    WRITING = "writing"
    DONE = "done"
    FAILED = "failed"


# The working stages, in execution order.
PIPELINE_ORDER: tuple[PackState, ...] = (
    PackState.VALIDATING_INPUT,
    PackState.OBTAINING_KEY,
    PackState.ARCHIVING,
    PackState.SIGNING,
    PackState.WRITING,
)

# Valid state transitions, enforced by PackStateMachine.
# There is no retry edge: DONE and FAILED are terminal.
VALID_TRANSITIONS: dict[PackState, set[PackState]] = {
    PackState.IDLE: {PackState.VALIDATING_INPUT, PackState.FAILED},
    PackState.VALIDATING_INPUT: {PackState.OBTAINING_KEY, PackState.FAILED},
    PackState.OBTAINING_KEY: {PackState.ARCHIVING, PackState.FAILED},
    PackState.ARCHIVING: {PackState.SIGNING, PackState.FAILED},
    PackState.SIGNING: {PackState.WRITING, PackState.FAILED},
    PackState.WRITING: {PackState.DONE, PackState.FAILED},
    PackState.DONE: set(),  # terminal
    PackState.FAILED: set(),  # terminal
}

# Human-readable names used in error messages.
STAGE_LABELS: dict[PackState, str] = {
    PackState.VALIDATING_INPUT: "Input validation",
    PackState.OBTAINING_KEY: "Key provisioning",
    PackState.ARCHIVING: "Archiving",
    PackState.SIGNING: "Signing",
    PackState.WRITING: "Writing container",
}


class StageTransition(BaseModel):
    """Records a single state transition for the run history."""

    model_config = ConfigDict(frozen=True)

    from_state: PackState
    to_state: PackState
    reason: str | None = None  # populated when entering FAILED
    at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
