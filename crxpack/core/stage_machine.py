"""Sequential state machine for a single packaging run.

Enforces:
- Valid state transitions only (VALID_TRANSITIONS table)
- DONE and FAILED are terminal; there is no retry edge
- Every transition recorded in the run history
"""

from __future__ import annotations

import logging

from crxpack.models.stages import VALID_TRANSITIONS, PackState, StageTransition

logger = logging.getLogger(__name__)


class InvalidTransitionError(RuntimeError):
    """Raised when a requested state transition is not valid."""


class PackStateMachine:
    """Tracks the state of one packaging run.

    A machine starts in IDLE and is used for exactly one run.
    """

    def __init__(self) -> None:
        self._state = PackState.IDLE
        self._history: list[StageTransition] = []
        self._failure_reason: str | None = None

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> PackState:
        return self._state

    @property
    def history(self) -> list[StageTransition]:
        """A copy of every transition taken so far, oldest first."""
        return list(self._history)

    @property
    def failure_reason(self) -> str | None:
        return self._failure_reason

    @property
    def is_terminal(self) -> bool:
        return not VALID_TRANSITIONS[self._state]

    def get_available_transitions(self) -> set[PackState]:
        """Return the set of valid target states from the current state."""
        return set(VALID_TRANSITIONS[self._state])

    # ------------------------------------------------------------------
    # Transition logic
    # ------------------------------------------------------------------

    def transition(self, target_state: PackState, *, reason: str | None = None) -> StageTransition:
        """Move to *target_state*, recording the transition.

        *reason* is required when entering FAILED and ignored otherwise.
        """
        allowed = VALID_TRANSITIONS[self._state]
        if target_state not in allowed:
            raise InvalidTransitionError(
                f"Cannot transition from {self._state.value} to {target_state.value}. "
                f"Allowed: {sorted(s.value for s in allowed)}"
            )
        if target_state == PackState.FAILED and not reason:
            raise ValueError("A reason is required when entering the failed state")

        record = StageTransition(
            from_state=self._state,
            to_state=target_state,
            reason=reason if target_state == PackState.FAILED else None,
        )
        self._history.append(record)
        self._state = target_state
        if target_state == PackState.FAILED:
            self._failure_reason = reason
        logger.debug("%s -> %s", record.from_state.value, record.to_state.value)
        return record

    def fail(self, reason: str) -> StageTransition:
        """Enter the terminal FAILED state from any non-terminal state."""
        return self.transition(PackState.FAILED, reason=reason)
