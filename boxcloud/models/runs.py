"""Runner state machine models (step signals, run states, run reports)."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class StepAction(str, Enum):
    """Signal a step returns to the runner."""

    CONTINUE = "continue"
    HALT = "halt"


class RunnerState(str, Enum):
    """Lifecycle of a single runner instance."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    HALTED = "halted"
    CANCELLED = "cancelled"


# Valid state transitions — enforced by StepRunner.
# Terminal states (COMPLETED, HALTED, CANCELLED) have no outgoing transitions.
VALID_TRANSITIONS: dict[RunnerState, set[RunnerState]] = {
    RunnerState.NOT_STARTED: {RunnerState.RUNNING},
    RunnerState.RUNNING: {
        RunnerState.COMPLETED,
        RunnerState.HALTED,
        RunnerState.CANCELLED,
    },
    RunnerState.COMPLETED: set(),
    RunnerState.HALTED: set(),
    RunnerState.CANCELLED: set(),
}


class RunReport(BaseModel):
    """Outcome of one runner execution, returned by ``StepRunner.run()``.

    ``state`` distinguishes a deliberate halt from a cancellation, which the
    recorded error alone cannot do.
    """

    model_config = ConfigDict(frozen=True)

    state: RunnerState
    started_steps: list[str] = []
    cleaned_steps: list[str] = []
    halted_at: str | None = None
    error: str | None = None
