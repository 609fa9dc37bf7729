"""Sequential step runner with cooperative cancellation.

Enforces:
- Steps execute strictly in list order, one at a time
- A HALT signal stops forward progress
- ``cancel()`` takes effect at the next step boundary, never mid-step
- Cleanup runs once for every started step, in reverse start order,
  whatever the terminal state
- Cleanup failures are logged and never become the run's error
- Valid runner state transitions only (VALID_TRANSITIONS table)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

from boxcloud.core.state import PublishState
from boxcloud.models.runs import (
    VALID_TRANSITIONS,
    RunnerState,
    RunReport,
    StepAction,
)
from boxcloud.steps.base import BaseStep

logger = logging.getLogger(__name__)


class InvalidRunnerTransitionError(RuntimeError):
    """Raised when the runner is asked to move to a state it cannot reach."""


class StepRunner:
    """Runs an ordered list of steps against one ``PublishState``.

    A runner instance executes once.  ``cancel()`` may be called from any
    thread at any time; the running thread observes it before starting each
    step.

    Parameters
    ----------
    steps:
        The steps to execute, in order.
    """

    def __init__(self, steps: Sequence[BaseStep]) -> None:
        self._steps: list[BaseStep] = list(steps)
        self._cancel_requested = threading.Event()
        self._lock = threading.Lock()
        self._state = RunnerState.NOT_STARTED

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def steps(self) -> list[BaseStep]:
        return list(self._steps)

    @property
    def state(self) -> RunnerState:
        return self._state

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_requested.is_set()

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def cancel(self) -> None:
        """Request cancellation.  Safe to call from another thread."""
        if not self._cancel_requested.is_set():
            logger.info("Cancellation requested; no further steps will start")
        self._cancel_requested.set()

    def run(self, state: PublishState) -> RunReport:
        """Execute all steps and unwind cleanup.

        Returns a ``RunReport`` describing how the run ended.  Step failures
        are reported through ``state.error``; the runner does not inspect
        them.  Exceptions that are not ``BoxCloudError`` propagate after
        cleanup has run.
        """
        self._transition(RunnerState.RUNNING)

        started: list[BaseStep] = []
        terminal = RunnerState.COMPLETED
        halted_at: str | None = None

        try:
            for step in self._steps:
                if self._cancel_requested.is_set():
                    logger.info("Run cancelled before step %s", step.step_id)
                    terminal = RunnerState.CANCELLED
                    state.cancelled = True
                    break

                started.append(step)
                action = step.run(state)

                if action == StepAction.HALT:
                    terminal = RunnerState.HALTED
                    halted_at = step.step_id
                    state.halted = True
                    logger.info("Run halted at step %s", step.step_id)
                    break
        except BaseException:
            terminal = RunnerState.HALTED
            halted_at = started[-1].step_id if started else None
            state.halted = True
            raise
        finally:
            cleaned = self._cleanup(started, state)
            self._transition(terminal)

        return RunReport(
            state=terminal,
            started_steps=[s.step_id for s in started],
            cleaned_steps=cleaned,
            halted_at=halted_at,
            error=str(state.error) if state.error is not None else None,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _cleanup(self, started: list[BaseStep], state: PublishState) -> list[str]:
        cleaned: list[str] = []
        for step in reversed(started):
            try:
                step.cleanup(state)
            except Exception as exc:
                logger.warning(
                    "Cleanup of %s [%s] failed: %s",
                    step.display_name,
                    step.step_id,
                    exc,
                )
            cleaned.append(step.step_id)
        return cleaned

    def _transition(self, target: RunnerState) -> None:
        with self._lock:
            allowed = VALID_TRANSITIONS.get(self._state, set())
            if target not in allowed:
                raise InvalidRunnerTransitionError(
                    f"Cannot transition runner from {self._state.value} to {target.value}. "
                    f"Allowed: {[s.value for s in allowed]}"
                )
            logger.debug("Runner %s -> %s", self._state.value, target.value)
            self._state = target
