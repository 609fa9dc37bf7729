"""Abstract base step with an enforced run wrapper.

Every concrete step inherits from BaseStep and implements ``execute()``
(and, when it has something to undo or report, ``cleanup()``).  The
``run()`` wrapper is **not overridable** — it converts any ``BoxCloudError``
raised by ``execute()`` into the run's terminal error and a HALT signal:

    execute -> CONTINUE | HALT
    raise BoxCloudError -> state.error, HALT

Steps therefore raise on failure instead of writing the error themselves.
"""

from __future__ import annotations

import abc
import logging
from typing import final

from boxcloud.core.state import PublishState
from boxcloud.errors import BoxCloudError
from boxcloud.models.runs import StepAction

logger = logging.getLogger(__name__)


class BaseStep(abc.ABC):
    """Abstract base for all publishing steps.

    Subclasses **must** implement:
        * ``step_id``      — unique identifier (e.g. ``"create_version"``).
        * ``display_name`` — human-readable name shown in progress output.
        * ``execute(state)`` — the step's work.

    Subclasses **may** override:
        * ``cleanup(state)`` — invoked once after the run ends if this step
          started, in reverse start order.

    Subclasses **must not** override ``run()``.
    """

    # ------------------------------------------------------------------
    # Abstract interface
    # ------------------------------------------------------------------

    @property
    @abc.abstractmethod
    def step_id(self) -> str:
        """Unique step identifier (e.g. ``'verify_version'``)."""
        ...

    @property
    @abc.abstractmethod
    def display_name(self) -> str:
        """Human-readable name for progress output."""
        ...

    @abc.abstractmethod
    def execute(self, state: PublishState) -> StepAction:
        """Perform the step's unit of work.

        Return ``StepAction.CONTINUE`` on success, or ``StepAction.HALT`` to
        stop the run deliberately without an error.  Raise a
        ``BoxCloudError`` on failure.
        """
        ...

    def cleanup(self, state: PublishState) -> None:
        """Best-effort reverse action.  Default: nothing to do."""

    # ------------------------------------------------------------------
    # Lifecycle — NOT overridable
    # ------------------------------------------------------------------

    @final
    def run(self, state: PublishState) -> StepAction:
        """Execute the step and translate failures into HALT.  **Do not override.**"""
        logger.debug("%s [%s] starting", self.display_name, self.step_id)
        try:
            action = self.execute(state)
        except BoxCloudError as exc:
            logger.error(
                "%s [%s] failed: %s",
                self.display_name,
                self.step_id,
                exc,
            )
            state.record_error(exc)
            return StepAction.HALT

        logger.debug(
            "%s [%s] finished: %s",
            self.display_name,
            self.step_id,
            action.value,
        )
        return action

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def say(state: PublishState, message: str) -> None:
        if state.ui is not None:
            state.ui.say(message)

    @staticmethod
    def message(state: PublishState, message: str) -> None:
        if state.ui is not None:
            state.ui.message(message)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} step_id={self.step_id!r}>"
