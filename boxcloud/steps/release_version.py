"""ReleaseVersion — make the version available to consumers."""

from __future__ import annotations

from boxcloud.core.state import PublishState
from boxcloud.errors import PreconditionError
from boxcloud.models.runs import StepAction
from boxcloud.steps.base import BaseStep


class ReleaseVersionStep(BaseStep):
    """Release the version unless ``no_release`` is set.

    ``no_release`` is a benign skip: the step continues so the run still
    completes.  Releasing an already released version is a no-op.
    """

    @property
    def step_id(self) -> str:
        return "release_version"

    @property
    def display_name(self) -> str:
        return "Release Version"

    def execute(self, state: PublishState) -> StepAction:
        config = state.config

        if config.no_release:
            self.message(state, "Not releasing version due to no_release: true")
            return StepAction.CONTINUE

        if state.version is not None and state.version.is_released:
            self.message(state, f"Version {config.version} is already released")
            return StepAction.CONTINUE

        if state.provider is None:
            raise PreconditionError(
                f"Version {config.version} has no provider attached; cannot release"
            )

        self.say(state, f"Releasing version: {config.version}")
        state.version = state.client.release_version(config.box_tag, config.version)
        self.message(state, "Version successfully released and available")
        return StepAction.CONTINUE
