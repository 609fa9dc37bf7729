"""CreateVersion — create the version record, or reuse an unreleased one."""

from __future__ import annotations

from boxcloud.core.state import PublishState
from boxcloud.errors import VersionReleasedError, VersionRevokedError
from boxcloud.models.runs import StepAction
from boxcloud.steps.base import BaseStep


class CreateVersionStep(BaseStep):
    """Ensure an unreleased version exists for the configured tag."""

    @property
    def step_id(self) -> str:
        return "create_version"

    @property
    def display_name(self) -> str:
        return "Create Version"

    def execute(self, state: PublishState) -> StepAction:
        config = state.config
        existing = state.version

        if existing is not None:
            if existing.is_released:
                raise VersionReleasedError(
                    f"Version {config.version} of {config.box_tag} is already released; "
                    "a released version cannot be modified"
                )
            if existing.is_revoked:
                raise VersionRevokedError(
                    f"Version {config.version} of {config.box_tag} is revoked; "
                    "choose a new version number"
                )
            self.message(state, f"Version exists, skipping creation: {config.version}")
            return StepAction.CONTINUE

        self.say(state, f"Creating version: {config.version}")
        state.version = state.client.create_version(
            config.box_tag, config.version, config.version_description
        )
        state.version_created = True
        return StepAction.CONTINUE

    def cleanup(self, state: PublishState) -> None:
        # Registry changes are never rolled back; a re-run picks the version up.
        if state.version_created and (state.failed or state.cancelled):
            self.message(
                state,
                f"Version {state.config.version} was created but not released; "
                "re-run to resume publishing",
            )
