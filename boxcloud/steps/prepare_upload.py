"""PrepareUpload — ask the registry where to send the box bytes."""

from __future__ import annotations

from boxcloud.core.state import PublishState
from boxcloud.models.runs import StepAction
from boxcloud.steps.base import BaseStep


class PrepareUploadStep(BaseStep):
    @property
    def step_id(self) -> str:
        return "prepare_upload"

    @property
    def display_name(self) -> str:
        return "Prepare Upload"

    def execute(self, state: PublishState) -> StepAction:
        config = state.config
        self.say(state, f"Preparing upload of box: {state.artifact_path}")
        state.upload_target = state.client.get_upload_path(
            config.box_tag, config.version, state.provider_name
        )
        return StepAction.CONTINUE
