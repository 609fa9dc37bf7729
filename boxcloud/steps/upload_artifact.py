"""UploadArtifact — stream the local box file to the upload target."""

from __future__ import annotations

import logging
import time

from boxcloud.core.state import PublishState
from boxcloud.errors import PreconditionError
from boxcloud.models.runs import StepAction
from boxcloud.steps.base import BaseStep

logger = logging.getLogger(__name__)


class UploadArtifactStep(BaseStep):
    """Transfer the artifact bytes.  Never retries."""

    @property
    def step_id(self) -> str:
        return "upload_artifact"

    @property
    def display_name(self) -> str:
        return "Upload Artifact"

    def execute(self, state: PublishState) -> StepAction:
        target = state.upload_target
        if target is None:
            raise PreconditionError("No upload target prepared for the artifact")

        self.say(state, f"Uploading box: {state.artifact_path}")
        self.message(
            state,
            "Depending on your internet connection and the size of the box, "
            "this may take some time",
        )
        started = time.monotonic()
        state.client.upload(target.upload_path, state.artifact_path)
        logger.info("Upload finished in %.1fs", time.monotonic() - started)
        self.message(state, "Box successfully uploaded")
        return StepAction.CONTINUE
