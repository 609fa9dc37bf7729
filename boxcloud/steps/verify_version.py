"""VerifyVersion — local artifact checks and registry lookup.

Runs before any registry mutation:
    - the artifact must be a ``.box`` file that exists and is not empty;
    - the box tag must exist on the registry;
    - an existing version for the tag is looked up and stored for the
      following steps to reuse (its presence is not an error).
"""

from __future__ import annotations

import logging
from pathlib import Path

from boxcloud.core.state import PublishState
from boxcloud.errors import (
    ArtifactNotFoundError,
    BoxNotFoundError,
    InvalidArtifactError,
)
from boxcloud.models.runs import StepAction
from boxcloud.steps.base import BaseStep

logger = logging.getLogger(__name__)

BOX_SUFFIX = ".box"


def check_artifact_file(path: str | Path) -> Path:
    """Validate the local artifact file and return it as a ``Path``.

    We assume there is exactly one ``.box`` file to upload.
    """
    path = Path(path)
    if path.suffix != BOX_SUFFIX:
        raise InvalidArtifactError(
            f"Unknown artifact file specified, expected '{BOX_SUFFIX}', got: {path}"
        )
    if not path.is_file():
        raise ArtifactNotFoundError(f"Artifact file specified doesn't exist: {path}")
    if path.stat().st_size == 0:
        raise InvalidArtifactError(f"Artifact file specified is empty: {path}")
    return path


class VerifyVersionStep(BaseStep):
    """Verify the artifact and discover any existing version."""

    @property
    def step_id(self) -> str:
        return "verify_version"

    @property
    def display_name(self) -> str:
        return "Verify Version"

    def execute(self, state: PublishState) -> StepAction:
        config = state.config
        check_artifact_file(state.artifact_path)

        self.say(state, f"Verifying box is accessible: {config.box_tag}")
        box = state.client.get_box(config.box_tag)
        if box is None:
            raise BoxNotFoundError(
                f"Box {config.box_tag} does not exist or is not accessible with this token"
            )
        if box.private:
            logger.debug("Box %s is private", config.box_tag)

        version = state.client.get_version(config.box_tag, config.version)
        if version is None:
            logger.info("Version %s of %s does not exist yet", config.version, config.box_tag)
        else:
            logger.info(
                "Found existing version %s of %s (status=%s)",
                version.version,
                config.box_tag,
                version.status.value,
            )
        state.version = version
        return StepAction.CONTINUE
