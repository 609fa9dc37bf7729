"""boxcloud publishing steps — registry mapping step_id to step class.

Usage::

    from boxcloud.steps import STEP_REGISTRY, get_step

    step = get_step("create_version")
    action = step.run(state)
"""

from __future__ import annotations

from boxcloud.steps.base import BaseStep
from boxcloud.steps.create_provider import CreateProviderStep
from boxcloud.steps.create_version import CreateVersionStep
from boxcloud.steps.prepare_upload import PrepareUploadStep
from boxcloud.steps.release_version import ReleaseVersionStep
from boxcloud.steps.upload_artifact import UploadArtifactStep
from boxcloud.steps.verify_version import VerifyVersionStep, check_artifact_file

# ---------------------------------------------------------------------------
# Step registry: step_id -> step class
# ---------------------------------------------------------------------------

STEP_REGISTRY: dict[str, type[BaseStep]] = {
    "verify_version": VerifyVersionStep,
    "create_version": CreateVersionStep,
    "create_provider": CreateProviderStep,
    "prepare_upload": PrepareUploadStep,
    "upload_artifact": UploadArtifactStep,
    "release_version": ReleaseVersionStep,
}

# Registry-hosted bytes: every step.
HOSTED_STEP_ORDER: list[str] = [
    "verify_version",
    "create_version",
    "create_provider",
    "prepare_upload",
    "upload_artifact",
    "release_version",
]

# Self-hosted bytes: the registry only stores the download URL.
SELF_HOSTED_STEP_ORDER: list[str] = [
    "verify_version",
    "create_version",
    "create_provider",
    "release_version",
]


def get_step(step_id: str) -> BaseStep:
    """Instantiate and return a step by its ``step_id``.

    Raises ``KeyError`` if the step_id is not registered.
    """
    try:
        cls = STEP_REGISTRY[step_id]
    except KeyError:
        raise KeyError(
            f"Unknown step_id {step_id!r}. "
            f"Registered steps: {sorted(STEP_REGISTRY.keys())}"
        ) from None
    return cls()


__all__ = [
    "BaseStep",
    "STEP_REGISTRY",
    "HOSTED_STEP_ORDER",
    "SELF_HOSTED_STEP_ORDER",
    "get_step",
    "check_artifact_file",
    "VerifyVersionStep",
    "CreateVersionStep",
    "CreateProviderStep",
    "PrepareUploadStep",
    "UploadArtifactStep",
    "ReleaseVersionStep",
]
