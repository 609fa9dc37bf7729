"""boxcloud data models — Pydantic v2, frozen unless they carry run state."""

from boxcloud.models.artifacts import (
    BUILDER_ID,
    BoxArtifact,
    LocalBoxArtifact,
    SourceArtifact,
)
from boxcloud.models.config import VAGRANT_CLOUD_URL, PublishConfig
from boxcloud.models.registry import Box, Provider, UploadTarget, Version, VersionStatus
from boxcloud.models.runs import (
    VALID_TRANSITIONS,
    RunnerState,
    RunReport,
    StepAction,
)

__all__ = [
    # artifacts
    "BUILDER_ID",
    "BoxArtifact",
    "LocalBoxArtifact",
    "SourceArtifact",
    # config
    "VAGRANT_CLOUD_URL",
    "PublishConfig",
    # registry
    "Box",
    "Provider",
    "UploadTarget",
    "Version",
    "VersionStatus",
    # runs
    "StepAction",
    "RunnerState",
    "RunReport",
    "VALID_TRANSITIONS",
]
