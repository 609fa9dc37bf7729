"""Artifact models — the build output consumed and the published result."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

BUILDER_ID = "boxcloud.post-processor.vagrant-cloud"


@runtime_checkable
class SourceArtifact(Protocol):
    """The build output being published.

    Only the identifier (used in download URL templates) and the local file
    path are read by the pipeline.
    """

    @property
    def id(self) -> str:
        ...

    @property
    def file_path(self) -> Path:
        ...


class LocalBoxArtifact(BaseModel):
    """A ``.box`` file on disk, used when publishing from the command line."""

    model_config = ConfigDict(frozen=True)

    id: str
    file_path: Path

    @classmethod
    def from_path(cls, path: str | Path, artifact_id: str | None = None) -> LocalBoxArtifact:
        path = Path(path)
        return cls(id=artifact_id or path.stem, file_path=path)


class BoxArtifact(BaseModel):
    """Identity of a published box: provider name plus box tag.

    Does not reference the bytes, only where they were published.
    """

    model_config = ConfigDict(frozen=True)

    provider_name: str
    box_tag: str

    @property
    def builder_id(self) -> str:
        return BUILDER_ID

    @property
    def id(self) -> str:
        return f"{self.provider_name}/{self.box_tag}"

    def string(self) -> str:
        return f"'{self.provider_name}': {self.box_tag}"

    def __str__(self) -> str:
        return self.string()
