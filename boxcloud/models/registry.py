"""Remote registry entities — versions, providers and upload targets."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from boxcloud.errors import RegistryError


class VersionStatus(str, Enum):
    """Lifecycle of a version record on the registry."""

    UNRELEASED = "unreleased"
    ACTIVE = "active"
    REVOKED = "revoked"


class Provider(BaseModel):
    """A provider entry attached to a version, unique per (version, name)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    hosted: bool = True
    original_url: str | None = None
    download_url: str | None = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Provider:
        return cls(
            name=payload.get("name", ""),
            hosted=bool(payload.get("hosted", True)),
            original_url=payload.get("original_url"),
            download_url=payload.get("download_url"),
        )


class Version(BaseModel):
    """A version record, unique per (box tag, version string)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    version: str
    status: VersionStatus = VersionStatus.UNRELEASED
    description: str = ""
    providers: list[Provider] = []

    @property
    def is_released(self) -> bool:
        return self.status == VersionStatus.ACTIVE

    @property
    def is_revoked(self) -> bool:
        return self.status == VersionStatus.REVOKED

    def find_provider(self, name: str) -> Provider | None:
        for provider in self.providers:
            if provider.name == name:
                return provider
        return None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Version:
        raw_status = payload.get("status", VersionStatus.UNRELEASED.value)
        try:
            status = VersionStatus(raw_status)
        except ValueError:
            raise RegistryError(f"Unexpected version status from registry: {raw_status!r}") from None
        return cls(
            version=payload.get("version", ""),
            status=status,
            description=payload.get("description_markdown") or payload.get("description") or "",
            providers=[Provider.from_api(p) for p in payload.get("providers", [])],
        )


class Box(BaseModel):
    """A box line on the registry, identified by its ``namespace/name`` tag."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    tag: str
    private: bool = False

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Box:
        return cls(
            tag=payload.get("tag", ""),
            private=bool(payload.get("private", False)),
        )


class UploadTarget(BaseModel):
    """Where the registry wants the artifact bytes sent."""

    model_config = ConfigDict(frozen=True)

    upload_path: str
