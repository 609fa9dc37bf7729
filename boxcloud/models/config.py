"""Publish configuration model."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from boxcloud.errors import ConfigurationError

VAGRANT_CLOUD_URL = "https://vagrantcloud.com/api/v1"


class PublishConfig(BaseModel):
    """Settings for a single publishing run.

    Field names follow the user-facing option names (``box_tag``,
    ``artifact``, ...).  Required fields are validated explicitly via
    ``validate_required()`` rather than by pydantic so that every missing
    setting is reported in one ``ConfigurationError``.
    """

    model_config = ConfigDict(frozen=True)

    box_tag: str = ""
    version: str = ""
    version_description: str = ""
    no_release: bool = False

    access_token: str = ""
    vagrant_cloud_url: str = VAGRANT_CLOUD_URL

    # Template for self-hosted boxes; empty means the registry hosts the bytes
    box_download_url: str = ""

    # Target provider name like 'virtualbox'
    provider: str = ""
    # Local artifact file path to upload
    artifact: str = ""

    @property
    def artifact_path(self) -> Path:
        return Path(self.artifact)

    def validate_required(self) -> None:
        """Raise ``ConfigurationError`` listing every missing or malformed field."""
        problems: list[str] = []
        required = {
            "box_tag": self.box_tag,
            "version": self.version,
            "access_token": self.access_token,
            "provider": self.provider,
            "artifact": self.artifact,
        }
        for key, value in required.items():
            if not value:
                problems.append(f"{key} must be set")

        if self.box_tag:
            namespace, _, name = self.box_tag.partition("/")
            if not namespace or not name or "/" in name:
                problems.append(
                    f"box_tag must have the form 'namespace/name', got: {self.box_tag}"
                )

        if problems:
            raise ConfigurationError(problems)
