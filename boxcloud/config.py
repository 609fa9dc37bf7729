"""Environment-driven settings and credential discovery.

Centralized config using pydantic-settings.  Reads from a .env file and
BOXCLOUD_* environment variables.

Examples
--------
Override via environment::

    export BOXCLOUD_LOG_LEVEL=DEBUG
    export BOXCLOUD_VAGRANT_CLOUD_URL=https://registry.internal/api/v1
    export BOXCLOUD_REQUEST_TIMEOUT=120
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from boxcloud.models.config import VAGRANT_CLOUD_URL, PublishConfig

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "VAGRANT_CLOUD_TOKEN"
LEGACY_TOKEN_ENV_VAR = "ATLAS_TOKEN"

ATLAS_TOKEN_WARNING = (
    "Warning: Using Vagrant Cloud token found in ATLAS_TOKEN. Please make sure "
    "it is correct, or set VAGRANT_CLOUD_TOKEN"
)


class BoxCloudSettings(BaseSettings):
    """Process-wide settings with environment variable overrides."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BOXCLOUD_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    vagrant_cloud_url: str = VAGRANT_CLOUD_URL
    request_timeout: float = 30.0


class ResolvedToken(BaseModel):
    """An access token plus where it came from."""

    model_config = ConfigDict(frozen=True)

    value: str = ""
    source: str = ""

    @property
    def warn_atlas_token(self) -> bool:
        """True when the token was only found in the legacy ATLAS_TOKEN."""
        return self.source == LEGACY_TOKEN_ENV_VAR


def resolve_access_token(explicit: str | None = None) -> ResolvedToken:
    """Find the registry access token.

    Order: explicit value, ``VAGRANT_CLOUD_TOKEN``, then ``ATLAS_TOKEN``.
    """
    if explicit:
        return ResolvedToken(value=explicit, source="explicit")

    token = os.environ.get(TOKEN_ENV_VAR, "")
    if token:
        return ResolvedToken(value=token, source=TOKEN_ENV_VAR)

    token = os.environ.get(LEGACY_TOKEN_ENV_VAR, "")
    if token:
        logger.debug("Access token taken from %s", LEGACY_TOKEN_ENV_VAR)
        return ResolvedToken(value=token, source=LEGACY_TOKEN_ENV_VAR)

    return ResolvedToken()


def load_publish_config(
    *,
    box_tag: str,
    version: str,
    provider: str,
    artifact: str,
    version_description: str = "",
    no_release: bool = False,
    access_token: str | None = None,
    vagrant_cloud_url: str | None = None,
    box_download_url: str = "",
    settings: BoxCloudSettings | None = None,
) -> tuple[PublishConfig, ResolvedToken]:
    """Build and validate a ``PublishConfig`` from user input and the environment.

    Raises ``ConfigurationError`` listing every missing required setting.
    """
    settings = settings or BoxCloudSettings()
    token = resolve_access_token(access_token)
    config = PublishConfig(
        box_tag=box_tag,
        version=version,
        version_description=version_description,
        no_release=no_release,
        access_token=token.value,
        vagrant_cloud_url=vagrant_cloud_url or settings.vagrant_cloud_url,
        box_download_url=box_download_url,
        provider=provider,
        artifact=artifact,
    )
    config.validate_required()
    return config, token
