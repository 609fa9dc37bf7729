"""Shared state carried through one publishing run.

The state is created per run, passed by reference to every step and
discarded when the run ends.  Well-known values live in named fields so
each step's inputs and outputs are explicit; ``extras`` holds anything
else a caller wants to pass along.

``error`` is the reserved failure slot: the first error recorded wins and
is what the publisher surfaces to the caller.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from boxcloud.models.config import PublishConfig
from boxcloud.models.registry import Provider, UploadTarget, Version

logger = logging.getLogger(__name__)

_MISSING = object()


class PublishState(BaseModel):
    """Typed key/value container shared by the runner and its steps.

    Single writer: exactly one runner mutates a state, sequentially, so no
    locking is done here.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    # Seeded by the publisher
    config: PublishConfig
    client: Any = None
    ui: Any = None
    artifact_id: str = ""
    artifact_path: Path = Path()
    provider_name: str = ""
    box_download_url: str = ""

    # Produced by steps
    version: Version | None = None
    provider: Provider | None = None
    upload_target: UploadTarget | None = None
    version_created: bool = False
    provider_created: bool = False

    # Run outcome
    error: BaseException | None = None
    halted: bool = False
    cancelled: bool = False

    extras: dict[str, Any] = Field(default_factory=dict)

    # ------------------------------------------------------------------
    # Bag-style access
    # ------------------------------------------------------------------

    def put(self, key: str, value: Any) -> None:
        """Store *value* under *key* (a named field or an extra)."""
        if key in type(self).model_fields and key != "extras":
            setattr(self, key, value)
        else:
            self.extras[key] = value

    def get_ok(self, key: str) -> tuple[Any, bool]:
        """Return ``(value, found)``; unset named fields count as not found."""
        if key in type(self).model_fields and key != "extras":
            value = getattr(self, key)
            return value, value is not None
        value = self.extras.get(key, _MISSING)
        if value is _MISSING:
            return None, False
        return value, True

    def get(self, key: str, default: Any = None) -> Any:
        value, found = self.get_ok(key)
        return value if found else default

    # ------------------------------------------------------------------
    # Error slot
    # ------------------------------------------------------------------

    def record_error(self, error: BaseException) -> bool:
        """Record *error* as the run's terminal error unless one is set.

        Returns True if *error* was recorded.
        """
        if self.error is not None:
            logger.debug("Ignoring secondary error, one is already recorded: %s", error)
            return False
        self.error = error
        return True

    @property
    def failed(self) -> bool:
        return self.error is not None
