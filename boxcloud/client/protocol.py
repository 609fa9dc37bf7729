"""Registry client protocol — the boundary the publishing steps depend on."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from boxcloud.models.registry import Box, Provider, UploadTarget, Version


@runtime_checkable
class RegistryClient(Protocol):
    """Operations the publishing steps require from a box registry.

    Every call is synchronous.  Lookups return ``None`` when the entity does
    not exist; any other failure raises a ``RegistryError``.  Retry and
    timeout policy, if any, belong to the implementation.
    """

    def get_box(self, tag: str) -> Box | None:
        ...

    def get_version(self, tag: str, version: str) -> Version | None:
        ...

    def create_version(self, tag: str, version: str, description: str = "") -> Version:
        ...

    def get_provider(self, tag: str, version: str, name: str) -> Provider | None:
        ...

    def create_provider(
        self, tag: str, version: str, name: str, url: str | None = None
    ) -> Provider:
        ...

    def get_upload_path(self, tag: str, version: str, name: str) -> UploadTarget:
        ...

    def upload(self, upload_path: str, file_path: Path) -> None:
        ...

    def release_version(self, tag: str, version: str) -> Version:
        ...
