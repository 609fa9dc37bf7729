"""Shared test fixtures for boxcloud."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from boxcloud.core.state import PublishState
from boxcloud.errors import RegistryError
from boxcloud.models.artifacts import LocalBoxArtifact
from boxcloud.models.config import PublishConfig
from boxcloud.models.registry import Box, Provider, UploadTarget, Version, VersionStatus


# ---------------------------------------------------------------------------
# In-memory registry
# ---------------------------------------------------------------------------


class FakeRegistryClient:
    """In-memory registry implementing the ``RegistryClient`` protocol.

    Every call is appended to ``calls`` as ``(method, args)``.  Set
    ``failures[method] = exc`` to make a method raise.
    """

    def __init__(self, boxes: set[str] | None = None) -> None:
        self.boxes: set[str] = set(boxes or {"org/box"})
        self.versions: dict[tuple[str, str], dict[str, Any]] = {}
        self.uploads: dict[str, bytes] = {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.failures: dict[str, Exception] = {}
        self.hooks: dict[str, Callable[[], None]] = {}

    # -- helpers -----------------------------------------------------------

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        hook = self.hooks.get(method)
        if hook is not None:
            hook()
        if method in self.failures:
            raise self.failures[method]

    def called(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    @property
    def method_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def seed_version(
        self,
        tag: str,
        version: str,
        status: VersionStatus = VersionStatus.UNRELEASED,
        providers: list[Provider] | None = None,
    ) -> None:
        self.versions[(tag, version)] = {
            "status": status,
            "description": "",
            "providers": {p.name: p for p in providers or []},
        }

    def _version(self, tag: str, version: str) -> Version:
        record = self.versions[(tag, version)]
        return Version(
            version=version,
            status=record["status"],
            description=record["description"],
            providers=list(record["providers"].values()),
        )

    # -- RegistryClient ----------------------------------------------------

    def get_box(self, tag: str) -> Box | None:
        self._record("get_box", tag)
        return Box(tag=tag) if tag in self.boxes else None

    def get_version(self, tag: str, version: str) -> Version | None:
        self._record("get_version", tag, version)
        if (tag, version) not in self.versions:
            return None
        return self._version(tag, version)

    def create_version(self, tag: str, version: str, description: str = "") -> Version:
        self._record("create_version", tag, version, description)
        if (tag, version) in self.versions:
            raise RegistryError("Version has already been taken", status_code=422)
        self.seed_version(tag, version)
        self.versions[(tag, version)]["description"] = description
        return self._version(tag, version)

    def get_provider(self, tag: str, version: str, name: str) -> Provider | None:
        self._record("get_provider", tag, version, name)
        record = self.versions.get((tag, version))
        if record is None:
            return None
        return record["providers"].get(name)

    def create_provider(
        self, tag: str, version: str, name: str, url: str | None = None
    ) -> Provider:
        self._record("create_provider", tag, version, name, url)
        record = self.versions[(tag, version)]
        if name in record["providers"]:
            raise RegistryError("Provider has already been taken", status_code=422)
        provider = Provider(name=name, hosted=url is None, original_url=url)
        record["providers"][name] = provider
        return provider

    def get_upload_path(self, tag: str, version: str, name: str) -> UploadTarget:
        self._record("get_upload_path", tag, version, name)
        return UploadTarget(upload_path=f"https://upload.example.test/{tag}/{version}/{name}")

    def upload(self, upload_path: str, file_path: Path) -> None:
        self._record("upload", upload_path, file_path)
        self.uploads[upload_path] = Path(file_path).read_bytes()

    def release_version(self, tag: str, version: str) -> Version:
        self._record("release_version", tag, version)
        record = self.versions[(tag, version)]
        if not record["providers"]:
            raise RegistryError("Version must have at least one provider", status_code=422)
        record["status"] = VersionStatus.ACTIVE
        return self._version(tag, version)


class RecordingUi:
    """``Ui`` implementation that keeps every line for assertions."""

    def __init__(self) -> None:
        self.lines: list[tuple[str, str]] = []

    def say(self, message: str) -> None:
        self.lines.append(("say", message))

    def message(self, message: str) -> None:
        self.lines.append(("message", message))

    def error(self, message: str) -> None:
        self.lines.append(("error", message))

    @property
    def text(self) -> str:
        return "\n".join(line for _, line in self.lines)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def registry() -> FakeRegistryClient:
    """Provide an empty in-memory registry that knows the box ``org/box``."""
    return FakeRegistryClient()


@pytest.fixture
def ui() -> RecordingUi:
    return RecordingUi()


@pytest.fixture
def box_file(tmp_path: Path) -> Path:
    """Provide a non-empty ``build/package.box`` file."""
    path = tmp_path / "build" / "package.box"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"box-bytes" * 64)
    return path


@pytest.fixture
def make_config(box_file: Path) -> Callable[..., PublishConfig]:
    """Factory fixture: build a PublishConfig with the example defaults."""

    def _factory(**overrides: Any) -> PublishConfig:
        defaults: dict[str, Any] = {
            "box_tag": "org/box",
            "version": "1.0.0",
            "provider": "virtualbox",
            "artifact": str(box_file),
            "access_token": "test-token",
        }
        defaults.update(overrides)
        return PublishConfig(**defaults)

    return _factory


@pytest.fixture
def make_state(
    make_config: Callable[..., PublishConfig],
    registry: FakeRegistryClient,
    ui: RecordingUi,
) -> Callable[..., PublishState]:
    """Factory fixture: a PublishState seeded the way the publisher seeds it."""

    def _factory(config: PublishConfig | None = None, **overrides: Any) -> PublishState:
        config = config or make_config()
        defaults: dict[str, Any] = {
            "config": config,
            "client": registry,
            "ui": ui,
            "artifact_id": "package",
            "artifact_path": config.artifact_path,
            "provider_name": config.provider,
        }
        defaults.update(overrides)
        return PublishState(**defaults)

    return _factory


@pytest.fixture
def artifact(box_file: Path) -> LocalBoxArtifact:
    return LocalBoxArtifact.from_path(box_file)
