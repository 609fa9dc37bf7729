"""HTTP client for the Vagrant Cloud v1 box API."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar
from urllib.parse import quote

import requests

from boxcloud.errors import (
    ArtifactNotFoundError,
    RegistryAuthError,
    RegistryError,
    RegistryNotFoundError,
    RegistryServerError,
)
from boxcloud.models.config import VAGRANT_CLOUD_URL
from boxcloud.models.registry import Box, Provider, UploadTarget, Version

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

T = TypeVar("T")


class VagrantCloudClient:
    """Talks to a Vagrant Cloud compatible registry over HTTPS.

    No retries are attempted; each call either returns a parsed payload or
    raises a ``RegistryError`` subclass.

    Parameters
    ----------
    base_url:
        API root, e.g. ``https://vagrantcloud.com/api/v1``.
    access_token:
        Bearer token sent with every API request (not with uploads, which
        go to a pre-signed URL).
    timeout:
        Per-request timeout in seconds.
    session:
        Optional ``requests.Session`` to reuse.
    """

    def __init__(
        self,
        base_url: str = VAGRANT_CLOUD_URL,
        access_token: str = "",
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
            "User-Agent": "boxcloud",
        }

    # ------------------------------------------------------------------
    # Boxes and versions
    # ------------------------------------------------------------------

    def get_box(self, tag: str) -> Box | None:
        return self._get_or_none(f"box/{_tag_path(tag)}", Box.from_api)

    def get_version(self, tag: str, version: str) -> Version | None:
        return self._get_or_none(
            f"box/{_tag_path(tag)}/version/{quote(version)}", Version.from_api
        )

    def create_version(self, tag: str, version: str, description: str = "") -> Version:
        body = {"version": {"version": version, "description": description}}
        resp = self._request("POST", f"box/{_tag_path(tag)}/versions", json=body)
        return _decode(resp, Version.from_api)

    def release_version(self, tag: str, version: str) -> Version:
        resp = self._request(
            "PUT", f"box/{_tag_path(tag)}/version/{quote(version)}/release"
        )
        return _decode(resp, Version.from_api)

    # ------------------------------------------------------------------
    # Providers and uploads
    # ------------------------------------------------------------------

    def get_provider(self, tag: str, version: str, name: str) -> Provider | None:
        return self._get_or_none(
            f"box/{_tag_path(tag)}/version/{quote(version)}/provider/{quote(name)}",
            Provider.from_api,
        )

    def create_provider(
        self, tag: str, version: str, name: str, url: str | None = None
    ) -> Provider:
        provider: dict[str, Any] = {"name": name}
        if url:
            provider["url"] = url
        resp = self._request(
            "POST",
            f"box/{_tag_path(tag)}/version/{quote(version)}/providers",
            json={"provider": provider},
        )
        return _decode(resp, Provider.from_api)

    def get_upload_path(self, tag: str, version: str, name: str) -> UploadTarget:
        resp = self._request(
            "GET",
            f"box/{_tag_path(tag)}/version/{quote(version)}/provider/{quote(name)}/upload",
        )
        upload_path = _decode(resp, lambda payload: payload.get("upload_path", ""))
        if not upload_path:
            raise RegistryError("Registry did not return an upload path")
        return UploadTarget(upload_path=upload_path)

    def upload(self, upload_path: str, file_path: Path) -> None:
        """Stream the file at *file_path* to the pre-signed *upload_path*."""
        file_path = Path(file_path)
        try:
            size = file_path.stat().st_size
            logger.info("Uploading %s (%d bytes)", file_path, size)
            with file_path.open("rb") as fh:
                resp = self._session.put(
                    upload_path,
                    data=fh,
                    headers={
                        "Content-Type": "application/octet-stream",
                        "Content-Length": str(size),
                    },
                    timeout=self.timeout,
                )
        except FileNotFoundError as exc:
            raise ArtifactNotFoundError(
                f"Box file disappeared before upload: {file_path}"
            ) from exc
        except (OSError, requests.RequestException) as exc:
            raise RegistryError(f"Upload to {upload_path} failed: {exc}") from exc
        _raise_for_status(resp)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _request(self, method: str, endpoint: str, **kwargs: Any) -> requests.Response:
        """Make an API request and map error statuses to exceptions."""
        url = self._url(endpoint)
        logger.debug("%s %s", method, url)
        try:
            resp = self._session.request(
                method, url, headers=self._headers, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as exc:
            raise RegistryError(f"{method} {url} failed: {exc}") from exc
        _raise_for_status(resp)
        return resp

    def _get_or_none(
        self, endpoint: str, parse: Callable[[dict[str, Any]], T]
    ) -> T | None:
        try:
            resp = self._request("GET", endpoint)
        except RegistryNotFoundError:
            return None
        return _decode(resp, parse)


def _tag_path(tag: str) -> str:
    namespace, _, name = tag.partition("/")
    return f"{quote(namespace)}/{quote(name)}"


def _decode(resp: requests.Response, parse: Callable[[dict[str, Any]], T]) -> T:
    """Parse a successful response body, mapping malformed payloads to RegistryError."""
    try:
        payload = resp.json()
    except ValueError as exc:
        raise RegistryError(
            f"Registry returned a non-JSON body (status {resp.status_code})",
            status_code=resp.status_code,
        ) from exc
    if not isinstance(payload, dict):
        raise RegistryError(
            f"Unexpected registry payload: expected an object, got {type(payload).__name__}",
            status_code=resp.status_code,
        )
    try:
        return parse(payload)
    except (ValueError, TypeError, AttributeError) as exc:
        raise RegistryError(
            f"Unexpected registry payload: {exc}", status_code=resp.status_code
        ) from exc


def _raise_for_status(resp: requests.Response) -> None:
    if resp.ok:
        return

    detail = _error_detail(resp)
    if resp.status_code == 401:
        raise RegistryAuthError(
            f"Invalid access token: {detail}", status_code=resp.status_code
        )
    if resp.status_code == 404:
        raise RegistryNotFoundError(
            f"Resource not found: {detail}", status_code=resp.status_code
        )
    if 500 <= resp.status_code < 600:
        raise RegistryServerError(
            f"Server error {resp.status_code}: {detail}", status_code=resp.status_code
        )
    raise RegistryError(
        f"API error {resp.status_code}: {detail}", status_code=resp.status_code
    )


def _error_detail(resp: requests.Response) -> str:
    # Vagrant Cloud reports failures as {"errors": [...], "success": false}
    try:
        payload = resp.json()
    except ValueError:
        return resp.text
    if isinstance(payload, dict) and payload.get("errors"):
        return "; ".join(str(e) for e in payload["errors"])
    return resp.text
