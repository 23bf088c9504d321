"""HTTP transport to the documentation generation service."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import httpx

from .config import ServiceConfig
from .errors import IngestError, IngestErrorKind, TransportError, TransportErrorKind
from .models import ArchiveMetadata

logger = logging.getLogger(__name__)

ARCHIVE_CONTENT_TYPE = "application/zip"


class TransportClient(Protocol):
    async def submit_archive(self, data: bytes, metadata: ArchiveMetadata) -> Any:  # pragma: no cover - interface
        ...

    async def fetch_artifact_url(self, identifier: str) -> str:  # pragma: no cover - interface
        ...


def _rejection_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None
    if isinstance(payload, dict):
        for key in ("message", "error", "detail"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    text = response.text.strip()
    return text[:500] if text else response.reason_phrase or "Request rejected"


class HttpTransportClient:
    """``TransportClient`` backed by ``httpx.AsyncClient``.

    Network failures are mapped onto ``TransportError`` kinds; a body that is
    not JSON is an ``IngestError`` since the service was reachable.
    """

    def __init__(self, config: ServiceConfig, *, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=config.base_url,
            timeout=httpx.Timeout(config.timeout_s, connect=config.connect_timeout_s),
        )

    async def __aenter__(self) -> "HttpTransportClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def submit_archive(self, data: bytes, metadata: ArchiveMetadata) -> Any:
        files = {
            self._config.upload_field: (metadata.name, data, metadata.mime_hint or ARCHIVE_CONTENT_TYPE),
        }
        logger.info("Uploading %s (%d bytes)", metadata.name, metadata.size_bytes)
        response = await self._send("POST", self._config.generate_path, files=files)
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise IngestError(IngestErrorKind.MALFORMED_RESPONSE, "Response body is not valid JSON") from exc

    async def fetch_artifact_url(self, identifier: str) -> str:
        path = self._config.artifact_path.format(identifier=identifier)
        response = await self._send("GET", path)
        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise IngestError(IngestErrorKind.MALFORMED_RESPONSE, "Artifact response is not valid JSON") from exc
        url = payload.get("url") if isinstance(payload, dict) else None
        if not isinstance(url, str) or not url:
            raise IngestError(IngestErrorKind.MALFORMED_RESPONSE, f"No download URL for {identifier}")
        return url

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            raise TransportError(
                TransportErrorKind.TIMEOUT,
                f"No response within {self._config.timeout_s:g} seconds",
            ) from exc
        except httpx.TransportError as exc:
            raise TransportError(
                TransportErrorKind.NETWORK_UNREACHABLE,
                f"Documentation service unreachable: {exc}",
            ) from exc
        if response.is_error:
            message = _rejection_message(response)
            logger.warning("%s %s rejected with %d: %s", method, path, response.status_code, message)
            raise TransportError(
                TransportErrorKind.SERVER_REJECTED,
                message,
                status_code=response.status_code,
            )
        return response


__all__ = ["HttpTransportClient", "TransportClient"]
