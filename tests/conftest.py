from __future__ import annotations

import asyncio
from typing import Any

import pytest

from zendocs.errors import TransportError, TransportErrorKind
from zendocs.models import ArchiveFile, ArchiveMetadata


def report_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "documentation": "# project\n\n- a.js documented",
        "files": [
            {"file": "a.js", "hasDocumentation": True, "summary": "## a.js\nDoes things."},
            {"file": "b.ts", "hasDocumentation": False, "summary": ""},
        ],
        "processedFiles": 2,
        "successfulFiles": 1,
        "message": "Documentation generated",
    }
    payload.update(overrides)
    return payload


class FakeTransport:
    """Records calls and answers with queued payloads or errors."""

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes) or [report_payload()]
        self.calls: list[ArchiveMetadata] = []
        self.gate: asyncio.Event | None = None
        self.artifacts: dict[str, str] = {}

    async def submit_archive(self, data: bytes, metadata: ArchiveMetadata) -> Any:
        self.calls.append(metadata)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def fetch_artifact_url(self, identifier: str) -> str:
        if identifier not in self.artifacts:
            raise TransportError(TransportErrorKind.SERVER_REJECTED, "Not found", status_code=404)
        return self.artifacts[identifier]


@pytest.fixture
def archive() -> ArchiveFile:
    return ArchiveFile(name="project.zip", size_bytes=4, mime_hint="application/zip", data=b"PK\x03\x04")
