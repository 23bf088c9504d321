"""Upload session state machine.

One session owns the current selection and the current report. Commands
(``select_file``, ``submit``, ``reset``) come from the presentation layer and
transport outcomes are applied as events tagged with the token captured when
the submission started. An outcome whose token is no longer in flight belongs
to a superseded submission and is dropped.
"""

from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union

from .config import UploadConfig
from .detection import validate_archive
from .errors import (
    IngestError,
    SessionError,
    TransportError,
    ValidationError,
    ValidationErrorKind,
    ZenDocsError,
)
from .logging import SessionLogEntry, SessionLogger
from .models import ArchiveFile, DocumentationReport
from .report import build_report
from .transport import TransportClient

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class TransportResolved:
    token: int
    payload: Any


@dataclass(frozen=True, slots=True)
class TransportRejected:
    token: int
    error: ZenDocsError


TransportEvent = Union[TransportResolved, TransportRejected]


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    phase: Phase
    token: int
    selected_file: ArchiveFile | None
    last_error: SessionError | None
    report: DocumentationReport | None


Listener = Callable[[SessionSnapshot], None]


@dataclass(slots=True)
class _InFlight:
    token: int
    archive: ArchiveFile
    started: float


class UploadSession:
    def __init__(
        self,
        transport: TransportClient,
        *,
        upload_config: UploadConfig | None = None,
        session_logger: SessionLogger | None = None,
    ) -> None:
        self._transport = transport
        self._upload_config = upload_config or UploadConfig()
        self._session_logger = session_logger
        self._tokens = itertools.count(1)
        self._token = 0
        self._phase = Phase.IDLE
        self._selected: ArchiveFile | None = None
        self._last_error: SessionError | None = None
        self._report: DocumentationReport | None = None
        self._in_flight: _InFlight | None = None
        self._listeners: list[Listener] = []

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def token(self) -> int:
        return self._token

    @property
    def selected_file(self) -> ArchiveFile | None:
        return self._selected

    @property
    def last_error(self) -> SessionError | None:
        return self._last_error

    @property
    def report(self) -> DocumentationReport | None:
        return self._report

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            phase=self._phase,
            token=self._token,
            selected_file=self._selected,
            last_error=self._last_error,
            report=self._report,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def select_file(self, candidate: ArchiveFile) -> ArchiveFile:
        """Validate and take ownership of *candidate*.

        Raises ``ValidationError`` and leaves the session untouched when the
        candidate is not an acceptable archive.
        """

        validate_archive(candidate, self._upload_config)
        if self._in_flight is not None:
            logger.debug("Selection supersedes in-flight submission %d", self._in_flight.token)
        self._in_flight = None
        self._selected = candidate
        self._report = None
        self._last_error = None
        self._transition(Phase.FILE_SELECTED)
        return candidate

    def reset(self) -> None:
        self._in_flight = None
        self._selected = None
        self._report = None
        self._last_error = None
        self._transition(Phase.IDLE)

    async def submit(self) -> DocumentationReport | None:
        """Send the selected archive and wait for the outcome.

        Returns the new report on success and ``None`` when the submission
        failed, was superseded, or a submission was already in flight.
        """

        if self._phase is Phase.SUBMITTING:
            logger.debug("Submit ignored, submission %d still in flight", self._token)
            return None
        archive = self._selected
        if archive is None:
            raise ValidationError(ValidationErrorKind.NO_FILE_SELECTED, "Please select a file first")

        token = next(self._tokens)
        self._token = token
        self._in_flight = _InFlight(token=token, archive=archive, started=time.perf_counter())
        self._last_error = None
        self._transition(Phase.SUBMITTING)

        event: TransportEvent
        try:
            payload = await self._transport.submit_archive(archive.data, archive.metadata)
        except (TransportError, IngestError) as exc:
            event = TransportRejected(token=token, error=exc)
        except Exception as exc:
            if self._in_flight is not None and self._in_flight.token == token:
                self._in_flight = None
                self._last_error = SessionError(category="transport", kind="UNKNOWN", message=str(exc))
                self._transition(Phase.FAILED)
            raise
        else:
            event = TransportResolved(token=token, payload=payload)
        self.apply(event)
        if self._token == token and self._phase is Phase.SUCCEEDED:
            return self._report
        return None

    def apply(self, event: TransportEvent) -> bool:
        """Apply a transport outcome; returns ``False`` when it was stale."""

        in_flight = self._in_flight
        if in_flight is None or in_flight.token != event.token or self._phase is not Phase.SUBMITTING:
            logger.debug("Discarding stale transport outcome for submission %d", event.token)
            return False
        self._in_flight = None

        if isinstance(event, TransportResolved):
            try:
                report = build_report(event.payload, in_flight.archive.name)
            except IngestError as exc:
                self._fail(in_flight, exc)
            else:
                self._succeed(in_flight, report)
        else:
            self._fail(in_flight, event.error)
        return True

    def _succeed(self, in_flight: _InFlight, report: DocumentationReport) -> None:
        self._report = report
        self._selected = None
        self._last_error = None
        self._phase = Phase.SUCCEEDED
        logger.info(
            "Processed %d files (%d documented) for %s",
            report.processed_files,
            report.successful_files,
            report.project_name,
        )
        self._log_outcome(in_flight, Phase.SUCCEEDED, report=report)
        self._notify()

    def _fail(self, in_flight: _InFlight, exc: ZenDocsError) -> None:
        self._report = None
        self._last_error = SessionError.from_exception(exc)
        self._phase = Phase.FAILED
        logger.info("Submission %d failed: %s", in_flight.token, self._last_error.describe())
        self._log_outcome(in_flight, Phase.FAILED, error=self._last_error)
        self._notify()

    def _log_outcome(
        self,
        in_flight: _InFlight,
        phase: Phase,
        *,
        report: DocumentationReport | None = None,
        error: SessionError | None = None,
    ) -> None:
        if self._session_logger is None:
            return
        entry = SessionLogEntry(
            token=in_flight.token,
            archive=in_flight.archive.name,
            status=phase.value,
            size_bytes=in_flight.archive.size_bytes,
            elapsed_ms=(time.perf_counter() - in_flight.started) * 1000,
            error_category=error.category if error else None,
            error_code=error.kind if error else None,
            processed_files=report.processed_files if report else 0,
            successful_files=report.successful_files if report else 0,
        )
        try:
            self._session_logger.append(entry)
        except OSError:
            logger.exception("Could not record outcome of submission %d", in_flight.token)

    def _transition(self, phase: Phase) -> None:
        self._phase = phase
        self._notify()

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)


__all__ = [
    "Phase",
    "SessionSnapshot",
    "TransportEvent",
    "TransportRejected",
    "TransportResolved",
    "UploadSession",
]
