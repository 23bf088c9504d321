"""Error taxonomy shared by the upload session and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ValidationErrorKind(str, Enum):
    NOT_AN_ARCHIVE = "NOT_AN_ARCHIVE"
    NO_FILE_SELECTED = "NO_FILE_SELECTED"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"


class TransportErrorKind(str, Enum):
    TIMEOUT = "TIMEOUT"
    NETWORK_UNREACHABLE = "NETWORK_UNREACHABLE"
    SERVER_REJECTED = "SERVER_REJECTED"


class IngestErrorKind(str, Enum):
    MISSING_DOCUMENTATION = "MISSING_DOCUMENTATION"
    MALFORMED_ENTRY = "MALFORMED_ENTRY"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"


class ZenDocsError(RuntimeError):
    category = "error"

    def __init__(self, kind: Enum, message: str) -> None:
        super().__init__(message)
        self.kind = kind

    @property
    def code(self) -> str:
        return str(self.kind.value)


class ValidationError(ZenDocsError):
    """Raised when a selection or submit command is not allowed."""

    category = "validation"


class TransportError(ZenDocsError):
    """Raised when the documentation service cannot be reached or refuses the upload."""

    category = "transport"

    def __init__(self, kind: TransportErrorKind, message: str, *, status_code: int | None = None) -> None:
        super().__init__(kind, message)
        self.status_code = status_code


class IngestError(ZenDocsError):
    """Raised when a response arrives but does not have the report shape."""

    category = "ingest"


@dataclass(frozen=True, slots=True)
class SessionError:
    category: str
    kind: str
    message: str
    status_code: int | None = None

    @classmethod
    def from_exception(cls, exc: ZenDocsError) -> "SessionError":
        return cls(
            category=exc.category,
            kind=exc.code,
            message=str(exc),
            status_code=getattr(exc, "status_code", None),
        )

    def describe(self) -> str:
        if self.status_code is not None:
            return f"{self.kind} ({self.status_code}): {self.message}"
        return f"{self.kind}: {self.message}"


__all__ = [
    "IngestError",
    "IngestErrorKind",
    "SessionError",
    "TransportError",
    "TransportErrorKind",
    "ValidationError",
    "ValidationErrorKind",
    "ZenDocsError",
]
