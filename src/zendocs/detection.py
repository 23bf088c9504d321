from __future__ import annotations

from .config import UploadConfig
from .errors import ValidationError, ValidationErrorKind
from .models import ArchiveFile


def _normalize_mime(value: str) -> str:
    return value.split(";", 1)[0].strip().lower()


def has_archive_extension(name: str, extension: str = ".zip") -> bool:
    return name.lower().endswith(extension.lower())


def has_archive_mime(mime_hint: str | None, mime_types: tuple[str, ...]) -> bool:
    if not mime_hint:
        return False
    normalized = _normalize_mime(mime_hint)
    return normalized in {_normalize_mime(item) for item in mime_types}


def is_archive(candidate: ArchiveFile, config: UploadConfig | None = None) -> bool:
    """Accept on extension OR declared content type; browsers misreport the latter."""

    config = config or UploadConfig()
    return has_archive_extension(candidate.name, config.archive_extension) or has_archive_mime(
        candidate.mime_hint, config.mime_types
    )


def validate_archive(candidate: ArchiveFile, config: UploadConfig | None = None) -> ArchiveFile:
    config = config or UploadConfig()
    if not is_archive(candidate, config):
        raise ValidationError(
            ValidationErrorKind.NOT_AN_ARCHIVE,
            f"Please select a ZIP file (got {candidate.name or '<unnamed>'}, "
            f"type {candidate.mime_hint or 'unknown'})",
        )
    max_mb = config.max_file_size_mb
    if max_mb > 0 and candidate.size_bytes > max_mb * 1024 * 1024:
        raise ValidationError(
            ValidationErrorKind.FILE_TOO_LARGE,
            f"{candidate.name} is {candidate.size_mb}, above the {max_mb} MB limit",
        )
    return candidate


__all__ = ["has_archive_extension", "has_archive_mime", "is_archive", "validate_archive"]
