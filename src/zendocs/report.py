from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .errors import IngestError, IngestErrorKind
from .models import DocumentationReport, FileDocEntry
from .utils import atomic_write, strip_suffix_casefold

ARCHIVE_SUFFIX = ".zip"


def derive_project_name(archive_name: str) -> str:
    return strip_suffix_casefold(archive_name, ARCHIVE_SUFFIX)


def _entry_from_dict(index: int, data: object) -> FileDocEntry:
    if not isinstance(data, Mapping):
        raise IngestError(IngestErrorKind.MALFORMED_ENTRY, f"Entry {index} is not an object")
    file_name = data.get("file")
    if not isinstance(file_name, str) or not file_name:
        raise IngestError(IngestErrorKind.MALFORMED_ENTRY, f"Entry {index} has no file name")
    summary = data.get("summary")
    return FileDocEntry(
        file=file_name,
        has_documentation=data.get("hasDocumentation") is True,
        summary=summary if isinstance(summary, str) else "",
    )


def _declared_count(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


def build_report(raw: Any, archive_name: str) -> DocumentationReport:
    """Turn a decoded service response into a report.

    ``successfulFiles`` from the payload is ignored and recounted from the
    entries; ``processedFiles`` falls back to the number of entries.
    """

    if not isinstance(raw, Mapping):
        raise IngestError(IngestErrorKind.MALFORMED_RESPONSE, "Response body is not a JSON object")
    documentation = raw.get("documentation")
    if not isinstance(documentation, str):
        raise IngestError(IngestErrorKind.MISSING_DOCUMENTATION, "Response has no documentation text")

    files = raw.get("files")
    if files is None:
        files = []
    if not isinstance(files, list):
        raise IngestError(IngestErrorKind.MALFORMED_ENTRY, "Response files field is not a list")
    entries = tuple(_entry_from_dict(index, item) for index, item in enumerate(files))

    successful = sum(1 for entry in entries if entry.has_documentation)
    processed = _declared_count(raw.get("processedFiles"))
    if processed is None:
        processed = len(entries)
    processed = max(processed, successful)

    message = raw.get("message")
    return DocumentationReport(
        entries=entries,
        documentation=documentation,
        processed_files=processed,
        successful_files=successful,
        project_name=derive_project_name(archive_name),
        message=message if isinstance(message, str) else None,
    )


def export_markdown(report: DocumentationReport, directory: Path) -> Path:
    destination = directory / report.export_filename
    atomic_write(destination, report.documentation)
    return destination


__all__ = ["build_report", "derive_project_name", "export_markdown"]
