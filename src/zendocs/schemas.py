from __future__ import annotations

from pydantic import BaseModel

from .errors import SessionError
from .markdown import RenderBlock
from .models import ArchiveFile, DocumentationReport, FileDocEntry
from .session import SessionSnapshot


class ArchiveView(BaseModel):
    name: str
    size_bytes: int
    size_mb: str
    mime_hint: str


class ErrorView(BaseModel):
    category: str
    kind: str
    message: str
    status_code: int | None = None


class EntryView(BaseModel):
    file: str
    has_documentation: bool
    summary: str
    language: str


class ReportSummary(BaseModel):
    project_name: str
    processed_files: int
    successful_files: int
    failed_files: int
    message: str | None = None
    export_filename: str


class ReportView(ReportSummary):
    entries: list[EntryView]
    documentation: str
    preview: str


class SessionView(BaseModel):
    phase: str
    token: int
    selected_file: ArchiveView | None = None
    last_error: ErrorView | None = None
    report: ReportSummary | None = None


class BlockView(BaseModel):
    kind: str
    text: str
    level: int | None = None


class BlocksView(BaseModel):
    source: str
    blocks: list[BlockView]


def archive_view(archive: ArchiveFile) -> ArchiveView:
    return ArchiveView(
        name=archive.name,
        size_bytes=archive.size_bytes,
        size_mb=archive.size_mb,
        mime_hint=archive.mime_hint,
    )


def error_view(error: SessionError) -> ErrorView:
    return ErrorView(
        category=error.category,
        kind=error.kind,
        message=error.message,
        status_code=error.status_code,
    )


def entry_view(entry: FileDocEntry) -> EntryView:
    return EntryView(
        file=entry.file,
        has_documentation=entry.has_documentation,
        summary=entry.summary,
        language=entry.language,
    )


def report_summary(report: DocumentationReport) -> ReportSummary:
    return ReportSummary(
        project_name=report.project_name,
        processed_files=report.processed_files,
        successful_files=report.successful_files,
        failed_files=report.failed_files,
        message=report.message,
        export_filename=report.export_filename,
    )


def report_view(report: DocumentationReport, preview_chars: int) -> ReportView:
    return ReportView(
        **report_summary(report).model_dump(),
        entries=[entry_view(entry) for entry in report.entries],
        documentation=report.documentation,
        preview=report.preview(preview_chars),
    )


def session_view(snapshot: SessionSnapshot) -> SessionView:
    return SessionView(
        phase=snapshot.phase.value,
        token=snapshot.token,
        selected_file=archive_view(snapshot.selected_file) if snapshot.selected_file else None,
        last_error=error_view(snapshot.last_error) if snapshot.last_error else None,
        report=report_summary(snapshot.report) if snapshot.report else None,
    )


def block_view(block: RenderBlock) -> BlockView:
    return BlockView(kind=block.kind, text=block.plain_text, level=getattr(block, "level", None))


__all__ = [
    "ArchiveView",
    "BlockView",
    "BlocksView",
    "EntryView",
    "ErrorView",
    "ReportSummary",
    "ReportView",
    "SessionView",
    "block_view",
    "report_view",
    "session_view",
]
