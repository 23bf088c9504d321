"""Client core for submitting project archives and reading generated documentation."""

from .config import AppConfig, load_config
from .errors import IngestError, SessionError, TransportError, ValidationError
from .markdown import CodeLine, Heading, ListItem, Paragraph, RenderBlock, parse
from .models import ArchiveFile, DocumentationReport, FileDocEntry
from .report import build_report, derive_project_name
from .session import Phase, UploadSession

__all__ = [
    "AppConfig",
    "ArchiveFile",
    "CodeLine",
    "DocumentationReport",
    "FileDocEntry",
    "Heading",
    "IngestError",
    "ListItem",
    "Paragraph",
    "Phase",
    "RenderBlock",
    "SessionError",
    "TransportError",
    "UploadSession",
    "ValidationError",
    "build_report",
    "derive_project_name",
    "load_config",
    "parse",
]
