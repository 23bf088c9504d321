"""Domain models for documentation reports and submitted archives."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path

from .utils import format_size_mb, truncate

MARKDOWN_MIME_TYPE = "text/markdown"
EXPORT_SUFFIX = "_documentation.md"

LANGUAGE_BY_SUFFIX: dict[str, str] = {
    ".js": "JavaScript",
    ".ts": "TypeScript",
}


def language_for(file_name: str) -> str:
    for suffix, language in LANGUAGE_BY_SUFFIX.items():
        if file_name.endswith(suffix):
            return language
    return "Unknown"


@dataclass(frozen=True, slots=True)
class FileDocEntry:
    """Documentation outcome for one source file inside the archive."""

    file: str
    has_documentation: bool
    summary: str = ""

    @property
    def language(self) -> str:
        return language_for(self.file)


@dataclass(frozen=True, slots=True)
class DocumentationReport:
    """Aggregate result of one processed archive."""

    entries: tuple[FileDocEntry, ...]
    documentation: str
    processed_files: int
    successful_files: int
    project_name: str
    message: str | None = None

    @property
    def failed_files(self) -> int:
        return self.processed_files - self.successful_files

    @property
    def export_filename(self) -> str:
        return f"{self.project_name}{EXPORT_SUFFIX}"

    def preview(self, limit: int = 2000) -> str:
        return truncate(self.documentation, limit)

    def find_entry(self, file: str) -> FileDocEntry | None:
        for entry in self.entries:
            if entry.file == file:
                return entry
        return None


@dataclass(frozen=True, slots=True)
class ArchiveMetadata:
    name: str
    size_bytes: int
    mime_hint: str


@dataclass(frozen=True, slots=True)
class ArchiveFile:
    """A candidate archive as chosen by the user, together with its bytes."""

    name: str
    size_bytes: int
    mime_hint: str = ""
    data: bytes = field(default=b"", repr=False)

    @classmethod
    def from_path(cls, path: Path) -> "ArchiveFile":
        data = path.read_bytes()
        mime, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, size_bytes=len(data), mime_hint=mime or "", data=data)

    @classmethod
    def from_bytes(cls, name: str, data: bytes, mime_hint: str | None = None) -> "ArchiveFile":
        return cls(name=Path(name).name, size_bytes=len(data), mime_hint=mime_hint or "", data=data)

    @property
    def size_mb(self) -> str:
        return format_size_mb(self.size_bytes)

    @property
    def metadata(self) -> ArchiveMetadata:
        return ArchiveMetadata(name=self.name, size_bytes=self.size_bytes, mime_hint=self.mime_hint)


__all__ = [
    "ArchiveFile",
    "ArchiveMetadata",
    "DocumentationReport",
    "EXPORT_SUFFIX",
    "FileDocEntry",
    "MARKDOWN_MIME_TYPE",
    "language_for",
]
