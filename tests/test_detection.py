import pytest

from zendocs.config import UploadConfig
from zendocs.detection import is_archive, validate_archive
from zendocs.errors import ValidationError, ValidationErrorKind
from zendocs.models import ArchiveFile


def test_text_file_is_rejected() -> None:
    candidate = ArchiveFile(name="report.txt", size_bytes=10, mime_hint="text/plain")
    with pytest.raises(ValidationError) as exc:
        validate_archive(candidate)
    assert exc.value.kind is ValidationErrorKind.NOT_AN_ARCHIVE


def test_extension_accepted_with_generic_mime() -> None:
    candidate = ArchiveFile(name="project.zip", size_bytes=10, mime_hint="application/octet-stream")
    assert validate_archive(candidate) is candidate


def test_mime_accepted_without_extension() -> None:
    assert is_archive(ArchiveFile(name="download", size_bytes=1, mime_hint="application/x-zip-compressed"))
    assert is_archive(ArchiveFile(name="download", size_bytes=1, mime_hint="Application/ZIP; charset=binary"))


def test_extension_is_case_insensitive() -> None:
    assert is_archive(ArchiveFile(name="PROJECT.ZIP", size_bytes=1))


def test_size_limit_applies_when_configured() -> None:
    config = UploadConfig(max_file_size_mb=1)
    candidate = ArchiveFile(name="big.zip", size_bytes=2 * 1024 * 1024)
    with pytest.raises(ValidationError) as exc:
        validate_archive(candidate, config)
    assert exc.value.kind is ValidationErrorKind.FILE_TOO_LARGE
    assert validate_archive(candidate) is candidate


def test_from_path_guesses_mime(tmp_path) -> None:
    path = tmp_path / "app.zip"
    path.write_bytes(b"PK\x03\x04data")
    candidate = ArchiveFile.from_path(path)
    assert candidate.name == "app.zip"
    assert candidate.size_bytes == 8
    assert candidate.data == b"PK\x03\x04data"
    assert is_archive(candidate)


def test_size_mb_formatting() -> None:
    assert ArchiveFile(name="a.zip", size_bytes=1572864).size_mb == "1.50 MB"
