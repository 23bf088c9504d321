import pytest

from zendocs.errors import IngestError, IngestErrorKind
from zendocs.models import FileDocEntry, language_for
from zendocs.report import build_report, derive_project_name, export_markdown


def sample_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "documentation": "# a.js\n\nx",
        "files": [
            {"file": "a.js", "hasDocumentation": True, "summary": "x"},
            {"file": "b.ts", "hasDocumentation": False, "summary": ""},
        ],
        "processedFiles": 2,
        "successfulFiles": 2,
    }
    payload.update(overrides)
    return payload


def test_successful_files_is_recomputed() -> None:
    report = build_report(sample_payload(), "project.zip")
    assert report.successful_files == 1
    assert report.processed_files == 2
    assert report.failed_files == 1
    assert report.project_name == "project"
    assert report.entries == (
        FileDocEntry("a.js", True, "x"),
        FileDocEntry("b.ts", False, ""),
    )


def test_processed_files_defaults_to_entry_count() -> None:
    payload = sample_payload()
    del payload["processedFiles"]
    assert build_report(payload, "p.zip").processed_files == 2
    assert build_report(sample_payload(processedFiles="lots"), "p.zip").processed_files == 2


def test_processed_files_never_below_successful() -> None:
    report = build_report(sample_payload(processedFiles=0), "p.zip")
    assert report.processed_files == 1
    assert report.successful_files == 1


def test_missing_documentation_is_rejected() -> None:
    payload = sample_payload()
    del payload["documentation"]
    with pytest.raises(IngestError) as exc:
        build_report(payload, "p.zip")
    assert exc.value.kind is IngestErrorKind.MISSING_DOCUMENTATION
    assert exc.value.category == "ingest"


def test_entry_without_file_name_is_rejected() -> None:
    payload = sample_payload(files=[{"hasDocumentation": True, "summary": "x"}])
    with pytest.raises(IngestError) as exc:
        build_report(payload, "p.zip")
    assert exc.value.kind is IngestErrorKind.MALFORMED_ENTRY


def test_non_object_payload_is_rejected() -> None:
    with pytest.raises(IngestError) as exc:
        build_report(["not", "an", "object"], "p.zip")
    assert exc.value.kind is IngestErrorKind.MALFORMED_RESPONSE


def test_empty_documentation_and_no_files_is_valid() -> None:
    report = build_report({"documentation": ""}, "empty.zip")
    assert report.entries == ()
    assert report.processed_files == 0
    assert report.successful_files == 0


def test_entry_order_is_preserved() -> None:
    files = [{"file": name, "hasDocumentation": True} for name in ("z.js", "a.js", "m.ts")]
    report = build_report({"documentation": "", "files": files}, "p.zip")
    assert [entry.file for entry in report.entries] == ["z.js", "a.js", "m.ts"]


def test_message_is_carried_through() -> None:
    report = build_report(sample_payload(message="Documentation generated"), "p.zip")
    assert report.message == "Documentation generated"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("project.zip", "project"),
        ("Project.ZIP", "Project"),
        ("bundle.zip.zip", "bundle.zip"),
        ("notes.tar.gz", "notes.tar.gz"),
        ("zip", "zip"),
    ],
)
def test_derive_project_name(name: str, expected: str) -> None:
    assert derive_project_name(name) == expected


def test_language_labels() -> None:
    assert language_for("src/index.js") == "JavaScript"
    assert language_for("src/app.ts") == "TypeScript"
    assert language_for("README.md") == "Unknown"


def test_preview_truncates_long_documentation() -> None:
    report = build_report(sample_payload(documentation="x" * 2500), "p.zip")
    preview = report.preview(2000)
    assert preview == "x" * 2000 + "..."
    assert build_report(sample_payload(documentation="short"), "p.zip").preview(2000) == "short"


def test_export_markdown_uses_project_name(tmp_path) -> None:
    report = build_report(sample_payload(), "my-app.zip")
    destination = export_markdown(report, tmp_path)
    assert destination.name == "my-app_documentation.md"
    assert destination.read_text(encoding="utf-8") == report.documentation


def test_find_entry() -> None:
    report = build_report(sample_payload(), "p.zip")
    assert report.find_entry("b.ts") == FileDocEntry("b.ts", False, "")
    assert report.find_entry("missing.js") is None


@pytest.mark.parametrize("flag", ["false", "true", 1, None])
def test_only_literal_true_counts_as_documented(flag: object) -> None:
    payload = sample_payload(files=[{"file": "a.js", "hasDocumentation": flag, "summary": "x"}])
    report = build_report(payload, "p.zip")
    assert report.successful_files == 0
    assert report.entries[0].has_documentation is False
