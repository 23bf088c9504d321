from rich.console import Console

from conftest import report_payload
from zendocs.display import error_panel, render_blocks, report_footer, report_table
from zendocs.errors import SessionError
from zendocs.markdown import parse
from zendocs.report import build_report


def capture(renderable) -> str:
    console = Console(record=True, width=100)
    console.print(renderable)
    return console.export_text()


def test_report_table_lists_files_with_language_and_status() -> None:
    report = build_report(report_payload(), "project.zip")
    output = capture(report_table(report))
    assert "a.js" in output and "JavaScript" in output and "Success" in output
    assert "b.ts" in output and "TypeScript" in output and "Failed" in output


def test_footer_counts_and_message() -> None:
    report = build_report(report_payload(), "project.zip")
    output = capture(report_footer(report))
    assert "1 of 2 files documented" in output
    assert "Documentation generated" in output


def test_render_blocks_keeps_order() -> None:
    output = capture(render_blocks(parse("# Title\n- one\n```\ntext")))
    lines = [line.strip() for line in output.splitlines() if line.strip()]
    assert lines == ["Title", "• one", "```", "text"]


def test_error_panel_titles_by_category() -> None:
    error = SessionError(category="ingest", kind="MALFORMED_ENTRY", message="Entry 0 has no file name")
    output = capture(error_panel(error))
    assert "Unexpected response" in output
    assert "MALFORMED_ENTRY: Entry 0 has no file name" in output
