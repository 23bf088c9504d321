"""Rich renderables for blocks, reports and session errors."""

from __future__ import annotations

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .errors import SessionError
from .markdown import CodeLine, Heading, ListItem, Paragraph, RenderBlock
from .models import DocumentationReport

HEADING_STYLES = {1: "bold underline", 2: "bold", 3: "bold italic"}


def render_block(block: RenderBlock) -> Text:
    if isinstance(block, Heading):
        return Text(block.text, style=HEADING_STYLES.get(block.level, "bold"))
    if isinstance(block, ListItem):
        return Text(f"  • {block.text}")
    if isinstance(block, CodeLine):
        return Text(block.raw_text, style="dim cyan")
    if isinstance(block, Paragraph):
        return Text(block.text)
    raise TypeError(f"Unsupported block: {block!r}")


def render_blocks(blocks: list[RenderBlock]) -> Group:
    return Group(*(render_block(block) for block in blocks))


def report_table(report: DocumentationReport) -> Table:
    table = Table(title="Generated Documentation")
    table.add_column("File")
    table.add_column("Language")
    table.add_column("Status")
    for entry in report.entries:
        status = "[green]Success[/green]" if entry.has_documentation else "[red]Failed[/red]"
        table.add_row(entry.file, entry.language, status)
    return table


def report_footer(report: DocumentationReport) -> Text:
    footer = Text(f"{report.successful_files} of {report.processed_files} files documented")
    if report.message:
        footer.append(f" | {report.message}", style="dim")
    return footer


def error_panel(error: SessionError) -> Panel:
    titles = {
        "validation": "Invalid selection",
        "transport": "Service unavailable",
        "ingest": "Unexpected response",
    }
    return Panel(Text(error.describe()), title=titles.get(error.category, "Error"), border_style="red")


__all__ = [
    "error_panel",
    "render_block",
    "render_blocks",
    "report_footer",
    "report_table",
]
