from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable

import typer
from rich.console import Console

from ..config import AppConfig, ServiceConfig, dump_config
from ..display import error_panel, render_blocks, report_footer, report_table
from ..errors import ValidationError, ZenDocsError
from ..logging import SessionLogger
from ..markdown import parse
from ..models import ArchiveFile, DocumentationReport
from ..report import export_markdown
from ..session import Phase, UploadSession
from ..settings import get_settings, prepare_config
from ..transport import HttpTransportClient, TransportClient

console = Console()

app = typer.Typer(help="Generate documentation for JavaScript/TypeScript project archives")

# Replaced in tests to run commands against a stub service.
transport_factory: Callable[[ServiceConfig], TransportClient] = HttpTransportClient


def _load_config(path: Path | None) -> AppConfig:
    return prepare_config(get_settings(), path)


async def _close(transport: TransportClient) -> None:
    aclose = getattr(transport, "aclose", None)
    if aclose is not None:
        await aclose()


async def _run_session(cfg: AppConfig, candidate: ArchiveFile) -> UploadSession:
    transport = transport_factory(cfg.service)
    try:
        session = UploadSession(
            transport,
            upload_config=cfg.upload,
            session_logger=SessionLogger(cfg.runtime.log_path),
        )
        session.select_file(candidate)
        with console.status("Processing..."):
            await session.submit()
        return session
    finally:
        await _close(transport)


def _show_report(report: DocumentationReport, preview_chars: int, show_preview: bool) -> None:
    console.print(report_table(report))
    console.print(report_footer(report))
    if show_preview and report.documentation:
        console.rule("Documentation Preview")
        console.print(render_blocks(parse(report.preview(preview_chars))))


@app.command()
def generate(
    archive: Path,
    config: Path | None = typer.Option(None, "--config", help="Path to zendocs.toml"),
    save: bool = typer.Option(False, "--save", help="Write <project>_documentation.md on success"),
    output_dir: Path = typer.Option(Path("."), "--output-dir", help="Where the markdown file is written"),
    preview: bool = typer.Option(True, "--preview/--no-preview", help="Render the documentation preview"),
) -> None:
    cfg = _load_config(config)
    if not archive.is_file():
        console.print(f"[red]File not found[/red]: {archive}")
        raise typer.Exit(1)
    candidate = ArchiveFile.from_path(archive)
    try:
        session = asyncio.run(_run_session(cfg, candidate))
    except ValidationError as exc:
        console.print(f"[red]{exc.code}[/red]: {exc}")
        raise typer.Exit(1) from exc

    if session.phase is not Phase.SUCCEEDED or session.report is None:
        if session.last_error is not None:
            console.print(error_panel(session.last_error))
        raise typer.Exit(1)

    report = session.report
    console.print(f"[green]Processed {report.processed_files} files![/green]")
    _show_report(report, cfg.runtime.preview_chars, preview)
    if save or cfg.runtime.auto_download:
        destination = export_markdown(report, output_dir)
        console.print(f"Saved {destination}")


@app.command()
def render(
    file: Path,
    raw: bool = typer.Option(False, "--raw", help="Print block kinds instead of styled text"),
) -> None:
    text = file.read_text(encoding="utf-8")
    blocks = parse(text)
    if raw:
        for block in blocks:
            typer.echo(f"{block.kind}\t{block.plain_text}")
        return
    console.print(render_blocks(blocks))


@app.command()
def artifact(
    identifier: str,
    config: Path | None = typer.Option(None, "--config", help="Path to zendocs.toml"),
) -> None:
    cfg = _load_config(config)

    async def _fetch() -> str:
        transport = transport_factory(cfg.service)
        try:
            return await transport.fetch_artifact_url(identifier)
        finally:
            await _close(transport)

    try:
        url = asyncio.run(_fetch())
    except ZenDocsError as exc:
        console.print(f"[red]{exc.code}[/red]: {exc}")
        raise typer.Exit(1) from exc
    typer.echo(url)


@app.command()
def serve(
    config: Path | None = typer.Option(None, "--config", help="Path to zendocs.toml"),
) -> None:
    import uvicorn

    from ..api import create_app

    cfg = _load_config(config)
    try:
        api = create_app(config=cfg)
    except RuntimeError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc
    uvicorn.run(api, host=cfg.api.host, port=cfg.api.port)


@app.command("config")
def show_config(
    config: Path | None = typer.Option(None, "--config", help="Path to zendocs.toml"),
) -> None:
    console.print_json(dump_config(_load_config(config)))


if __name__ == "__main__":
    app()
