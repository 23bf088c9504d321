from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, File, HTTPException, Query, Request, UploadFile
from fastapi.responses import Response

from .config import AppConfig
from .errors import ValidationError, ZenDocsError
from .logging import SessionLogger
from .markdown import parse
from .models import MARKDOWN_MIME_TYPE, ArchiveFile, DocumentationReport
from .schemas import (
    BlocksView,
    ReportView,
    SessionView,
    block_view,
    report_view,
    session_view,
)
from .session import UploadSession
from .settings import get_settings, prepare_config
from .transport import HttpTransportClient, TransportClient


def create_app(
    config_path: Path | None = None,
    *,
    require_enabled: bool = True,
    config: AppConfig | None = None,
    transport: TransportClient | None = None,
) -> FastAPI:
    config = config or prepare_config(get_settings(), config_path)
    if require_enabled and not config.runtime.enable_local_api:
        raise RuntimeError("Local API is disabled. Enable it via config.runtime.enable_local_api")

    owned_transport = transport is None
    transport = transport or HttpTransportClient(config.service)
    app = FastAPI(title="ZenDocs", version="0.1.0")
    app.state.config = config
    app.state.transport = transport
    app.state.session = UploadSession(
        transport,
        upload_config=config.upload,
        session_logger=SessionLogger(config.runtime.log_path),
    )

    def get_session(request: Request) -> UploadSession:
        session = getattr(request.app.state, "session", None)
        if session is None:
            raise HTTPException(status_code=503, detail="SESSION_UNAVAILABLE")
        return session

    def require_report(session: UploadSession) -> DocumentationReport:
        report = session.report
        if report is None:
            raise HTTPException(status_code=404, detail="REPORT_UNAVAILABLE")
        return report

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/session", response_model=SessionView)
    def get_session_state(request: Request) -> SessionView:
        return session_view(get_session(request).snapshot())

    @app.post("/session/file", response_model=SessionView)
    async def select_file(request: Request, file: UploadFile = File(...)) -> SessionView:
        session = get_session(request)
        content = await file.read()
        candidate = ArchiveFile.from_bytes(file.filename or "upload", content, file.content_type)
        try:
            session.select_file(candidate)
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=exc.code) from exc
        return session_view(session.snapshot())

    @app.post("/session/submit", response_model=SessionView)
    async def submit(request: Request) -> SessionView:
        session = get_session(request)
        try:
            await session.submit()
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=exc.code) from exc
        return session_view(session.snapshot())

    @app.post("/session/reset", response_model=SessionView)
    def reset(request: Request) -> SessionView:
        session = get_session(request)
        session.reset()
        return session_view(session.snapshot())

    @app.get("/session/report", response_model=ReportView)
    def get_report(request: Request) -> ReportView:
        report = require_report(get_session(request))
        return report_view(report, config.runtime.preview_chars)

    @app.get("/session/report/blocks", response_model=BlocksView)
    def get_blocks(request: Request, file: str | None = Query(None)) -> BlocksView:
        report = require_report(get_session(request))
        if file is None:
            text = report.documentation
            source = "documentation"
        else:
            entry = report.find_entry(file)
            if entry is None:
                raise HTTPException(status_code=404, detail="ENTRY_NOT_FOUND")
            text = entry.summary
            source = entry.file
        return BlocksView(source=source, blocks=[block_view(block) for block in parse(text)])

    @app.get("/session/report/download")
    def download(request: Request) -> Response:
        report = require_report(get_session(request))
        return Response(
            content=report.documentation,
            media_type=MARKDOWN_MIME_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{report.export_filename}"'},
        )

    @app.get("/artifacts/{identifier}")
    async def artifact(identifier: str, request: Request) -> dict[str, str]:
        client: TransportClient = request.app.state.transport
        try:
            url = await client.fetch_artifact_url(identifier)
        except ZenDocsError as exc:
            raise HTTPException(status_code=502, detail=exc.code) from exc
        return {"url": url}

    @app.on_event("shutdown")
    async def _shutdown() -> None:  # pragma: no cover - FastAPI lifecycle
        if owned_transport and isinstance(transport, HttpTransportClient):
            await transport.aclose()

    return app


__all__ = ["create_app"]
