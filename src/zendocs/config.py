from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping


CONFIG_FILE = Path("zendocs.toml")

DEFAULT_SERVICE_URL = "https://codenarrator-production.up.railway.app/api/docs"

ARCHIVE_MIME_TYPES: tuple[str, ...] = (
    "application/zip",
    "application/x-zip",
    "application/x-zip-compressed",
    "multipart/x-zip",
)


@dataclass(slots=True)
class ServiceConfig:
    base_url: str = DEFAULT_SERVICE_URL
    generate_path: str = "/generate"
    artifact_path: str = "/download/{identifier}"
    upload_field: str = "projectZip"
    timeout_s: float = 180.0
    connect_timeout_s: float = 10.0


@dataclass(slots=True)
class UploadConfig:
    archive_extension: str = ".zip"
    mime_types: tuple[str, ...] = ARCHIVE_MIME_TYPES
    # 0 disables the size check
    max_file_size_mb: int = 0


@dataclass(slots=True)
class RuntimeConfig:
    output_dir: Path = Path("runs")
    log_file: str = "log.jsonl"
    preview_chars: int = 2000
    auto_download: bool = False
    enable_local_api: bool = False

    @property
    def log_path(self) -> Path:
        return self.output_dir / self.log_file


@dataclass(slots=True)
class APIConfig:
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass(slots=True)
class AppConfig:
    service: ServiceConfig = field(default_factory=ServiceConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    api: APIConfig = field(default_factory=APIConfig)


def _read_toml(path: Path) -> Mapping[str, object]:
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _section(raw: Mapping[str, object], name: str) -> Mapping[str, object] | None:
    value = raw.get(name)
    return value if isinstance(value, Mapping) else None


def _build_service(data: Mapping[str, object] | None) -> ServiceConfig:
    if not data:
        return ServiceConfig()
    return ServiceConfig(
        base_url=str(data.get("base_url", DEFAULT_SERVICE_URL)).rstrip("/"),
        generate_path=str(data.get("generate_path", "/generate")),
        artifact_path=str(data.get("artifact_path", "/download/{identifier}")),
        upload_field=str(data.get("upload_field", "projectZip")),
        timeout_s=float(data.get("timeout_s", 180.0)),
        connect_timeout_s=float(data.get("connect_timeout_s", 10.0)),
    )


def _tuple_of_strings(value: object | None, default: Iterable[str]) -> tuple[str, ...]:
    if not value:
        return tuple(default)
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Iterable):
        return tuple(str(item) for item in value)
    raise TypeError(f"Unsupported mime_types configuration: {value!r}")


def _build_upload(data: Mapping[str, object] | None) -> UploadConfig:
    if not data:
        return UploadConfig()
    return UploadConfig(
        archive_extension=str(data.get("archive_extension", ".zip")),
        mime_types=_tuple_of_strings(data.get("mime_types"), ARCHIVE_MIME_TYPES),
        max_file_size_mb=int(data.get("max_file_size_mb", 0)),
    )


def _build_runtime(data: Mapping[str, object] | None) -> RuntimeConfig:
    if not data:
        return RuntimeConfig()
    return RuntimeConfig(
        output_dir=Path(str(data.get("output_dir", "runs"))),
        log_file=str(data.get("log_file", "log.jsonl")),
        preview_chars=int(data.get("preview_chars", 2000)),
        auto_download=bool(data.get("auto_download", False)),
        enable_local_api=bool(data.get("enable_local_api", False)),
    )


def _build_api(data: Mapping[str, object] | None) -> APIConfig:
    if not data:
        return APIConfig()
    return APIConfig(host=str(data.get("host", "127.0.0.1")), port=int(data.get("port", 8000)))


def load_config(path: Path | None = None) -> AppConfig:
    path = path or CONFIG_FILE
    raw = _read_toml(path)
    return AppConfig(
        service=_build_service(_section(raw, "service")),
        upload=_build_upload(_section(raw, "upload")),
        runtime=_build_runtime(_section(raw, "runtime")),
        api=_build_api(_section(raw, "api")),
    )


def dump_config(config: AppConfig) -> str:
    payload = {
        "service": {
            "base_url": config.service.base_url,
            "generate_path": config.service.generate_path,
            "artifact_path": config.service.artifact_path,
            "upload_field": config.service.upload_field,
            "timeout_s": config.service.timeout_s,
            "connect_timeout_s": config.service.connect_timeout_s,
        },
        "upload": {
            "archive_extension": config.upload.archive_extension,
            "mime_types": list(config.upload.mime_types),
            "max_file_size_mb": config.upload.max_file_size_mb,
        },
        "runtime": {
            "output_dir": str(config.runtime.output_dir),
            "log_file": config.runtime.log_file,
            "preview_chars": config.runtime.preview_chars,
            "auto_download": config.runtime.auto_download,
            "enable_local_api": config.runtime.enable_local_api,
        },
        "api": {
            "host": config.api.host,
            "port": config.api.port,
        },
    }
    return json.dumps(payload, indent=2)


__all__ = [
    "APIConfig",
    "AppConfig",
    "ARCHIVE_MIME_TYPES",
    "CONFIG_FILE",
    "RuntimeConfig",
    "ServiceConfig",
    "UploadConfig",
    "dump_config",
    "load_config",
]
