from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from .config import CONFIG_FILE, AppConfig, load_config

ENV_PREFIX = "ZENDOCS_"


class Settings(BaseSettings):
    """Environment overrides applied on top of the TOML configuration."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_file=".env", extra="ignore")

    config_path: Path = CONFIG_FILE
    service_url: str | None = None
    timeout_s: float | None = None
    enable_local_api: bool | None = None
    auto_download: bool | None = None


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


def prepare_config(settings: Settings, config_path: Path | None = None) -> AppConfig:
    config = load_config(config_path or settings.config_path)
    if settings.service_url:
        config.service.base_url = settings.service_url.rstrip("/")
    if settings.timeout_s is not None:
        config.service.timeout_s = settings.timeout_s
    if settings.enable_local_api is not None:
        config.runtime.enable_local_api = settings.enable_local_api
    if settings.auto_download is not None:
        config.runtime.auto_download = settings.auto_download
    return config


__all__ = ["ENV_PREFIX", "Settings", "get_settings", "prepare_config"]
