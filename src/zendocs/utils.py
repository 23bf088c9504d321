from __future__ import annotations

import os
import tempfile
from pathlib import Path


def atomic_write(path: Path, data: str, encoding: str = "utf-8") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile("w", delete=False, dir=path.parent, encoding=encoding) as tmp:
        tmp.write(data)
        tmp.flush()
        os.fsync(tmp.fileno())
    os.replace(tmp.name, path)


def format_size_mb(size_bytes: int) -> str:
    return f"{size_bytes / 1024 / 1024:.2f} MB"


def truncate(text: str, limit: int, marker: str = "...") -> str:
    if limit <= 0 or len(text) <= limit:
        return text
    return text[:limit] + marker


def strip_suffix_casefold(value: str, suffix: str) -> str:
    if suffix and value.lower().endswith(suffix.lower()):
        return value[: len(value) - len(suffix)]
    return value


__all__ = ["atomic_write", "format_size_mb", "strip_suffix_casefold", "truncate"]
