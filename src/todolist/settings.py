from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .archive import ArchiveFormat


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - TODOLIST_DATA_PATH: archive file. Default '~/.todolist/todos.plist'
    - TODOLIST_ARCHIVE_FORMAT: 'binary' (default), 'xml' or 'json'
    - TODOLIST_AUTOSAVE: 'false' to save only on suspend/shutdown (default: true)
    - TODOLIST_LOG_LEVEL: logging level name for the package (default: INFO)
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    """

    data_path: Path
    archive_format: ArchiveFormat
    autosave: bool
    log_level: str
    cors_allow_origins: List[str]


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


def default_data_path() -> Path:
    """Per-user archive location: ~/.todolist/todos.plist"""
    return (Path.home() / ".todolist" / "todos.plist").resolve()


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    raw_path = os.getenv("TODOLIST_DATA_PATH")
    data_path = Path(raw_path).expanduser().resolve() if raw_path else default_data_path()

    fmt_raw = _get_env("TODOLIST_ARCHIVE_FORMAT", ArchiveFormat.BINARY.value).strip().lower()
    try:
        archive_format = ArchiveFormat(fmt_raw)
    except ValueError:
        # Fallback to binary plist if unsupported
        archive_format = ArchiveFormat.BINARY

    autosave = _parse_bool(_get_env("TODOLIST_AUTOSAVE", "true"), True)
    log_level = _get_env("TODOLIST_LOG_LEVEL", "INFO").strip().upper()
    origins = _parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*"))

    return Settings(
        data_path=data_path,
        archive_format=archive_format,
        autosave=autosave,
        log_level=log_level,
        cors_allow_origins=origins,
    )
