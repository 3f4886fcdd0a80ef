from pathlib import Path

from todolist.archive import ArchiveFormat
from todolist.settings import default_data_path, get_settings

ENV_VARS = [
    "TODOLIST_DATA_PATH",
    "TODOLIST_ARCHIVE_FORMAT",
    "TODOLIST_AUTOSAVE",
    "TODOLIST_LOG_LEVEL",
    "CORS_ALLOW_ORIGINS",
]


def clear_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    clear_env(monkeypatch)
    settings = get_settings()
    assert settings.data_path == default_data_path()
    assert settings.data_path.name == "todos.plist"
    assert settings.archive_format is ArchiveFormat.BINARY
    assert settings.autosave is True
    assert settings.log_level == "INFO"
    assert settings.cors_allow_origins == ["*"]


def test_env_overrides(monkeypatch, tmp_path: Path):
    clear_env(monkeypatch)
    monkeypatch.setenv("TODOLIST_DATA_PATH", str(tmp_path / "mine.json"))
    monkeypatch.setenv("TODOLIST_ARCHIVE_FORMAT", " JSON ")
    monkeypatch.setenv("TODOLIST_AUTOSAVE", "off")
    monkeypatch.setenv("TODOLIST_LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://localhost:3000, http://127.0.0.1:3000")

    settings = get_settings()
    assert settings.data_path == (tmp_path / "mine.json").resolve()
    assert settings.archive_format is ArchiveFormat.JSON
    assert settings.autosave is False
    assert settings.log_level == "DEBUG"
    assert settings.cors_allow_origins == ["http://localhost:3000", "http://127.0.0.1:3000"]


def test_unknown_format_falls_back_to_binary(monkeypatch):
    clear_env(monkeypatch)
    monkeypatch.setenv("TODOLIST_ARCHIVE_FORMAT", "yaml")
    assert get_settings().archive_format is ArchiveFormat.BINARY
