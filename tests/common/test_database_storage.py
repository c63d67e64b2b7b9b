from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest  # noqa: TC002

from refdemo.config import storage


def test_storage_config_prefers_explicit_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("REFDEMO_DATA_DIR", str(custom))

    result = storage.get_storage_config().resolve_data_dir()

    assert result == custom.resolve()


def test_get_database_uri_uses_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite:///override.db")

    assert storage.get_database_uri() == "sqlite:///override.db"


def test_get_database_uri_creates_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("REFDEMO_DATA_DIR", str(tmp_path / "data-dir"))

    uri = storage.get_database_uri()

    expected_path = (tmp_path / "data-dir" / storage.DEFAULT_DB_FILENAME).resolve()
    assert uri == f"sqlite+pysqlite:///{expected_path}"
    assert expected_path.parent.exists()


def test_default_data_dir_follows_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("REFDEMO_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    config = storage.get_storage_config()

    assert config.resolve_data_dir() == (tmp_path / storage.APP_DIR_NAME).resolve()
