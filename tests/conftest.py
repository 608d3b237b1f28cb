# tests/conftest.py

"""Shared pytest fixtures for the chango test-suite."""

from pathlib import Path

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point logs and the history DB at a per-test temp directory."""
    monkeypatch.setattr(Settings, "LOGS_DIR", tmp_path / "logs")
    monkeypatch.setattr(Settings, "DATA_DIR", tmp_path / "data")
    monkeypatch.setattr(
        Settings, "PRICE_DB_PATH", tmp_path / "data" / "price_history.db",
    )
