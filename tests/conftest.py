"""Shared fixtures for the change review backend tests."""

import pytest

from routers import changes as changes_router
from services.config_manager import ConfigManager
from services.file_change_store import FileChangeStore


@pytest.fixture
def store():
    return FileChangeStore()


@pytest.fixture
def isolated_backend(tmp_path, monkeypatch):
    """Fresh singletons and a throwaway config directory."""
    monkeypatch.setenv("CHANGE_REVIEW_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setattr(ConfigManager, "_instance", None)
    monkeypatch.setattr(FileChangeStore, "_instance", None)
    monkeypatch.setattr(changes_router, "_aggregator", None)
    yield tmp_path
