from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from services.config_manager import ConfigManager


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    # Every test gets its own config directory and a fresh singleton.
    monkeypatch.setenv("DIFF_VIEWER_CONFIG_DIR", str(tmp_path / "config"))
    ConfigManager.reset_instance()
    yield tmp_path / "config"
    ConfigManager.reset_instance()


@pytest.fixture
def client():
    from main import app

    return TestClient(app)
