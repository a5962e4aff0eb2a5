from __future__ import annotations

import json

import pytest

from models.compare import DiffSettings, PairingStrategy
from services.config_manager import ConfigManager


def test_defaults_without_config_file(isolated_config):
    manager = ConfigManager.get_instance()
    assert manager.config_file == isolated_config / "config.json"
    assert manager.get_diff_settings() == DiffSettings()
    assert manager.get("server") == {"host": "0.0.0.0", "port": 8000}


def test_singleton():
    assert ConfigManager.get_instance() is ConfigManager.get_instance()


def test_partial_file_is_merged_with_defaults(isolated_config):
    isolated_config.mkdir(parents=True, exist_ok=True)
    (isolated_config / "config.json").write_text(json.dumps({"diff": {"pairing": "similarity"}}))

    settings = ConfigManager.get_instance().get_diff_settings()
    assert settings.pairing == PairingStrategy.SIMILARITY
    assert settings.collapse_threshold == 3


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps({"diff": {"collapse_threshold": -1}}),
        "[]",
        "null",
        "42",
        json.dumps({"diff": "fast"}),
    ],
)
def test_broken_config_falls_back_to_defaults(isolated_config, content):
    isolated_config.mkdir(parents=True, exist_ok=True)
    (isolated_config / "config.json").write_text(content)

    assert ConfigManager.get_instance().get_diff_settings() == DiffSettings()


def test_save_config_persists(isolated_config):
    ConfigManager.get_instance().save_config({"diff": {"collapse_unchanged": True}})

    saved = json.loads((isolated_config / "config.json").read_text())
    assert saved["diff"] == {"collapse_unchanged": True}
    ConfigManager.reset_instance()
    assert ConfigManager.get_instance().get_diff_settings().collapse_unchanged is True
