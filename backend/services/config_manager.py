"""
Configuration Manager - Handle diff viewer settings persistence
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from models.compare import DiffSettings

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self):
        # 1st: environment variable
        config_dir = os.environ.get("DIFF_VIEWER_CONFIG_DIR")

        # 2nd: ~/.diff_viewer
        if not config_dir:
            config_dir = os.path.expanduser("~/.diff_viewer")

        config_path = Path(config_dir)
        try:
            config_path.mkdir(parents=True, exist_ok=True)
            self._config_file = config_path / "config.json"
        except OSError as e:
            logger.warning("[ConfigManager] Cannot write to %s: %s", config_dir, e)
            self._config_file = None

        # Fallback: temp directory
        if not self._config_file:
            tmp_dir = Path(tempfile.gettempdir()) / "diff_viewer"
            tmp_dir.mkdir(parents=True, exist_ok=True)
            self._config_file = tmp_dir / "config.json"
            logger.info("[ConfigManager] Using temporary config path: %s", self._config_file)

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Drop the singleton so the next access reloads from the environment"""
        cls._instance = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file"""
        if not self._config_file.exists():
            return self._default_config()

        try:
            with open(self._config_file) as f:
                loaded = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("[ConfigManager] Error loading config: %s", e)
            return self._default_config()

        if not isinstance(loaded, dict):
            logger.warning("[ConfigManager] Ignoring config file without a JSON object: %s", self._config_file)
            return self._default_config()

        config = self._default_config()
        for section, values in loaded.items():
            if isinstance(values, dict) and isinstance(config.get(section), dict):
                config[section] = {**config[section], **values}
            else:
                config[section] = values
        return config

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            "diff": DiffSettings().model_dump(mode="json"),
            "server": {"host": "0.0.0.0", "port": 8000},
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return self._config.copy()

    def get_diff_settings(self) -> DiffSettings:
        """Current diff settings, falling back to defaults when the stored ones are invalid"""
        raw = self.get_config().get("diff", {})
        try:
            return DiffSettings.model_validate(raw)
        except ValueError as e:
            logger.warning("[ConfigManager] Invalid diff settings, using defaults: %s", e)
            return DiffSettings()

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        # Merge with existing config
        self._config.update(config)

        # Ensure config directory exists
        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        # Write to file
        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}")

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)
