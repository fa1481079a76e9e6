"""
Config Manager

Loads config.yaml into a typed AppConfig, falling back to the packaged
factory defaults when the file cannot be read.
"""

import os
from pathlib import Path
from typing import Optional, Union

import yaml

from plunge.models.config import AppConfig
from plunge.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"
CONFIG_ENV_VAR = "PLUNGE_CONFIG"


class ConfigManager:
    """
    Main configuration manager

    Example:
        config = ConfigManager()
        config.load()

        config.app.controller.connect_timeout   # 15.0
        config.demo_data_path                    # .../config/demo_data.yaml
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        defaults_path: Union[str, Path] = CONFIG_DIR / "factory_defaults.yaml"
    ):
        """
        Args:
            config_path: Path to config.yaml (default: $PLUNGE_CONFIG, then the packaged file)
            defaults_path: Path to factory defaults fallback
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR) or CONFIG_DIR / "config.yaml"
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data = {}
        self.app: AppConfig = AppConfig()

    def load(self) -> AppConfig:
        """
        Load YAML configuration.

        Process:
        1. Load config.yaml
        2. Fallback to factory defaults on failure
        3. Build AppConfig (missing keys keep dataclass defaults)
        """
        try:
            self.data = self._read(self.config_path)
            log.info(f"Loaded {self.config_path.name}", keys=str(list(self.data.keys())))
        except Exception as ex:
            log.error("Failed to load config", path=str(self.config_path), error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")
            self.data = self._read(self.factory_defaults_path)

        self.app = AppConfig.from_dict(self.data)
        return self.app

    @staticmethod
    def _read(path: Path) -> dict:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path.name} must contain a mapping at the top level")
        return data

    @property
    def demo_data_path(self) -> Path:
        """Demo seed file; relative paths resolve against the config file's directory"""
        path = Path(self.app.demo.data_file)
        if path.is_absolute():
            return path
        candidate = self.config_path.parent / path
        if candidate.exists():
            return candidate
        return CONFIG_DIR / path
