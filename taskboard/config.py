"""Application configuration.

Defaults can be overridden by an optional YAML file and then by the
TASKBOARD_DATA_PATH, TASKBOARD_LOG_PATH and TASKBOARD_LOG_LEVEL
environment variables.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping, Optional

import yaml

from .storage import STORAGE_KEY

logger = logging.getLogger(__name__)

APP_DIR = Path.home() / ".local_share"
CONFIG_PATH = APP_DIR / "taskboard.yaml"

ENV_OVERRIDES = {
    "TASKBOARD_DATA_PATH": "data_path",
    "TASKBOARD_LOG_PATH": "log_path",
    "TASKBOARD_LOG_LEVEL": "log_level",
}


@dataclass
class AppConfig:
    data_path: str = str(APP_DIR / "taskboard_data.json")
    log_path: str = str(APP_DIR / "taskboard.log")
    storage_key: str = STORAGE_KEY
    log_level: str = "INFO"

    def resolve_paths(self) -> None:
        self.data_path = str(Path(self.data_path).expanduser())
        self.log_path = str(Path(self.log_path).expanduser())

    @classmethod
    def load(
        cls, path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None
    ) -> "AppConfig":
        """Load config from YAML, falling back to defaults."""
        cfg_path = path if path is not None else CONFIG_PATH
        known = {f.name for f in fields(cls)}
        cfg = cls()
        if cfg_path.exists():
            try:
                data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
                if not isinstance(data, dict):
                    raise ValueError("top level must be a mapping")
                cfg = cls(**{k: str(v) for k, v in data.items() if k in known})
            except (OSError, ValueError, yaml.YAMLError) as exc:
                logger.warning("Ignoring unreadable config %s: %s", cfg_path, exc)
        env = os.environ if environ is None else environ
        for var, attr in ENV_OVERRIDES.items():
            if env.get(var):
                setattr(cfg, attr, env[var])
        cfg.resolve_paths()
        return cfg
