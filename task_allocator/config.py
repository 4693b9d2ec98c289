"""Application configuration loaded from YAML."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Optional

import yaml

CONFIG_ENV_VAR = "TASK_ALLOCATOR_CONFIG"


@dataclass
class AppConfig:
    host: str = "0.0.0.0"
    port: int = 3001
    debug: bool = False
    log_level: str = "INFO"
    dataset: Optional[str] = None

    def __post_init__(self) -> None:
        self.log_level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")
        self.port = int(self.port)


def load_config(path: str | None = None) -> AppConfig:
    """Load configuration from ``path`` or ``$TASK_ALLOCATOR_CONFIG``.

    Missing files yield the defaults. Unknown keys are rejected.
    """
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path or not os.path.exists(path):
        return AppConfig()
    with open(path, "r", encoding="utf8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: configuration must be a mapping")
    known = {f.name for f in fields(AppConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
    config = AppConfig(**data)
    if config.dataset and not os.path.isabs(config.dataset):
        config.dataset = os.path.join(os.path.dirname(os.path.abspath(path)), config.dataset)
    return config


def apply_logging(config: AppConfig) -> None:
    """Set the package logger level from ``config``."""
    logging.getLogger("task_allocator").setLevel(config.log_level)
