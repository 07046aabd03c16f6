"""Configuration model for the catalog browser."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel

DEFAULT_DATA_SOURCE = str(Path(__file__).parent.parent / "data" / "rit_courses.json")
DEFAULT_CONFIG_PATH = Path.home() / ".catalogbrowser" / "config.yaml"


class Settings(BaseModel):
    data_source: str = DEFAULT_DATA_SOURCE
    fetch_timeout: Optional[float] = None  # seconds; None waits forever
    log_level: str = "WARNING"

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        config_path = config_path or DEFAULT_CONFIG_PATH
        data: dict = {}
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        env_source = os.environ.get("CATALOGBROWSER_DATA_SOURCE")
        if env_source:
            data["data_source"] = env_source
        return cls(**data)
