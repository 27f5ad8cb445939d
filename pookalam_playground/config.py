"""Runtime configuration for the Pookalam Playground.

Defaults live in :class:`PlaygroundConfig`. A JSON file can override any field;
its location comes from ``POOKALAM_CONFIG`` or falls back to
``pookalam_config.json`` next to this module. ``POOKALAM_LOG_LEVEL`` wins over
both for the log level.
"""
from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from .logger import get_logger

CONFIG_ENV = "POOKALAM_CONFIG"
LOG_LEVEL_ENV = "POOKALAM_LOG_LEVEL"
DEFAULT_CONFIG_PATH = Path(__file__).with_name("pookalam_config.json")

log = get_logger("config")


@dataclass
class PlaygroundConfig:
    canvas_size: float = 800.0
    grid_step: float = 10.0
    history_limit: int = 50
    export_size: int = 1600
    ring_segments: int = 96
    default_size: float = 40.0
    default_radial: int = 8
    log_level: str = "INFO"

    @property
    def canvas_center(self) -> float:
        return self.canvas_size / 2.0

    def asdict(self) -> Dict[str, Any]:
        return asdict(self)


def _coerce(raw: Any, default: Any) -> Any:
    if isinstance(default, bool):
        return bool(raw)
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    return str(raw)


def load_config(path: Optional[Path | str] = None) -> PlaygroundConfig:
    """Build a config from defaults, an optional JSON file and the environment."""
    config = PlaygroundConfig()
    if path is None:
        env_path = os.getenv(CONFIG_ENV)
        path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
    config_path = Path(path)

    if config_path.exists():
        try:
            with config_path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            log.warning("Ignoring unreadable config %s: %s", config_path, exc)
            data = {}
        if not isinstance(data, dict):
            log.warning("Ignoring config %s: expected a JSON object", config_path)
            data = {}
        for item in fields(PlaygroundConfig):
            if item.name not in data:
                continue
            default = getattr(config, item.name)
            try:
                setattr(config, item.name, _coerce(data[item.name], default))
            except (TypeError, ValueError):
                log.warning("Ignoring invalid value for %s in %s", item.name, config_path)

    level = os.getenv(LOG_LEVEL_ENV)
    if level:
        config.log_level = level.upper()
    return config


_config: Optional[PlaygroundConfig] = None


def get_config() -> PlaygroundConfig:
    """Return the process-wide config, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Optional[PlaygroundConfig]) -> None:
    """Replace (or with ``None`` reset) the process-wide config."""
    global _config
    _config = config
