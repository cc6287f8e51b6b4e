"""Configuration loading and runtime settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {"level": "WARNING"},
    "status": {"lookahead_hours": 24},
    "critical_path": {"default_duration_days": 1.0},
}


@dataclass
class EngineSettings:
    """Typed view of the settings the graph engine consumes."""

    lookahead: timedelta
    default_duration_days: float
    log_level: str


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_effective_config(root: Path) -> dict[str, Any]:
    """Merge built-in defaults, ``config/default.yaml`` and ``config/local.yaml``."""
    config_dir = root / "config"
    merged = merge_dicts(DEFAULT_CONFIG, load_yaml(config_dir / "default.yaml"))
    return merge_dicts(merged, load_yaml(config_dir / "local.yaml"))


def engine_settings(config: dict[str, Any]) -> EngineSettings:
    """Project a merged config mapping onto ``EngineSettings``."""
    status_cfg = config.get("status", {})
    path_cfg = config.get("critical_path", {})
    logging_cfg = config.get("logging", {})

    hours = float(status_cfg.get("lookahead_hours", 24))
    if hours < 0:
        raise ValueError("status.lookahead_hours must not be negative.")
    return EngineSettings(
        lookahead=timedelta(hours=hours),
        default_duration_days=float(path_cfg.get("default_duration_days", 1.0)),
        log_level=str(logging_cfg.get("level", "WARNING")).upper(),
    )


def configure_logging(level: str) -> None:
    """Route ``wg.*`` loggers to stderr at the given level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
