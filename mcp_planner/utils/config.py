"""Configuration loading from YAML and environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

_DEFAULT_PATH = Path(__file__).resolve().parent.parent.parent / "config" / "planner.yaml"


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load server config from YAML file with optional env var overrides.

    Args:
        config_path: Path to planner.yaml. Defaults to config/planner.yaml.

    Returns:
        Nested config dict.

    Example:
        >>> cfg = load_config()
        >>> cfg["server"]["name"]
        'mcp-planner'
    """
    path = get_config_path(config_path)
    config = _default_config()
    if path.exists():
        with open(path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        for section, values in loaded.items():
            if isinstance(values, dict) and isinstance(config.get(section), dict):
                config[section].update(values)
            else:
                config[section] = values
    # Env overrides
    if db_path := os.getenv("PLANNER_DATABASE_PATH"):
        config.setdefault("storage", {})["database_path"] = db_path
    if query_db := os.getenv("QUERY_DATABASE_PATH"):
        config.setdefault("query_database", {})["path"] = query_db
    if level := os.getenv("LOG_LEVEL"):
        config.setdefault("logging", {})["level"] = level
    if json_logs := os.getenv("LOG_JSON"):
        config.setdefault("logging", {})["json"] = json_logs.lower() in ("1", "true", "yes")
    return config


def get_config_path(config_path: str | Path | None = None) -> Path:
    """Return the path to the config file used for load/save."""
    if config_path is None:
        config_path = _DEFAULT_PATH
    return Path(config_path)


def save_config(config: dict[str, Any], config_path: str | Path | None = None) -> None:
    """Write config dict to YAML file."""
    path = get_config_path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config, f, default_flow_style=False, allow_unicode=True, sort_keys=False)


def _default_config() -> dict[str, Any]:
    """Default config when no file is present."""
    return {
        "server": {"name": "mcp-planner", "version": "0.0.1"},
        "storage": {"database_path": "./data/planner.db"},
        "query_database": {"path": "./data/planner.db"},
        "logging": {"level": "INFO", "json": False},
    }
