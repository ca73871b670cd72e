"""
config — Loads config.yaml with env var overrides.

Precedence: command line > env vars > config.yaml > defaults
"""
from __future__ import annotations
import os
from pathlib import Path
from dataclasses import dataclass
import yaml

from .paths import get_dirs

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """A config file or environment value has the wrong type."""


@dataclass
class Config:
    # Display
    width: int = 80
    format: bool = False
    silent: bool = False

    # Writing
    preserve: bool = False  # keep atime/mtime after saving

    # Editing (empty = $VISUAL, then $EDITOR, then vi)
    editor: str = ""

    # Logging
    log_level: str = "WARNING"


def default_config_path() -> Path:
    return get_dirs()["config"] / "config.yaml"


def _coerce(attr: str, value, source: str):
    """Convert a YAML or env value to the type of the Config field."""
    field_type = type(getattr(Config(), attr))
    if field_type == bool:
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ConfigError(f"{source}: expected a boolean, got '{value}'")
    if field_type == int:
        if isinstance(value, bool):
            raise ConfigError(f"{source}: expected a number, got '{value}'")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"{source}: expected a number, got '{value}'")
    if attr == "log_level":
        level = str(value).strip().upper()
        if level not in _LEVELS:
            raise ConfigError(f"{source}: unknown log level '{value}'")
        return level
    return str(value)


def load_config(config_path: str | Path | None = None) -> Config:
    """Load config from YAML file, then override with env vars.

    Raises ConfigError for values that do not fit their field.
    """
    cfg = Config()

    # 1. Load from YAML if available
    if config_path is None:
        config_path = os.environ.get("TAGEDIT_CONFIG") or default_config_path()
    path = Path(config_path)
    if path.exists():
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a mapping of settings")
        for key, value in data.items():
            key_norm = key.replace("-", "_")
            if hasattr(cfg, key_norm) and value is not None:
                setattr(cfg, key_norm, _coerce(key_norm, value, f"{path}: {key}"))

    # 2. Override with env vars (TAGEDIT_ prefix)
    env_map = {
        "TAGEDIT_WIDTH": "width",
        "TAGEDIT_FORMAT": "format",
        "TAGEDIT_SILENT": "silent",
        "TAGEDIT_PRESERVE": "preserve",
        "TAGEDIT_EDITOR": "editor",
        "TAGEDIT_LOG_LEVEL": "log_level",
    }
    for env_key, attr in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            setattr(cfg, attr, _coerce(attr, val, env_key))

    return cfg
