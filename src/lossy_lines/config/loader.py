from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from lossy_lines.config.models import AppConfig


# ConfigError is raised for invalid configuration (fail fast, before any line is read).
class ConfigError(ValueError):
    pass


def load_config(path: Path) -> AppConfig:
    # The config file itself must be valid UTF-8; lossy reading is for data, not settings.
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Config is not valid UTF-8: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config is not valid YAML: {exc}") from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    return parse_config(raw)


def parse_config(raw: dict[str, object]) -> AppConfig:
    try:
        return AppConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
