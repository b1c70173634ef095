"""Configuration management.

Priority: CLI overrides > environment > TOML file > defaults.
The TOML file is ``$MUSICPOS_CONFIG`` if set, else ``./musicpos.toml``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import toml
from pydantic import BaseModel, Field, ValidationError, field_validator

from musicpos.domain.exceptions import ConfigurationError


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: Literal["text", "json"] = "text"
    file: str | None = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()


class Settings(BaseModel):
    data_dir: Path = Field(default_factory=lambda: Path.cwd() / "data")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_config_path() -> Path:
    if env_path := os.getenv("MUSICPOS_CONFIG"):
        return Path(env_path)
    return Path.cwd() / "musicpos.toml"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into base recursively."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as e:
        raise ConfigurationError(f"Failed to load {path}: {e}") from e


def load_from_env() -> dict[str, Any]:
    config: dict[str, Any] = {}

    if data_dir := os.getenv("MUSICPOS_DATA_DIR"):
        config["data_dir"] = data_dir

    if level := os.getenv("MUSICPOS_LOG_LEVEL"):
        config.setdefault("logging", {})["level"] = level.upper()

    return config


def load_settings(cli_overrides: dict[str, Any] | None = None) -> Settings:
    config_dict: dict[str, Any] = {}

    config_path = get_config_path()
    if config_path.exists():
        config_dict = deep_merge(config_dict, load_toml(config_path))

    config_dict = deep_merge(config_dict, load_from_env())
    config_dict = deep_merge(config_dict, cli_overrides or {})

    try:
        return Settings(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
