"""Configuration loading for Zenager.

Settings come from three layers, later layers winning:

1. Built-in defaults.
2. An optional ``zenager.yaml`` file.
3. ``ZENAGER_*`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "zenager.yaml"

DEFAULT_DB_PATH = "zenager.db"
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "Zenager-Kanban/1.0"
DEFAULT_PAGE_SIZE = 100
DEFAULT_MAX_PAGES = 10
DEFAULT_REQUEST_TIMEOUT = 30.0


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class Settings:
    """Runtime settings shared by the API, the CLI and the sync service."""

    db_path: str = DEFAULT_DB_PATH
    github_api_url: str = DEFAULT_GITHUB_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    page_size: int = DEFAULT_PAGE_SIZE
    max_pages: int = DEFAULT_MAX_PAGES
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_dir: str = "logs"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create settings from a dictionary.

        Raises:
            ConfigError: If unknown keys are present or a value has the wrong type.
        """
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        values: dict[str, Any] = {}
        for key, raw in data.items():
            values[key] = _coerce(key, raw, type(getattr(cls(), key)))

        settings = cls(**values)
        settings.validate()
        return settings

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ConfigError: If a value is out of range.
        """
        if self.page_size < 1:
            raise ConfigError("page_size must be at least 1")
        if self.max_pages < 1:
            raise ConfigError("max_pages must be at least 1")
        if self.request_timeout <= 0:
            raise ConfigError("request_timeout must be positive")


def _coerce(key: str, raw: Any, target: type) -> Any:
    if isinstance(raw, target):
        return raw
    try:
        if target is int:
            return int(raw)
        if target is float:
            return float(raw)
        if target is str:
            return str(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {key!r}: {raw!r}") from e
    raise ConfigError(f"Invalid value for {key!r}: {raw!r}")


def load_config(config_path: Path | str) -> dict[str, Any]:
    """Load raw settings from a YAML file.

    Args:
        config_path: Path to zenager.yaml file.

    Returns:
        The parsed mapping (may be empty).

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return data


def _env_overrides() -> dict[str, str]:
    overrides = {}
    for f in fields(Settings):
        value = os.environ.get(f"ZENAGER_{f.name.upper()}")
        if value:
            overrides[f.name] = value
    return overrides


def get_settings(config_path: Path | str | None = None) -> Settings:
    """Resolve settings from defaults, an optional YAML file and the environment.

    Args:
        config_path: Explicit config file. When omitted, ``zenager.yaml`` in the
            current directory is used if it exists.

    Returns:
        Resolved settings.

    Raises:
        ConfigError: If the config file is invalid.
    """
    data: dict[str, Any] = {}
    if config_path is not None:
        data.update(load_config(config_path))
    elif Path(CONFIG_FILENAME).exists():
        data.update(load_config(CONFIG_FILENAME))

    data.update(_env_overrides())
    return Settings.from_dict(data)


def credentials_from_env() -> tuple[str, str]:
    """Return (github_api_key, gitlab_api_key) from the environment, empty if unset."""
    return os.environ.get("GITHUB_TOKEN", ""), os.environ.get("GITLAB_TOKEN", "")
