"""Client configuration: defaults, JSON file section, env overrides."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://rulebricks.com/api/v1"
DEFAULT_TIMEOUT = 60.0
CONFIG_FILENAME = ".rulebricks.json"


def _safe_float(value: str, default: float) -> float:
    try:
        return float(value)
    except ValueError:
        return default


@dataclass
class ClientConfig:
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> ClientConfig:
        config = cls()
        _apply_env(config)
        return config

    @classmethod
    def from_file(cls, path: Path) -> ClientConfig:
        config = cls()

        if path.exists():
            try:
                text = path.read_text()
                if text.strip():
                    data = json.loads(text)
                    section = data.get("client", {}) if isinstance(data, dict) else {}
                    if isinstance(section, dict):
                        _apply(config, section)
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Failed to load client config from {path}: {e}")

        _apply_env(config)
        return config


def load_client_config(path: Path | None = None) -> ClientConfig:
    """Load client config from .rulebricks.json, env vars taking precedence."""
    if path is None:
        path = Path.cwd() / CONFIG_FILENAME
    return ClientConfig.from_file(path)


def _apply(config: ClientConfig, data: dict[str, object]) -> None:
    if "api_key" in data and isinstance(data["api_key"], str):
        config.api_key = data["api_key"]
    if "base_url" in data and isinstance(data["base_url"], str):
        config.base_url = data["base_url"]
    if "timeout" in data and isinstance(data["timeout"], int | float):
        config.timeout = float(data["timeout"])


def _apply_env(config: ClientConfig) -> None:
    if api_key := os.environ.get("RULEBRICKS_API_KEY"):
        config.api_key = api_key
    if base_url := os.environ.get("RULEBRICKS_BASE_URL"):
        config.base_url = base_url
    if timeout := os.environ.get("RULEBRICKS_TIMEOUT"):
        config.timeout = _safe_float(timeout, config.timeout)
