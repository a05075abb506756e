# src/pints/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/pints/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `PINTS_LOG_LEVEL`, `PINTS_OVERPASS_URL`)
- an external YAML file via `PINTS_CONFIG_PATH`

Design rule:
- Tuning knobs (search radius, refresh threshold, labels) live in YAML, not in the compass logic.
"""

from __future__ import annotations

import copy
import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from pints.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `pints.config`."""
    text = resources.files("pints.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "Pints"
    http_timeout_seconds: float = 30
    log_level: str = "INFO"
    user_agent: str = "pints/0.1.0 (nearest pub compass)"


class SearchSettings(BaseModel):
    base_url: str = "https://overpass-api.de/api/interpreter"
    radius_m: int = Field(3000, gt=0)
    amenity: str = "pub"
    query_timeout_seconds: int = Field(25, gt=0)


class RefreshSettings(BaseModel):
    min_move_m: float = Field(250, ge=0)


class DisplaySettings(BaseModel):
    unnamed_label: str = "Unnamed Pub"
    km_threshold_m: float = Field(1000, gt=0)


class DirectionsSettings(BaseModel):
    base_url: str = "https://www.google.com/maps/dir/"
    travel_mode: str = "walking"


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    refresh: RefreshSettings = Field(default_factory=RefreshSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    directions: DirectionsSettings = Field(default_factory=DirectionsSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small.
    """
    data = dict(data)
    log_level = os.getenv("PINTS_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    overpass_url = os.getenv("PINTS_OVERPASS_URL")
    if overpass_url:
        data.setdefault("search", {})["base_url"] = overpass_url

    radius = os.getenv("PINTS_SEARCH_RADIUS_M")
    if radius:
        data.setdefault("search", {})["radius_m"] = radius

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("PINTS_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def _logging_config() -> dict[str, Any]:
    return _read_package_yaml("logging.yaml")


def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (a fresh copy; callers may mutate it)."""
    return copy.deepcopy(_logging_config())
