"""
Logging configuration.

The packaged YAML (`src/pints/config/logging.yaml`) is the base; the level comes
from `--log-level` when the CLI passes one, otherwise from settings
(`app.log_level`, overridable with `PINTS_LOG_LEVEL`).

The HTTP transport loggers (`httpx`, `httpcore`) stay at WARNING so a compass
session does not log every Overpass round trip, unless the level is DEBUG.
"""

from __future__ import annotations

import logging.config
from typing import Any

from pints.config.settings import Settings, get_logging_config, get_settings

TRANSPORT_LOGGERS = ("httpx", "httpcore")


def build_logging_config(settings: Settings, *, level: str | None = None) -> dict[str, Any]:
    """Return a `dictConfig` mapping with the effective level applied."""
    level = (level or settings.app.log_level).upper()
    if level not in logging.getLevelNamesMapping():
        raise ValueError(f"Unknown log level: {level!r}")

    config = get_logging_config()
    config.setdefault("root", {})["level"] = level
    for handler in config.get("handlers", {}).values():
        if isinstance(handler, dict) and "level" in handler:
            handler["level"] = level

    loggers = config.setdefault("loggers", {})
    if level == "DEBUG":
        for name in TRANSPORT_LOGGERS:
            loggers.setdefault(name, {})["level"] = "DEBUG"
    return config


def configure_logging(settings: Settings | None = None, *, level: str | None = None) -> str:
    """Apply the logging config and return the effective level name."""
    config = build_logging_config(settings or get_settings(), level=level)
    logging.config.dictConfig(config)
    return config["root"]["level"]
