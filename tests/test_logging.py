import pytest

from pints.config.settings import Settings
from pints.core.logging import build_logging_config


def test_level_comes_from_settings():
    settings = Settings.model_validate({"app": {"log_level": "warning"}})

    config = build_logging_config(settings)

    assert config["root"]["level"] == "WARNING"
    assert config["handlers"]["console"]["level"] == "WARNING"
    assert config["loggers"]["httpx"]["level"] == "WARNING"


def test_explicit_level_wins_and_debug_opens_transport_loggers():
    config = build_logging_config(Settings(), level="debug")

    assert config["root"]["level"] == "DEBUG"
    assert config["loggers"]["httpx"]["level"] == "DEBUG"
    assert config["loggers"]["httpcore"]["level"] == "DEBUG"


def test_unknown_level_is_rejected():
    with pytest.raises(ValueError, match="Unknown log level"):
        build_logging_config(Settings(), level="chatty")
