"""Unit tests for /src/core/config.py"""

import logging

import pytest

from src.core.config import DEFAULT_DATABASE_URL, Settings, configure_logging


def test_defaults_without_environment() -> None:
    settings = Settings.from_env({})
    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.log_level == "WARNING"
    assert not settings.debug_logs


def test_read_from_environment() -> None:
    settings = Settings.from_env(
        {
            "PUZZLE_DATABASE_URL": "sqlite:///:memory:",
            "PUZZLE_LOG_LEVEL": "info",
            "PUZZLE_DEBUG_LOGS": "Yes",
        }
    )
    assert settings.database_url == "sqlite:///:memory:"
    assert settings.log_level == "INFO"
    assert settings.debug_logs


def test_debug_logs_open_up_puzzle_loggers() -> None:
    puzzle_logger = logging.getLogger("src.puzzle")
    previous = puzzle_logger.level
    try:
        configure_logging(Settings(debug_logs=True))
        assert puzzle_logger.level == logging.DEBUG
    finally:
        puzzle_logger.setLevel(previous)


@pytest.mark.parametrize("raw", ["LOUD", "", "  "])
def test_unknown_log_level_falls_back(raw: str) -> None:
    settings = Settings.from_env({"PUZZLE_LOG_LEVEL": raw})
    assert settings.log_level == "WARNING"
