# tests/unit/core/test_logging.py
"""Tests for structured logging configuration."""

import json
import logging

import pytest
import structlog

from gatherkit.core.config import LoggingSettings
from gatherkit.core.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo configure_logging() so later tests see default logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_get_logger_returns_logger(self) -> None:
        """get_logger returns a bound logger."""
        logger = get_logger("test")
        assert hasattr(logger, "info")
        assert hasattr(logger, "error")
        assert hasattr(logger, "bind")

    def test_logger_outputs_structured(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Logger outputs structured JSON."""
        configure_logging(json_output=True)
        logger = get_logger("test")

        logger.info("gather_run_finished", outcome="exhausted")

        captured = capsys.readouterr()
        log_line = captured.out.strip().split("\n")[-1]
        data = json.loads(log_line)
        assert data["event"] == "gather_run_finished"
        assert data["outcome"] == "exhausted"
        assert data["level"] == "info"

    def test_internal_fields_not_rendered(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True)

        get_logger("test").info("event")

        data = json.loads(capsys.readouterr().out.strip().split("\n")[-1])
        assert "_record" not in data
        assert "_from_structlog" not in data

    def test_logger_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Logger outputs human-readable in console mode."""
        configure_logging(json_output=False)
        logger = get_logger("test")

        logger.info("test message", key="value")

        captured = capsys.readouterr()
        assert "test message" in captured.out
        assert not captured.out.strip().startswith("{")

    def test_stdlib_records_use_same_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        """stdlib loggers are routed through the structlog formatter."""
        configure_logging(json_output=True)

        logging.getLogger("some.library").warning("plain stdlib")

        data = json.loads(capsys.readouterr().out.strip().split("\n")[-1])
        assert data["event"] == "plain stdlib"

    def test_level_filters_records(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True, level="WARNING")

        get_logger("test").info("hidden")

        assert "hidden" not in capsys.readouterr().out

    def test_noisy_loggers_never_below_warning(self) -> None:
        """Dynaconf loggers stay at WARNING even when gatherkit runs at DEBUG."""
        configure_logging(level="DEBUG")

        assert logging.getLogger("dynaconf").level == logging.WARNING
        assert logging.getLogger("dynaconf.loaders").level == logging.WARNING

    def test_noisy_loggers_follow_stricter_root(self) -> None:
        configure_logging(level="ERROR")

        assert logging.getLogger("dynaconf").level == logging.ERROR

    def test_settings_section_applied(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A loaded logging section overrides the keyword defaults."""
        configure_logging(LoggingSettings(level="error", json_output=True))

        get_logger("test").warning("hidden")
        get_logger("test").error("shown")

        assert logging.getLogger().level == logging.ERROR
        data = json.loads(capsys.readouterr().out.strip().split("\n")[-1])
        assert data["event"] == "shown"
