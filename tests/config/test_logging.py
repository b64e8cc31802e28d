"""Tests for the logging configuration module."""

import json
import logging

import pytest
import structlog

from scriptengine import config
from scriptengine.config import ScriptEngineSettings
from scriptengine.config.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Restore the root logger and structlog after each test."""
    root_logger = logging.getLogger()
    original_level = root_logger.level
    original_handlers = root_logger.handlers.copy()

    yield

    for handler in root_logger.handlers.copy():
        root_logger.removeHandler(handler)
        handler.close()
    for handler in original_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(original_level)
    structlog.reset_defaults()


class TestConfigureLogging:
    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("DEBUG", logging.DEBUG),
            ("info", logging.INFO),
            ("WARNING", logging.WARNING),
            ("error", logging.ERROR),
        ],
    )
    def test_root_level(self, level, expected):
        configure_logging(ScriptEngineSettings(log_level=level))
        assert logging.getLogger().level == expected

    def test_invalid_level(self):
        settings = ScriptEngineSettings.model_construct(
            log_level="LOUD", log_format="console", log_file=None, debug=False
        )
        with pytest.raises(ValueError, match="Invalid log level 'LOUD'"):
            configure_logging(settings)

    @pytest.mark.parametrize(
        ("log_format", "renderer"),
        [
            ("json", structlog.processors.JSONRenderer),
            ("structured", structlog.processors.KeyValueRenderer),
            ("console", structlog.dev.ConsoleRenderer),
        ],
    )
    def test_handler_formatter(self, log_format, renderer):
        configure_logging(ScriptEngineSettings(log_format=log_format))

        handler = logging.getLogger().handlers[0]
        assert isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)
        assert isinstance(handler.formatter.processors[-1], renderer)

    def test_log_file_receives_json(self, tmp_path):
        log_file = tmp_path / "logs" / "engine.log"
        configure_logging(
            ScriptEngineSettings(log_level="INFO", log_format="json", log_file=log_file)
        )

        get_logger("scriptengine.tests").info("Imported script", scenes=3)
        for handler in logging.getLogger().handlers:
            handler.flush()

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "Imported script"
        assert record["scenes"] == 3
        assert record["level"] == "info"
        assert record["logger"] == "scriptengine.tests"

    def test_level_filters_records(self, tmp_path):
        log_file = tmp_path / "engine.log"
        configure_logging(
            ScriptEngineSettings(log_level="WARNING", log_format="json", log_file=log_file)
        )

        logger = get_logger("scriptengine.tests")
        logger.info("quiet")
        logger.warning("loud")
        for handler in logging.getLogger().handlers:
            handler.flush()

        events = [json.loads(line)["event"] for line in log_file.read_text().splitlines()]
        assert events == ["loud"]

    def test_debug_adds_callsite(self, tmp_path):
        log_file = tmp_path / "engine.log"
        configure_logging(
            ScriptEngineSettings(
                debug=True, log_level="DEBUG", log_format="json", log_file=log_file
            )
        )

        get_logger("scriptengine.tests").debug("where am I")
        for handler in logging.getLogger().handlers:
            handler.flush()

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["func_name"] == "test_debug_adds_callsite"
        assert record["filename"] == "test_logging.py"
        assert "lineno" in record


class TestPackageLogger:
    """``scriptengine.config.get_logger`` configures logging on first use."""

    def test_first_logger_applies_settings(self, tmp_path):
        log_file = tmp_path / "engine.log"
        config.set_settings(
            ScriptEngineSettings(log_level="INFO", log_format="json", log_file=log_file)
        )

        config.get_logger("scriptengine.tests").info("Parsed script", scenes=2)
        for handler in logging.getLogger().handlers:
            handler.flush()

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "Parsed script"
        assert record["scenes"] == 2

    def test_loggers_are_cached(self):
        logger = config.get_logger("scriptengine.a")
        assert config.get_logger("scriptengine.a") is logger

    def test_reset_reconfigures_on_next_logger(self):
        config.get_logger("scriptengine.tests")
        assert logging.getLogger().level == logging.WARNING

        config.reset_settings()
        config.set_settings(ScriptEngineSettings(log_level="DEBUG"))
        config.get_logger("scriptengine.tests")

        assert logging.getLogger().level == logging.DEBUG
