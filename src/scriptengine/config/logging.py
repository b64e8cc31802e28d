"""Logging configuration for ScriptEngine."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import (
    CallsiteParameter,
    CallsiteParameterAdder,
    TimeStamper,
    add_log_level,
    dict_tracebacks,
    format_exc_info,
)
from structlog.stdlib import (
    ProcessorFormatter,
    add_logger_name,
    filter_by_level,
)

from scriptengine.config.settings import ScriptEngineSettings


def _build_formatter(log_format: str) -> ProcessorFormatter:
    """Create the stdlib formatter matching the configured log format."""
    pre_chain = [
        TimeStamper(fmt="iso"),
        add_log_level,
        add_logger_name,
    ]
    if log_format == "json":
        return ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=pre_chain,
        )
    if log_format == "structured":
        return ProcessorFormatter(
            processor=structlog.processors.KeyValueRenderer(
                key_order=["timestamp", "level", "logger", "event"],
                drop_missing=True,
            ),
            foreign_pre_chain=pre_chain,
        )
    return ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.rich_traceback,
        ),
        foreign_pre_chain=pre_chain,
    )


def configure_logging(settings: ScriptEngineSettings) -> None:
    """Configure logging based on settings.

    Args:
        settings: Application settings containing logging configuration.

    Raises:
        ValueError: If the log level is not a level known to the logging module.
    """
    try:
        log_level = getattr(logging, settings.log_level.upper())
    except AttributeError as e:
        valid_levels = [
            name for name in logging.getLevelNamesMapping() if not name.startswith("_")
        ]
        raise ValueError(
            f"Invalid log level '{settings.log_level}'. "
            f"Valid levels are: {', '.join(sorted(valid_levels))}"
        ) from e

    formatter = _build_formatter(settings.log_format)

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    handlers.append(console_handler)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=str(log_path),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True,
    )
    logging.getLogger().setLevel(log_level)

    processors: list[Any] = [
        merge_contextvars,
        filter_by_level,
        TimeStamper(fmt="iso"),
        add_log_level,
        add_logger_name,
        dict_tracebacks,
    ]

    if settings.debug:
        processors.append(
            CallsiteParameterAdder(
                parameters=[
                    CallsiteParameter.FILENAME,
                    CallsiteParameter.LINENO,
                    CallsiteParameter.FUNC_NAME,
                ]
            )
        )

    # Rendering happens in the handler formatters so every handler shares
    # one event dict and pytest's caplog sees structured records
    processors.extend([format_exc_info, ProcessorFormatter.wrap_for_formatter])

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a structlog logger bound to ``name``."""
    return structlog.get_logger(name)
