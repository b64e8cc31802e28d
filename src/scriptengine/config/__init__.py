"""Settings and logging for ScriptEngine.

Logging is configured from the global settings the first time a module asks
for a logger, so importing the parsers never touches handlers on its own.
"""

from __future__ import annotations

from typing import Any

from scriptengine.config import logging as _logging
from scriptengine.config import settings as _settings
from scriptengine.config.logging import configure_logging
from scriptengine.config.settings import (
    ScriptEngineSettings,
    clear_settings_cache,
    get_settings,
    get_settings_for_cli,
    set_settings,
)

__all__ = [
    "ScriptEngineSettings",
    "clear_settings_cache",
    "configure_logging",
    "get_logger",
    "get_settings",
    "get_settings_for_cli",
    "reset_settings",
    "set_settings",
]

_loggers: dict[str, Any] = {}


def get_logger(name: str) -> Any:
    """Return the structlog logger for ``name``.

    The first call configures logging from ``get_settings()``.
    """
    logger = _loggers.get(name)
    if logger is None:
        if not _loggers:
            configure_logging(get_settings())
        logger = _loggers[name] = _logging.get_logger(name)
    return logger


def reset_settings() -> None:
    """Drop cached settings and loggers; the next logger reconfigures."""
    _settings.reset_settings()
    _loggers.clear()
