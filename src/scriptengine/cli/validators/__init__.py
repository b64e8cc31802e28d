"""Input validators for ScriptEngine CLI."""

from __future__ import annotations

from scriptengine.cli.validators.base import ValidationError, Validator
from scriptengine.cli.validators.file_validator import (
    ConfigFileValidator,
    FileValidator,
    ScriptFileValidator,
)

__all__ = [
    "ConfigFileValidator",
    "FileValidator",
    "ScriptFileValidator",
    "ValidationError",
    "Validator",
]
