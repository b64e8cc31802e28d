"""Output formatters for ScriptEngine CLI."""

from __future__ import annotations

from scriptengine.cli.formatters.base import OutputFormat, OutputFormatter
from scriptengine.cli.formatters.document_formatter import DocumentFormatter
from scriptengine.cli.formatters.json_formatter import JsonFormatter

__all__ = [
    "DocumentFormatter",
    "JsonFormatter",
    "OutputFormat",
    "OutputFormatter",
]
