"""JSON output formatter for CLI."""

from __future__ import annotations

import json
from typing import Any

from scriptengine.cli.formatters.base import OutputFormat, OutputFormatter
from scriptengine.exceptions import ScriptEngineError


class JsonFormatter(OutputFormatter[Any]):
    """Generic JSON formatter for CLI output."""

    def format(self, data: Any, format_type: OutputFormat = OutputFormat.JSON) -> str:  # noqa: ARG002
        """Format data as JSON.

        Args:
            data: Data to format
            format_type: Output format type (ignored, always JSON)

        Returns:
            JSON string
        """
        if isinstance(data, dict | list | tuple):
            return json.dumps(data, default=str, indent=2)
        return json.dumps({"value": data}, default=str, indent=2)

    def format_success(self, message: str, data: Any = None) -> str:
        """Format a success response."""
        response: dict[str, Any] = {"success": True, "message": message}
        if data is not None:
            response["data"] = data
        return json.dumps(response, default=str, indent=2)

    def format_error_response(self, error: str | Exception, code: int = 1) -> str:
        """Format an error response.

        Errors from the ScriptEngine hierarchy carry their hint and details.

        Args:
            error: Error message or exception
            code: Error code

        Returns:
            JSON string
        """
        response: dict[str, Any] = {"success": False, "code": code}
        if isinstance(error, ScriptEngineError):
            response["error"] = error.message
            response["type"] = type(error).__name__
            if error.hint:
                response["hint"] = error.hint
            if error.details:
                response["details"] = error.details
        else:
            response["error"] = str(error)
        return json.dumps(response, default=str, indent=2)
