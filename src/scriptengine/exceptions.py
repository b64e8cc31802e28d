"""Custom exception hierarchy for ScriptEngine with helpful error messages."""

from __future__ import annotations

from typing import Any


class ScriptEngineError(Exception):
    """Base exception with helpful formatting for all ScriptEngine errors.

    Provides structured error messages with hints and details to help users
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(ScriptEngineError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class ParseError(ScriptEngineError):
    """Screenplay parsing errors including format and structure issues."""

    pass


class UnsupportedFormatError(ParseError):
    """Input matches no known screenplay format and no fallback applies."""

    pass


class MalformedMarkupError(ParseError):
    """Structured-markup input that is not a well-formed tagged document."""

    pass


class ExtractionUnavailableError(ScriptEngineError):
    """Upstream text extraction (PDF) produced no usable text."""

    pass


class ExportError(ScriptEngineError):
    """Errors raised while serializing or writing an interchange payload."""

    pass


class ScriptEngineFileNotFoundError(ScriptEngineError):
    """File not found errors with helpful path information."""

    pass


class ValidationError(ScriptEngineError):
    """Input validation errors with details about what was expected."""

    pass


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    wrong_keys = {
        "fallback": "default_to_fountain",
        "max_file_size": "max_import_bytes",
        "indent": "export_indent",
        "output_dir": "export_directory",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )
