"""Unified CLI handler for standardized error handling and output."""

from __future__ import annotations

from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from scriptengine.cli.formatters.json_formatter import JsonFormatter
from scriptengine.config import get_logger
from scriptengine.exceptions import ScriptEngineError, ValidationError

logger = get_logger(__name__)


class CLIHandler:
    """Unified handler for CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler.

        Args:
            console: Rich console for output
        """
        self.console = console or Console()
        self.json_formatter = JsonFormatter()

    def handle_error(
        self, error: Exception, json_output: bool = False, exit_code: int = 1
    ) -> NoReturn:
        """Display an error consistently and exit.

        Args:
            error: Exception to handle
            json_output: Whether to output JSON
            exit_code: Exit code to use

        Raises:
            typer.Exit: Always, with ``exit_code``
        """
        if isinstance(error, ScriptEngineError):
            logger.error("Command failed", error=error.message, type=type(error).__name__)
        else:
            logger.error("Command failed", error=str(error), exc_info=error)

        if json_output:
            print(self.json_formatter.format_error_response(error, exit_code))
        elif isinstance(error, ScriptEngineError):
            label = "Validation Error" if isinstance(error, ValidationError) else "Error"
            self.console.print(f"[red]{label}: {escape(error.message)}[/red]")
            if error.hint:
                self.console.print(f"[yellow]Hint: {escape(error.hint)}[/yellow]")
        else:
            self.console.print(f"[red]Error: {escape(str(error))}[/red]")

        raise typer.Exit(exit_code)

    def handle_success(
        self, message: str, data: Any = None, json_output: bool = False
    ) -> None:
        """Handle success responses consistently."""
        if json_output:
            print(self.json_formatter.format_success(message, data))
        else:
            self.console.print(f"[green]{escape(message)}[/green]")
