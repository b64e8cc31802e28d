"""Import (preview) command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptengine.cli.formatters.base import OutputFormat
from scriptengine.cli.formatters.document_formatter import DocumentFormatter
from scriptengine.cli.utils.cli_handler import CLIHandler
from scriptengine.cli.validators.file_validator import ScriptFileValidator
from scriptengine.config import get_logger, get_settings
from scriptengine.importer import ScriptImporter

logger = get_logger(__name__)
console = Console()


def import_command(
    path: Annotated[
        Path,
        typer.Argument(help="Screenplay file to import (.fountain, .fdx, .pdf)"),
    ],
    json_output: Annotated[
        bool, typer.Option("--json", help="Output the summary as JSON")
    ] = False,
    scenes: Annotated[
        bool, typer.Option("--scenes", "-s", help="List every scene")
    ] = False,
) -> None:
    """Parse a screenplay and preview what was found.

    Shows the title, authors, detected format, scene count, characters,
    locations and the number of beats that an export would contain.
    """
    handler = CLIHandler(console)

    try:
        settings = get_settings()
        script_path = ScriptFileValidator(settings.default_to_fountain).validate(path)
        result = ScriptImporter(settings).import_file(script_path)

        formatter = DocumentFormatter(show_scenes=scenes, console=console)
        if json_output:
            # Output pure JSON without ANSI escape codes
            print(formatter.format(result, OutputFormat.JSON))
        else:
            formatter.print(result, OutputFormat.TABLE)

    except Exception as e:
        handler.handle_error(e, json_output)
