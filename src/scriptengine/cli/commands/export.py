"""Export command producing interchange JSON."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptengine.cli.utils.cli_handler import CLIHandler
from scriptengine.cli.validators.file_validator import ScriptFileValidator
from scriptengine.config import get_logger, get_settings
from scriptengine.export import ExportFormat, ExportSerializer
from scriptengine.importer import ScriptImporter

logger = get_logger(__name__)
console = Console()


def export_command(
    path: Annotated[
        Path,
        typer.Argument(help="Screenplay file to export (.fountain, .fdx, .pdf)"),
    ],
    export_format: Annotated[
        ExportFormat,
        typer.Option(
            "--format",
            "-f",
            help="Payload to produce",
            case_sensitive=False,
        ),
    ] = ExportFormat.DIRECTOR,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write to this file instead of stdout",
        ),
    ] = None,
    indent: Annotated[
        int | None,
        typer.Option(
            "--indent",
            min=0,
            max=8,
            help="JSON indentation (default: export_indent setting)",
        ),
    ] = None,
) -> None:
    """Export a screenplay as Director, envelope or bible JSON.

    Without --output the payload is printed to stdout, unless an
    export_directory is configured, in which case it is written there.
    """
    handler = CLIHandler(console)

    try:
        settings = get_settings()
        script_path = ScriptFileValidator(settings.default_to_fountain).validate(path)
        result = ScriptImporter(settings).import_file(script_path)

        serializer = ExportSerializer()
        payload = serializer.build(result.document, export_format, result.beats)
        json_indent = settings.export_indent if indent is None else indent

        if output is None and settings.export_directory is not None:
            output = (
                settings.export_directory
                / f"{script_path.stem}_{export_format.value}.json"
            )

        if output is None:
            print(serializer.dumps(payload, json_indent))
            return

        written = serializer.write_export(payload, output, json_indent)
        handler.handle_success(f"Exported {export_format.value} payload to {written}")

    except Exception as e:
        handler.handle_error(e)
