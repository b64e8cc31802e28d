"""Convert an imported screenplay to Fountain text."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptengine.cli.utils.cli_handler import CLIHandler
from scriptengine.cli.validators.file_validator import ScriptFileValidator
from scriptengine.config import get_logger, get_settings
from scriptengine.exceptions import ExportError
from scriptengine.importer import ScriptImporter
from scriptengine.parser import fountain_filename, render_fountain

logger = get_logger(__name__)
console = Console()


def fountain_command(
    path: Annotated[
        Path,
        typer.Argument(help="Screenplay file to convert (typically .fdx or .pdf)"),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file or directory (default: <Title>_Script.fountain)",
        ),
    ] = None,
    stdout: Annotated[
        bool, typer.Option("--stdout", help="Print instead of writing a file")
    ] = False,
) -> None:
    """Write a screenplay back out as Fountain text."""
    handler = CLIHandler(console)

    try:
        settings = get_settings()
        script_path = ScriptFileValidator(settings.default_to_fountain).validate(path)
        document = ScriptImporter(settings).import_file(script_path).document
        text = render_fountain(document)

        if stdout:
            print(text, end="")
            return

        target = output or settings.export_directory or Path.cwd()
        if target.is_dir():
            target = target / fountain_filename(document.title)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        except OSError as e:
            raise ExportError(
                message=f"Failed to write Fountain file: {target}",
                hint="Check that the output directory is writable",
                details={"file": str(target), "os_error": str(e)},
            ) from e

        logger.info("Wrote Fountain file", file=str(target))
        handler.handle_success(f"Wrote {target}")

    except Exception as e:
        handler.handle_error(e)
