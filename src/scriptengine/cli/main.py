"""Main CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptengine import __version__
from scriptengine.cli.commands import (
    export_command,
    fountain_command,
    import_command,
)
from scriptengine.cli.formatters.json_formatter import JsonFormatter
from scriptengine.cli.utils.cli_handler import CLIHandler
from scriptengine.config import get_logger

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="scriptengine",
    help="Import screenplays and export them for production tools",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.command(name="import")(import_command)
app.command(name="export")(export_command)
app.command(name="fountain")(fountain_command)


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show ScriptEngine version."""
    version_info = {
        "name": "ScriptEngine",
        "version": __version__,
        "description": "Screenplay import and interchange engine",
    }

    if json_output:
        # Output pure JSON without ANSI escape codes
        print(JsonFormatter().format(version_info))
    else:
        console.print(f"ScriptEngine v{version_info['version']}")


def _reconfigure(config: Path | None = None, log_level: str | None = None) -> None:
    from scriptengine.config import (
        configure_logging,
        get_settings_for_cli,
        set_settings,
    )

    overrides = {"log_level": log_level, "debug": True if log_level == "DEBUG" else None}
    settings = get_settings_for_cli(config_file=config, cli_overrides=overrides)
    set_settings(settings)
    configure_logging(settings)


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (YAML, TOML, or JSON)",
            envvar="SCRIPTENGINE_CONFIG",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging (INFO level)"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug", help="Enable debug logging", envvar="SCRIPTENGINE_DEBUG"
        ),
    ] = False,
) -> None:
    """Configure global options."""
    log_level = "DEBUG" if debug else "INFO" if verbose else None
    if config is None and log_level is None:
        return

    try:
        if config is not None:
            from scriptengine.cli.validators.file_validator import ConfigFileValidator

            config = ConfigFileValidator().validate(config)
        _reconfigure(config, log_level)
    except Exception as e:
        CLIHandler(console).handle_error(e)

    logger.debug("Global options applied", config=str(config), log_level=log_level)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
