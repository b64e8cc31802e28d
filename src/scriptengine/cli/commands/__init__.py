"""ScriptEngine CLI commands."""

from __future__ import annotations

from scriptengine.cli.commands.export import export_command
from scriptengine.cli.commands.fountain import fountain_command
from scriptengine.cli.commands.import_script import import_command

__all__ = [
    "export_command",
    "fountain_command",
    "import_command",
]
