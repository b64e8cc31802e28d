"""Rich tables previewing an imported screenplay."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from scriptengine.cli.formatters.base import OutputFormat, OutputFormatter
from scriptengine.cli.formatters.json_formatter import JsonFormatter
from scriptengine.importer import ImportResult
from scriptengine.parser.models import ElementKind


class DocumentFormatter(OutputFormatter[ImportResult]):
    """Format an import result as a summary (and optional scene list)."""

    def __init__(
        self, show_scenes: bool = False, console: Console | None = None
    ) -> None:
        super().__init__(console)
        self.show_scenes = show_scenes

    def format(
        self, data: ImportResult, format_type: OutputFormat = OutputFormat.TABLE
    ) -> str:
        if format_type == OutputFormat.JSON:
            return JsonFormatter().format(self.to_dict(data))
        if format_type == OutputFormat.TEXT:
            return self._format_text(data)

        renderables = [self.summary_table(data)]
        if self.show_scenes:
            renderables.append(self.scenes_table(data))
        return self.render(*renderables)

    def to_dict(self, data: ImportResult) -> dict:
        result = data.summary()
        result["character_names"] = list(data.document.characters)
        result["location_names"] = list(data.document.locations)
        if self.show_scenes:
            result["scene_list"] = [
                {
                    "number": scene.scene_number,
                    "heading": scene.heading,
                    "location": scene.location,
                    "time_of_day": scene.time_of_day,
                    "interior": scene.interior,
                    "elements": len(scene.content),
                }
                for scene in data.document.scenes
            ]
        return result

    def summary_table(self, data: ImportResult) -> Table:
        document = data.document
        table = Table(title="Imported Script", show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")

        table.add_row("Title", document.title)
        table.add_row("Authors", ", ".join(document.authors) or "-")
        table.add_row("Format", document.source_format.value)
        if document.page_count is not None:
            table.add_row("Pages", str(document.page_count))
        table.add_row("Scenes", str(document.scene_count))
        table.add_row("Characters", ", ".join(document.characters) or "-")
        table.add_row("Locations", ", ".join(document.locations) or "-")
        table.add_row("Dialogue", str(document.dialogue_count))
        table.add_row("Beats", str(len(data.beats)))
        return table

    def scenes_table(self, data: ImportResult) -> Table:
        table = Table(title="Scenes", show_lines=False)
        table.add_column("#", style="yellow", justify="right")
        table.add_column("Heading", style="cyan")
        table.add_column("Time", style="green")
        table.add_column("Characters")

        for scene in data.document.scenes:
            speakers = [
                e.character
                for e in scene.content
                if e.kind is ElementKind.CHARACTER and e.character
            ]
            table.add_row(
                str(scene.scene_number),
                scene.heading,
                scene.time_of_day,
                ", ".join(dict.fromkeys(speakers)) or "-",
            )
        return table

    def _format_text(self, data: ImportResult) -> str:
        lines = [f"{key}: {value}" for key, value in data.summary().items()]
        if self.show_scenes:
            lines.extend(
                f"  {scene.scene_number}. {scene.heading}"
                for scene in data.document.scenes
            )
        return "\n".join(lines)
