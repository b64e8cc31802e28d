"""Serialize parsed screenplays into interchange payloads."""

from __future__ import annotations

import re
import time
from pathlib import Path

from scriptengine.config import get_logger
from scriptengine.exceptions import ExportError
from scriptengine.export.beats import Beat, BeatExtractor, generate_handle
from scriptengine.export.schemas import (
    BeatRecord,
    BibleImport,
    CharacterRecord,
    DirectorExport,
    EnvelopeBeat,
    EnvelopeCharacter,
    EnvelopeLocation,
    EnvelopeMetadata,
    EnvelopeScript,
    ExportFormat,
    ExportPayload,
    LocationRecord,
    ScriptExportEnvelope,
)
from scriptengine.parser.models import ElementKind, Scene, ScriptDocument

logger = get_logger(__name__)

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def character_visuals(name: str) -> str:
    return f"Character: {name}"


def location_visuals(name: str) -> str:
    return f"Location: {name}"


def location_handle(name: str) -> str:
    """Envelope location handles keep only ASCII letters and digits."""
    return "@" + _NON_ALNUM.sub("", name)


def _first_scene_at(document: ScriptDocument, location: str) -> Scene | None:
    for scene in document.scenes:
        if scene.location.upper() == location.upper():
            return scene
    return None


class ExportSerializer:
    """Build Director, envelope and bible payloads from a ScriptDocument.

    Output is deterministic for a given document and beat list, except for
    beat ids and the envelope's ``exportedAt`` timestamp.
    """

    def __init__(self, extractor: BeatExtractor | None = None) -> None:
        self.extractor = extractor or BeatExtractor()

    def _beats(self, document: ScriptDocument, beats: list[Beat] | None) -> list[Beat]:
        return self.extractor.extract(document) if beats is None else beats

    def to_director(
        self, document: ScriptDocument, beats: list[Beat] | None = None
    ) -> DirectorExport:
        """Build the Director export payload.

        Args:
            document: Parsed screenplay
            beats: Pre-extracted beats (extracted from ``document`` if omitted)

        Returns:
            DirectorExport with characters, locations, beats and script text
        """
        return DirectorExport(
            script=document.raw_text,
            characters=[
                CharacterRecord(
                    name=name,
                    handle=generate_handle(name),
                    visuals=character_visuals(name),
                )
                for name in document.characters
            ],
            locations=[
                LocationRecord(
                    name=name,
                    handle=generate_handle(name),
                    visuals=location_visuals(name),
                )
                for name in document.locations
            ],
            beats=[
                BeatRecord(
                    beat_id=beat.id,
                    characters=list(beat.characters),
                    action=beat.action,
                    dialogue=beat.dialogue,
                    location=beat.location,
                    camera=beat.camera,
                    lighting=beat.lighting,
                )
                for beat in self._beats(document, beats)
            ],
        )

    def to_envelope(
        self,
        document: ScriptDocument,
        beats: list[Beat] | None = None,
        exported_at: int | None = None,
    ) -> ScriptExportEnvelope:
        """Build the versioned export envelope.

        Args:
            document: Parsed screenplay
            beats: Pre-extracted beats (extracted from ``document`` if omitted)
            exported_at: Epoch milliseconds to stamp (default: now)

        Returns:
            ScriptExportEnvelope ready for serialization
        """
        locations = []
        for name in document.locations:
            scene = _first_scene_at(document, name)
            locations.append(
                EnvelopeLocation(
                    name=name,
                    handle=location_handle(name),
                    interior=scene.interior if scene else name.startswith("INT"),
                    time_of_day=scene.time_of_day if scene else None,
                    visuals=location_visuals(name),
                )
            )

        return ScriptExportEnvelope(
            exported_at=exported_at if exported_at is not None else int(time.time() * 1000),
            script=EnvelopeScript(
                title=document.title,
                raw_content=document.raw_text,
                format=document.source_format.value,
                page_count=document.page_count,
            ),
            characters=[
                EnvelopeCharacter(
                    name=name,
                    handle=generate_handle(name),
                    visuals=character_visuals(name),
                )
                for name in document.characters
            ],
            locations=locations,
            beats=[
                EnvelopeBeat(
                    id=beat.id,
                    scene_number=beat.scene_number,
                    action=beat.action,
                    characters=list(beat.characters),
                    dialogue=beat.dialogue,
                    location=beat.location,
                    camera=beat.camera,
                    lighting=beat.lighting,
                )
                for beat in self._beats(document, beats)
            ],
            metadata=EnvelopeMetadata(scenes_written=document.scene_count),
        )

    def to_bible(self, document: ScriptDocument) -> BibleImport:
        """Flatten a document into the lists a project bible stores."""
        return BibleImport(
            script=document.raw_text,
            characters=list(document.characters),
            locations=list(document.locations),
            beats=[e.text for e in document.elements(ElementKind.ACTION)],
        )

    def build(
        self,
        document: ScriptDocument,
        export_format: ExportFormat = ExportFormat.DIRECTOR,
        beats: list[Beat] | None = None,
    ) -> ExportPayload:
        """Build the payload for ``export_format``."""
        match export_format:
            case ExportFormat.DIRECTOR:
                return self.to_director(document, beats)
            case ExportFormat.ENVELOPE:
                return self.to_envelope(document, beats)
            case ExportFormat.BIBLE:
                return self.to_bible(document)

    @staticmethod
    def dumps(payload: ExportPayload, indent: int | None = 2) -> str:
        """Serialize a payload to JSON using the contract field names."""
        return payload.model_dump_json(
            by_alias=True, exclude_none=True, indent=indent or None
        )

    def write_export(
        self, payload: ExportPayload, path: Path | str, indent: int | None = 2
    ) -> Path:
        """Write a payload to ``path`` as JSON.

        Raises:
            ExportError: If the file cannot be written
        """
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(self.dumps(payload, indent) + "\n", encoding="utf-8")
        except OSError as e:
            raise ExportError(
                message=f"Failed to write export file: {target}",
                hint="Check that the output directory is writable",
                details={"file": str(target), "os_error": str(e)},
            ) from e
        logger.info("Wrote export", file=str(target), payload=type(payload).__name__)
        return target
