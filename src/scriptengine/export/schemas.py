"""Interchange schemas consumed by the production bible tools.

Field names (and aliases) are a contract shared with other tools: rename
nothing without versioning the payload.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ENVELOPE_VERSION = "1.0.0"
ENVELOPE_TYPE = "cc-script-export"
ENVELOPE_SOURCE = "script-engine"


class ExportFormat(str, Enum):
    """Supported interchange payloads."""

    DIRECTOR = "director"
    ENVELOPE = "envelope"
    BIBLE = "bible"


# Director export ------------------------------------------------------------


class CharacterRecord(BaseModel):
    """A character entry in the Director export."""

    name: str
    handle: str
    role: str | None = "Character"
    traits: list[str] = Field(default_factory=list)
    visuals: str


class LocationRecord(BaseModel):
    """A location entry in the Director export."""

    name: str
    handle: str
    visuals: str


class BeatRecord(BaseModel):
    """A beat entry in the Director export."""

    beat_id: str
    characters: list[str] = Field(default_factory=list)
    action: str
    dialogue: str | None = None
    location: str
    camera: str
    lighting: str


class DirectorExport(BaseModel):
    """Characters, locations and beats plus the full script text."""

    characters: list[CharacterRecord] = Field(default_factory=list)
    locations: list[LocationRecord] = Field(default_factory=list)
    beats: list[BeatRecord] = Field(default_factory=list)
    script: str


# Versioned envelope ---------------------------------------------------------


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EnvelopeScript(_CamelModel):
    title: str
    raw_content: str
    format: str
    page_count: int | None = None


class EnvelopeCharacter(_CamelModel):
    name: str
    handle: str
    role: str | None = "Character"
    traits: list[str] = Field(default_factory=list)
    visuals: str


class EnvelopeLocation(_CamelModel):
    name: str
    handle: str
    interior: bool
    time_of_day: str | None = None
    visuals: str


class EnvelopeBeat(_CamelModel):
    id: str
    scene_number: int
    action: str
    characters: list[str] = Field(default_factory=list)
    dialogue: str | None = None
    location: str
    camera: str | None = None
    lighting: str | None = None


class EnvelopeMetadata(_CamelModel):
    phase: int = 0
    scenes_written: int = 0


class ScriptExportEnvelope(_CamelModel):
    """Self-describing export wrapping the same records with version info."""

    version: str = ENVELOPE_VERSION
    type: Literal["cc-script-export"] = ENVELOPE_TYPE
    exported_at: int
    exported_from: Literal["script-engine"] = ENVELOPE_SOURCE
    script: EnvelopeScript
    characters: list[EnvelopeCharacter] = Field(default_factory=list)
    locations: list[EnvelopeLocation] = Field(default_factory=list)
    beats: list[EnvelopeBeat] = Field(default_factory=list)
    metadata: EnvelopeMetadata = Field(default_factory=EnvelopeMetadata)


# Bible import ---------------------------------------------------------------


class BibleImport(BaseModel):
    """Flat lists merged into a project bible after an import is confirmed."""

    script: str
    characters: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    beats: list[str] = Field(default_factory=list)


ExportPayload = DirectorExport | ScriptExportEnvelope | BibleImport
