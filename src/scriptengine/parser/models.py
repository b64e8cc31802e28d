"""Data models for parsed screenplays."""

from __future__ import annotations

import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DEFAULT_TITLE = "Untitled Script"
DEFAULT_TIME_OF_DAY = "DAY"
OPENING_HEADING = "OPENING"
UNKNOWN_LOCATION = "UNKNOWN"


class ElementKind(str, Enum):
    """Semantic role of a line or paragraph inside a scene."""

    ACTION = "action"
    DIALOGUE = "dialogue"
    PARENTHETICAL = "parenthetical"
    TRANSITION = "transition"
    CHARACTER = "character"


class SourceFormat(str, Enum):
    """Input format a document was parsed from."""

    FOUNTAIN = "fountain"
    STRUCTURED_MARKUP = "structured-markup"
    PDF = "pdf"
    UNKNOWN = "unknown"


@dataclass
class SceneElement:
    """A tagged line or merged block of scene content."""

    kind: ElementKind
    text: str
    character: str | None = None


@dataclass
class Scene:
    """One contiguous scene unit."""

    scene_number: int
    heading: str
    location: str
    interior: bool
    time_of_day: str = DEFAULT_TIME_OF_DAY
    content: list[SceneElement] = field(default_factory=list)

    @classmethod
    def opening(cls, scene_number: int = 1) -> Scene:
        """Synthetic scene for content that precedes any heading."""
        return cls(
            scene_number=scene_number,
            heading=OPENING_HEADING,
            location=UNKNOWN_LOCATION,
            interior=True,
        )

    def last_character(self) -> str | None:
        """Name of the most recent character cue in this scene."""
        for element in reversed(self.content):
            if element.kind is ElementKind.CHARACTER:
                return element.character
        return None


class NameRegistry:
    """Insertion-ordered set of names, de-duplicated case-insensitively."""

    def __init__(self, names: list[str] | None = None) -> None:
        self._names: dict[str, str] = {}
        for name in names or []:
            self.add(name)

    def add(self, name: str) -> None:
        self._names.setdefault(name.upper(), name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.upper() in self._names

    def __len__(self) -> int:
        return len(self._names)

    def to_list(self) -> list[str]:
        return list(self._names.values())


@dataclass
class ScriptDocument:
    """Canonical parse result for a screenplay."""

    title: str
    raw_text: str
    scenes: list[Scene]
    characters: list[str]
    locations: list[str]
    source_format: SourceFormat = SourceFormat.UNKNOWN
    authors: list[str] = field(default_factory=list)
    page_count: int | None = None
    imported_at: int = field(
        default_factory=lambda: int(time.time() * 1000), compare=False
    )

    @property
    def scene_count(self) -> int:
        return len(self.scenes)

    @property
    def dialogue_count(self) -> int:
        return sum(1 for _ in self.elements(ElementKind.DIALOGUE))

    def elements(self, kind: ElementKind | None = None) -> Iterator[SceneElement]:
        """Iterate over scene elements in document order, optionally by kind."""
        for scene in self.scenes:
            for element in scene.content:
                if kind is None or element.kind is kind:
                    yield element

    def summary(self) -> dict[str, Any]:
        """Counts used for import previews and log lines."""
        return {
            "title": self.title,
            "authors": list(self.authors),
            "format": self.source_format.value,
            "scenes": self.scene_count,
            "characters": len(self.characters),
            "locations": len(self.locations),
            "dialogue": self.dialogue_count,
            "page_count": self.page_count,
        }
