"""Fountain screenplay parser built on the line classifier."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import reduce
from pathlib import Path

from scriptengine.config import get_logger
from scriptengine.exceptions import ScriptEngineFileNotFoundError
from scriptengine.parser.classifier import (
    TRANSITION_PATTERN,
    Classification,
    LineClassifier,
    is_scene_heading,
)
from scriptengine.parser.models import (
    DEFAULT_TITLE,
    ElementKind,
    Scene,
    SceneElement,
    ScriptDocument,
    SourceFormat,
)
from scriptengine.parser.scene_builder import SceneBuilder

logger = get_logger(__name__)

TITLE_PAGE_SCAN_LIMIT = 50
TITLE_PAGE_FIELD_PATTERN = re.compile(
    r"^(?P<key>[A-Za-z][A-Za-z ]*):\s*(?P<value>.*)$"
)
AUTHOR_KEYS = frozenset({"author", "authors", "credit"})


@dataclass
class TitlePage:
    """Fields read from the key/value block at the top of a script."""

    title: str | None = None
    authors: list[str] = field(default_factory=list)
    body_start: int = 0

    def add(self, key: str, value: str) -> None:
        """Record one value; continuation lines of a title extend it."""
        if key == "title":
            self.title = f"{self.title} {value}" if self.title else value
        elif key in AUTHOR_KEYS:
            self.authors.append(value)


@dataclass
class FountainState(SceneBuilder):
    """Accumulator threaded through the body lines of a Fountain script."""

    after_blank: bool = False

    @property
    def previous_kind(self) -> ElementKind | None:
        scene = self.current_scene
        # A blank line ends any dialogue run
        if self.after_blank or scene is None or not scene.content:
            return None
        return scene.content[-1].kind


def scan_title_page(lines: list[str]) -> TitlePage:
    """Read title page fields from the top of a script.

    A field is ``Key: value`` or a bare ``Key:`` whose values follow on
    indented continuation lines (``Contact:`` blocks). The title page ends
    at the first scene heading, at a transition such as ``FADE IN:``, at the
    first line that is neither blank, a field nor a continuation, or after
    50 lines.

    Args:
        lines: All physical lines of the script

    Returns:
        TitlePage with the index of the first body line
    """
    page = TitlePage()
    key: str | None = None
    i = 0
    while i < len(lines) and i < TITLE_PAGE_SCAN_LIMIT:
        raw = lines[i]
        line = raw.strip()
        if not line:
            key = None
        elif is_scene_heading(line):
            break
        elif key is not None and raw[:1].isspace():
            page.add(key, line)
        elif field_match := TITLE_PAGE_FIELD_PATTERN.match(line):
            value = field_match.group("value").strip()
            if not value and TRANSITION_PATTERN.search(line):
                break
            key = field_match.group("key").strip().lower()
            if value:
                page.add(key, value)
        else:
            break
        i += 1
    page.body_start = i
    return page


class FountainParser:
    """Parse plain-text Fountain screenplays into a ScriptDocument.

    The parser never raises on odd input: anything it cannot place becomes
    action text inside the current (possibly synthetic) scene.
    """

    def __init__(self, classifier: LineClassifier | None = None) -> None:
        """Initialize the fountain parser.

        Args:
            classifier: Line classifier to use (default: LineClassifier())
        """
        self.classifier = classifier or LineClassifier()

    def _consume(self, state: FountainState, line: str) -> FountainState:
        """Fold one body line into the parse state."""
        trimmed = line.strip()
        if not trimmed:
            state.after_blank = True
            return state

        classification = self.classifier.classify(trimmed, state.previous_kind)
        state.after_blank = False
        if classification.heading is not None:
            state.open_scene(classification.heading)
            return state

        scene = state.ensure_scene()
        self._append(state, scene, classification, classification.text or trimmed)
        return state

    def _append(
        self,
        state: FountainState,
        scene: Scene,
        classification: Classification,
        text: str,
    ) -> None:
        kind = classification.kind
        if kind is ElementKind.CHARACTER:
            name = classification.character or text
            state.characters.add(name)
            scene.content.append(SceneElement(kind, name, character=name))
        elif kind is ElementKind.DIALOGUE:
            last = scene.content[-1] if scene.content else None
            if last is not None and last.kind is ElementKind.DIALOGUE:
                last.text = f"{last.text} {text}"
            else:
                scene.content.append(
                    SceneElement(kind, text, character=scene.last_character())
                )
        elif kind is not None:
            scene.content.append(SceneElement(kind, text))

    def build_scenes(
        self, lines: list[str], state: FountainState | None = None
    ) -> FountainState:
        """Fold body lines into scenes, starting from ``state``."""
        return reduce(self._consume, lines, state or FountainState())

    def parse(self, content: str) -> ScriptDocument:
        """Parse Fountain content into a ScriptDocument.

        Args:
            content: Raw Fountain text

        Returns:
            Parsed document with ``source_format`` set to fountain
        """
        lines = content.splitlines()
        title_page = scan_title_page(lines)
        state = self.build_scenes(lines[title_page.body_start :])

        document = ScriptDocument(
            title=title_page.title or DEFAULT_TITLE,
            authors=title_page.authors,
            raw_text=content,
            scenes=state.scenes,
            characters=state.characters.to_list(),
            locations=state.locations.to_list(),
            source_format=SourceFormat.FOUNTAIN,
        )
        logger.debug(
            "Parsed fountain script",
            title=document.title,
            scenes=document.scene_count,
            characters=len(document.characters),
        )
        return document

    def parse_file(self, file_path: Path | str) -> ScriptDocument:
        """Parse a Fountain file.

        Args:
            file_path: Path to the Fountain file

        Returns:
            Parsed document

        Raises:
            ScriptEngineFileNotFoundError: If the file does not exist
        """
        path = Path(file_path)
        if not path.is_file():
            raise ScriptEngineFileNotFoundError(
                message=f"Fountain file not found: {path}",
                hint="Check that the file path is correct",
                details={"file": str(path)},
            )
        logger.debug(f"Parsing fountain file: {path}")
        return self.parse(path.read_text(encoding="utf-8"))
