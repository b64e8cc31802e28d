"""Derive production beats from a parsed screenplay."""

from __future__ import annotations

import itertools
import re
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from scriptengine.config import get_logger
from scriptengine.parser.models import ElementKind, Scene, ScriptDocument

logger = get_logger(__name__)

CAMERA_STANDARD = "Standard"
CAMERA_ESTABLISHING = "Establishing"
LIGHTING_INTERIOR = "Interior"
LIGHTING_NATURAL = "Natural"

_WHITESPACE = re.compile(r"\s")


def generate_handle(name: str) -> str:
    """Build an ``@`` handle by removing every whitespace character.

    >>> generate_handle("Sam Wilkinson")
    '@SamWilkinson'
    """
    return "@" + _WHITESPACE.sub("", name)


@dataclass
class Beat:
    """One exported story unit."""

    id: str
    action: str
    location: str
    camera: str
    lighting: str
    scene_number: int
    characters: list[str] = field(default_factory=list)
    dialogue: str | None = None

    def add_character(self, handle: str) -> None:
        if handle not in self.characters:
            self.characters.append(handle)


def _handles(names: list[str]) -> list[str]:
    handles: list[str] = []
    for name in names:
        handle = generate_handle(name)
        if handle not in handles:
            handles.append(handle)
    return handles


class BeatExtractor:
    """Walk a document's scenes and emit one beat per action block.

    Scenes without any action still yield a single establishing beat built
    from the heading.
    """

    def __init__(self, id_factory: Callable[[int], str] | None = None) -> None:
        """Initialize the extractor.

        Args:
            id_factory: Maps a 1-based beat counter to a beat id. Defaults to
                ``beat_<epoch ms>_<counter>`` using one timestamp per call.
        """
        self.id_factory = id_factory

    def _id_factory(self) -> Callable[[int], str]:
        if self.id_factory is not None:
            return self.id_factory
        stamp = int(time.time() * 1000)
        return lambda counter: f"beat_{stamp}_{counter}"

    def _scene_beats(
        self, scene: Scene, next_id: Callable[[], str]
    ) -> list[Beat]:
        lighting = LIGHTING_INTERIOR if scene.interior else LIGHTING_NATURAL
        seen: list[str] = []
        beats: list[Beat] = []
        current: Beat | None = None

        for element in scene.content:
            match element.kind:
                case ElementKind.CHARACTER:
                    if element.character and element.character not in seen:
                        seen.append(element.character)
                case ElementKind.ACTION:
                    current = Beat(
                        id=next_id(),
                        action=element.text,
                        location=scene.location,
                        camera=CAMERA_STANDARD,
                        lighting=lighting,
                        scene_number=scene.scene_number,
                        characters=_handles(seen),
                    )
                    beats.append(current)
                case ElementKind.DIALOGUE:
                    if current is not None:
                        current.dialogue = element.text
                        if element.character:
                            current.add_character(generate_handle(element.character))
                case ElementKind.PARENTHETICAL | ElementKind.TRANSITION:
                    pass

        if not beats:
            beats.append(
                Beat(
                    id=next_id(),
                    action=scene.heading,
                    location=scene.location,
                    camera=CAMERA_ESTABLISHING,
                    lighting=lighting,
                    scene_number=scene.scene_number,
                    characters=_handles(seen),
                )
            )
        return beats

    def extract(self, document: ScriptDocument) -> list[Beat]:
        """Extract beats in scene order.

        Args:
            document: Parsed screenplay

        Returns:
            Beats with ids unique within this call
        """
        make_id = self._id_factory()
        counter = itertools.count(1)

        def next_id() -> str:
            return make_id(next(counter))

        beats: list[Beat] = []
        for scene in document.scenes:
            beats.extend(self._scene_beats(scene, next_id))

        logger.debug(
            "Extracted beats", title=document.title, beats=len(beats)
        )
        return beats
