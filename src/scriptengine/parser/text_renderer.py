"""Render parsed scenes back into a plain screenplay text view."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

from scriptengine.parser.classifier import (
    SPEECH_KINDS,
    LineClassifier,
    character_name,
    is_scene_heading,
)
from scriptengine.parser.fountain_parser import TITLE_PAGE_FIELD_PATTERN
from scriptengine.parser.models import (
    OPENING_HEADING,
    UNKNOWN_LOCATION,
    ElementKind,
    Scene,
    SceneElement,
    ScriptDocument,
)

BLOCK_KINDS = frozenset({ElementKind.ACTION, ElementKind.TRANSITION})
FORCING_MARKERS = {
    ElementKind.CHARACTER: "@",
    ElementKind.ACTION: "!",
    ElementKind.TRANSITION: ">",
}

_classifier = LineClassifier()


def render_element(kind: ElementKind, text: str) -> str:
    match kind:
        case ElementKind.CHARACTER:
            return f"\n{text}\n"
        case ElementKind.DIALOGUE | ElementKind.PARENTHETICAL:
            return f"{text}\n"
        case ElementKind.ACTION | ElementKind.TRANSITION:
            return f"{text}\n\n"


def _render(
    scenes: Iterable[Scene],
    heading_line: Callable[[int, Scene], str | None],
    element_text: Callable[[SceneElement], str],
) -> str:
    parts: list[str] = []
    for index, scene in enumerate(scenes):
        heading = heading_line(index, scene)
        if heading is not None:
            parts.append(f"{heading}\n\n")
        previous: ElementKind | None = None
        for element in scene.content:
            if element.kind in BLOCK_KINDS and previous in SPEECH_KINDS:
                parts.append("\n")
            parts.append(render_element(element.kind, element_text(element)))
            previous = element.kind
        parts.append("\n")
    return "".join(parts)


def render_script_text(scenes: Iterable[Scene]) -> str:
    """Flatten scenes into screenplay text.

    Headings and action blocks are followed by a blank line, character cues
    sit on their own line preceded by a blank line, and dialogue and
    parentheticals follow their cue directly. A speech run is closed with a
    blank line before the next action or transition.

    Args:
        scenes: Scenes in document order

    Returns:
        Text view of the scenes
    """
    return _render(scenes, lambda _, scene: scene.heading, lambda e: e.text)


def _fountain_heading(index: int, scene: Scene) -> str | None:
    # The synthetic opening scene is recreated by the parser
    if (
        index == 0
        and scene.heading == OPENING_HEADING
        and scene.location == UNKNOWN_LOCATION
    ):
        return None
    if is_scene_heading(scene.heading):
        return scene.heading
    return f".{scene.heading}"


def _fountain_text(element: SceneElement) -> str:
    text = element.text
    marker = FORCING_MARKERS.get(element.kind)
    if marker is None:
        return text

    if element.kind is ElementKind.CHARACTER:
        plain = character_name(text) == element.character
    else:
        classification = _classifier.classify(text)
        plain = classification.kind is element.kind and classification.text is None
        if element.kind is ElementKind.ACTION and TITLE_PAGE_FIELD_PATTERN.match(text):
            plain = False
    return text if plain else f"{marker}{text}"


def fountain_filename(title: str) -> str:
    """File name used when saving a script as Fountain."""
    stem = re.sub(r"\s+", "_", title.strip()) or "Untitled"
    return f"{stem}_Script.fountain"


def render_fountain(document: ScriptDocument) -> str:
    """Render a document as Fountain text with a title page.

    Unlike ``render_script_text``, lines the Fountain parser would read as a
    different element are written with a forcing marker: ``.`` for headings
    without an ``INT.``/``EXT.`` prefix, ``@`` for cues that are not
    upper-case, ``!`` for action and ``>`` for transitions.
    """
    title_page = [f"Title: {document.title}"]
    title_page.extend(f"Author: {author}" for author in document.authors)
    body = _render(document.scenes, _fountain_heading, _fountain_text)
    return "\n".join(title_page) + "\n\n" + body
