"""Line classification rules for plain-text screenplays.

Every non-blank body line of a Fountain document is assigned exactly one
semantic role. Rules are tried in a fixed order and the first match wins:

0. forcing markers: ``@`` character cue, ``!`` action, ``>`` transition
1. scene heading (``INT.``, ``EXT.``, ``INT/EXT.``, ``I/E.`` or a forced ``.``)
2. character cue (upper-case name shorter than 40 characters, no colon)
3. parenthetical (``(...)``)
4. transition (``CUT TO:``, ``FADE OUT`` ...)
5. dialogue, when the previous element belongs to a speech run
6. action

The cue heuristic also matches short all-caps action lines such as
``THE BOMB EXPLODES``. Importers downstream depend on this ordering and these
thresholds, so they are kept as they are.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from scriptengine.parser.models import DEFAULT_TIME_OF_DAY, ElementKind

HEADING_PATTERN = re.compile(r"^(?:INT\.|EXT\.|INT/EXT\.|I/E\.)", re.IGNORECASE)
HEADING_TOKEN_PATTERN = re.compile(
    r"^(?P<token>INT/EXT\.|INT\.|EXT\.|I/E\.)\s*(?P<rest>.*)$", re.IGNORECASE
)
INTERIOR_PATTERN = re.compile(r"^(?:INT|I/E)", re.IGNORECASE)
# A dash only separates location from time when whitespace sits on one side,
# so hyphenated names like SELF-STORAGE stay intact.
TIME_SEPARATOR_PATTERN = re.compile(r"\s+[-–—]+\s*|\s*[-–—]+\s+")

CHARACTER_PATTERN = re.compile(r"^([A-Z][A-Z\s.\-']+)(?:\s*\(.*\))?$")
CUE_EXTENSION_PATTERN = re.compile(r"\s*\(.*\)$")
CHARACTER_MAX_LENGTH = 40
RESERVED_CUES = frozenset(
    {"INT", "EXT", "CUT TO", "FADE IN", "FADE OUT", "DISSOLVE TO"}
)

TRANSITION_PATTERN = re.compile(
    r"(CUT TO|FADE TO|DISSOLVE TO|SMASH CUT|FADE IN|FADE OUT):?$", re.IGNORECASE
)

SPEECH_KINDS = frozenset(
    {ElementKind.CHARACTER, ElementKind.PARENTHETICAL, ElementKind.DIALOGUE}
)


@dataclass(frozen=True)
class SceneHeading:
    """Components of a parsed scene heading."""

    heading: str
    location: str
    time_of_day: str
    interior: bool


@dataclass(frozen=True)
class Classification:
    """Result of classifying one line.

    Exactly one of ``heading`` and ``kind`` is set. ``text`` replaces the
    line when a forcing marker was stripped from it.
    """

    kind: ElementKind | None = None
    character: str | None = None
    heading: SceneHeading | None = None
    text: str | None = None

    @property
    def is_heading(self) -> bool:
        return self.heading is not None


def is_scene_heading(line: str) -> bool:
    """Check whether a trimmed line opens a new scene."""
    if HEADING_PATTERN.match(line):
        return True
    # Forced heading: a single leading dot; an ellipsis is ordinary text
    return line.startswith(".") and not line.startswith("..")


def parse_scene_heading(line: str) -> SceneHeading:
    """Split a heading into location, time of day and interior flag.

    Args:
        line: Trimmed heading text (e.g. "INT. DINER - DAY" or ".FLASHBACK")

    Returns:
        SceneHeading with ``time_of_day`` defaulting to "DAY"
    """
    heading = line
    match = HEADING_TOKEN_PATTERN.match(line)
    if match:
        rest = match.group("rest")
    elif is_scene_heading(line):
        # The forcing dot is markup, not part of the heading
        heading = rest = line[1:].strip() or line
    else:
        rest = line

    parts = TIME_SEPARATOR_PATTERN.split(rest.strip(), maxsplit=1)
    location = parts[0].strip() or line
    time_of_day = parts[1].strip() if len(parts) > 1 else ""

    return SceneHeading(
        heading=heading,
        location=location,
        time_of_day=time_of_day or DEFAULT_TIME_OF_DAY,
        interior=bool(INTERIOR_PATTERN.match(line)),
    )


def character_name(line: str) -> str | None:
    """Return the speaker named by a character cue, or None if not a cue."""
    if len(line) >= CHARACTER_MAX_LENGTH or ":" in line:
        return None
    match = CHARACTER_PATTERN.match(line)
    if not match:
        return None
    name = match.group(1).strip()
    if name in RESERVED_CUES:
        return None
    return name


class LineClassifier:
    """Classify single screenplay lines with one element of lookback."""

    @staticmethod
    def _forced(line: str) -> Classification | None:
        body = line[1:].strip()
        if not body:
            return None
        match line[0]:
            case "@":
                name = CUE_EXTENSION_PATTERN.sub("", body) or body
                return Classification(
                    kind=ElementKind.CHARACTER, character=name, text=body
                )
            case "!":
                return Classification(kind=ElementKind.ACTION, text=body)
            case ">" if not line.endswith("<"):
                return Classification(kind=ElementKind.TRANSITION, text=body)
        return None

    def classify(
        self, line: str, previous: ElementKind | None = None
    ) -> Classification:
        """Classify a trimmed line.

        Args:
            line: The line to classify, already stripped of whitespace
            previous: Kind of the element emitted just before this line in the
                current scene, if any

        Returns:
            Classification for the line
        """
        forced = self._forced(line)
        if forced is not None:
            return forced

        if is_scene_heading(line):
            return Classification(heading=parse_scene_heading(line))

        name = character_name(line)
        if name is not None:
            return Classification(kind=ElementKind.CHARACTER, character=name)

        if line.startswith("(") and line.endswith(")"):
            return Classification(kind=ElementKind.PARENTHETICAL)

        if TRANSITION_PATTERN.search(line):
            return Classification(kind=ElementKind.TRANSITION)

        if previous in SPEECH_KINDS:
            return Classification(kind=ElementKind.DIALOGUE)

        return Classification(kind=ElementKind.ACTION)
