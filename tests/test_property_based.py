"""Property-based tests for parsing and beat extraction using Hypothesis."""

import string

from hypothesis import example, given, settings
from hypothesis import strategies as st

from scriptengine.export import BeatExtractor, generate_handle
from scriptengine.parser import FountainParser
from scriptengine.parser.models import ElementKind

HEADINGS = [
    "INT. DINER - DAY",
    "EXT. BEACH - NIGHT",
    "INT/EXT. CAR - MOVING",
    "int. kitchen - day",
    "EXT. SELF-STORAGE UNIT - CONTINUOUS",
]
CUES = ["JOE", "ALICE (V.O.)", "MARY JANE", "DR. O'NEIL"]
SPEECH = ["I need coffee.", "(beat)", "Not here.", "Finally."]
ACTION = ["She pours it.", "Rain falls on the roof.", "Alice nods."]
TRANSITIONS = ["CUT TO:", "FADE IN:", "Smash cut to:"]

script_lines = st.lists(
    st.one_of(
        st.sampled_from(HEADINGS),
        st.sampled_from(CUES),
        st.sampled_from(SPEECH),
        st.sampled_from(ACTION),
        st.sampled_from(TRANSITIONS),
        st.just(""),
    ),
    max_size=60,
)


def fixed_ids(counter: int) -> str:
    return f"beat_0_{counter}"


class TestParserProperties:
    @given(lines=script_lines)
    def test_scene_numbers_are_consecutive(self, lines):
        document = FountainParser().parse("\n".join(lines))
        assert [s.scene_number for s in document.scenes] == list(
            range(1, len(document.scenes) + 1)
        )

    @given(lines=script_lines)
    def test_every_heading_opens_a_scene(self, lines):
        document = FountainParser().parse("\n".join(lines))
        headings = sum(1 for line in lines if line in HEADINGS)
        assert len(document.scenes) in (headings, headings + 1)

    @given(lines=script_lines)
    def test_name_sets_cover_content(self, lines):
        document = FountainParser().parse("\n".join(lines))
        characters = {name.upper() for name in document.characters}
        locations = {name.upper() for name in document.locations}

        assert len(characters) == len(document.characters)
        assert len(locations) == len(document.locations)
        for scene in document.scenes:
            assert scene.location.upper() in locations
            for element in scene.content:
                if element.character:
                    assert element.character.upper() in characters

    @given(lines=script_lines)
    def test_dialogue_follows_speech(self, lines):
        document = FountainParser().parse("\n".join(lines))
        speech = {ElementKind.CHARACTER, ElementKind.PARENTHETICAL, ElementKind.DIALOGUE}
        for scene in document.scenes:
            for previous, element in zip(scene.content, scene.content[1:]):
                if element.kind is ElementKind.DIALOGUE:
                    assert previous.kind in speech

    @given(
        text=st.text(
            alphabet=string.printable.replace("\x00", "") + "–—é",
            max_size=500,
        )
    )
    @settings(max_examples=200)
    @example(text="\n\n\n")
    @example(text=".\n..\n(\n)")
    def test_arbitrary_text_never_raises(self, text):
        document = FountainParser().parse(text)
        assert document.raw_text == text

    @given(lines=script_lines)
    def test_parse_is_deterministic(self, lines):
        text = "\n".join(lines)
        assert FountainParser().parse(text) == FountainParser().parse(text)


class TestBeatProperties:
    @given(lines=script_lines)
    def test_every_scene_has_a_beat(self, lines):
        document = FountainParser().parse("\n".join(lines))
        beats = BeatExtractor(fixed_ids).extract(document)

        assert {b.scene_number for b in beats} == {
            s.scene_number for s in document.scenes
        }
        actions = sum(1 for _ in document.elements(ElementKind.ACTION))
        empty = sum(
            1
            for s in document.scenes
            if not any(e.kind is ElementKind.ACTION for e in s.content)
        )
        assert len(beats) == actions + empty

    @given(lines=script_lines)
    def test_extraction_is_idempotent(self, lines):
        document = FountainParser().parse("\n".join(lines))
        extractor = BeatExtractor(fixed_ids)
        assert extractor.extract(document) == extractor.extract(document)

    @given(lines=script_lines)
    def test_beat_characters_are_unique_handles(self, lines):
        document = FountainParser().parse("\n".join(lines))
        for beat in BeatExtractor(fixed_ids).extract(document):
            assert len(beat.characters) == len(set(beat.characters))
            assert all(h.startswith("@") for h in beat.characters)


@given(name=st.text(max_size=50))
def test_handles_have_no_whitespace(name):
    handle = generate_handle(name)
    assert handle.startswith("@")
    assert not any(ch.isspace() for ch in handle[1:])
