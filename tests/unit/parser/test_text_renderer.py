"""Tests for the screenplay text renderer."""

from itertools import groupby

import pytest

from scriptengine.parser import (
    FountainParser,
    MarkupParser,
    fountain_filename,
    render_fountain,
    render_script_text,
)
from scriptengine.parser.models import ElementKind, Scene, SceneElement


def test_render_script_text_layout():
    scene = Scene(
        scene_number=1,
        heading="INT. DINER - DAY",
        location="DINER",
        interior=True,
        content=[
            SceneElement(ElementKind.ACTION, "Rain."),
            SceneElement(ElementKind.CHARACTER, "JOE", character="JOE"),
            SceneElement(ElementKind.PARENTHETICAL, "(tired)"),
            SceneElement(ElementKind.DIALOGUE, "Coffee.", character="JOE"),
        ],
    )

    assert render_script_text([scene]) == (
        "INT. DINER - DAY\n\nRain.\n\n\nJOE\n(tired)\nCoffee.\n\n"
    )


def test_render_no_scenes():
    assert render_script_text([]) == ""


@pytest.mark.parametrize(
    ("title", "filename"),
    [
        ("Big Fish", "Big_Fish_Script.fountain"),
        ("  The   Long Goodbye ", "The_Long_Goodbye_Script.fountain"),
        ("Solo", "Solo_Script.fountain"),
        ("", "Untitled_Script.fountain"),
    ],
)
def test_fountain_filename(title, filename):
    assert fountain_filename(title) == filename


def test_render_fountain_round_trips(diner_script):
    parser = FountainParser()
    document = parser.parse(diner_script)
    document.authors = ["Sam Wilkinson"]

    text = render_fountain(document)
    assert text.startswith("Title: Test\nAuthor: Sam Wilkinson\n\n")

    reparsed = parser.parse(text)
    assert reparsed.title == "Test"
    assert reparsed.authors == ["Sam Wilkinson"]
    assert reparsed.scenes == document.scenes


def fdx(*paragraphs: tuple[str, str]) -> str:
    body = "".join(
        f'<Paragraph Type="{kind}"><Text>{text}</Text></Paragraph>'
        for kind, text in paragraphs
    )
    return f"<FinalDraft><Content>{body}</Content></FinalDraft>"


class TestRenderFountain:
    """Fountain output re-parses into the same scenes."""

    def test_markup_document_round_trips(self):
        document = MarkupParser().parse(
            fdx(
                ("Action", "Dark."),
                ("Scene Heading", "KITCHEN"),
                ("Character", "Barista"),
                ("Dialogue", "Closing time."),
            )
        )

        text = render_fountain(document)
        reparsed = FountainParser().parse(text)

        assert ".KITCHEN\n" in text
        assert "\n@Barista\n" in text
        assert "OPENING" not in text
        assert reparsed.scenes == document.scenes
        assert reparsed.characters == ["Barista"]
        assert reparsed.locations == ["UNKNOWN", "KITCHEN"]

    def test_ambiguous_action_and_transition_are_forced(self):
        document = MarkupParser().parse(
            fdx(
                ("Action", "Note: the lights flicker."),
                ("Scene Heading", "INT. LAB - DAY"),
                ("Action", "THE BOMB EXPLODES"),
                ("Action", "(silence)"),
                ("Transition", "BACK TO PRESENT"),
            )
        )

        text = render_fountain(document)
        reparsed = FountainParser().parse(text)

        assert "\n!THE BOMB EXPLODES\n" in text
        assert "\n>BACK TO PRESENT\n" in text
        assert reparsed.title == "Untitled Script"
        assert reparsed.scenes == document.scenes
        assert reparsed.characters == []

    def test_fixture_structure_survives(self, fdx_path):
        document = MarkupParser().parse_file(fdx_path)
        reparsed = FountainParser().parse(render_fountain(document))

        def key(element):
            return element.kind, element.character

        # Consecutive dialogue paragraphs read back as one dialogue block
        def shape(doc):
            return [
                (s.heading, [k for k, _ in groupby(map(key, s.content))])
                for s in doc.scenes
            ]

        assert shape(reparsed) == shape(document)
        assert reparsed.characters == document.characters

    def test_raw_text_view_is_unforced(self):
        scene = Scene(
            scene_number=1,
            heading="KITCHEN",
            location="KITCHEN",
            interior=False,
            content=[SceneElement(ElementKind.CHARACTER, "Barista", "Barista")],
        )
        assert render_script_text([scene]) == "KITCHEN\n\n\nBarista\n\n"
