"""Final Draft (FDX) style XML screenplay parser."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from scriptengine.config import get_logger
from scriptengine.exceptions import (
    MalformedMarkupError,
    ScriptEngineFileNotFoundError,
)
from scriptengine.parser.classifier import CUE_EXTENSION_PATTERN, parse_scene_heading
from scriptengine.parser.models import (
    DEFAULT_TITLE,
    ElementKind,
    SceneElement,
    ScriptDocument,
    SourceFormat,
)
from scriptengine.parser.scene_builder import SceneBuilder
from scriptengine.parser.text_renderer import render_script_text

logger = get_logger(__name__)

ROOT_TAG = "FinalDraft"
HEADING_TYPES = frozenset({"scene heading", "slug line"})
PARAGRAPH_KINDS = {
    "character": ElementKind.CHARACTER,
    "dialogue": ElementKind.DIALOGUE,
    "parenthetical": ElementKind.PARENTHETICAL,
    "transition": ElementKind.TRANSITION,
}
AUTHOR_TYPES = frozenset({"author", "written by"})


def paragraph_text(paragraph: ET.Element) -> str:
    """Concatenate every ``Text`` run of a paragraph."""
    runs = paragraph.findall("Text")
    if not runs:
        return ""
    return "".join("".join(run.itertext()) for run in runs).strip()


class MarkupParser:
    """Parse tagged-paragraph screenplay markup into a ScriptDocument.

    Paragraph ``Type`` attributes are authoritative, so no line heuristics are
    applied. Unlike Fountain, every dialogue paragraph stays its own element.
    """

    def _load(self, xml_content: str) -> ET.Element:
        try:
            root = ET.fromstring(xml_content.lstrip("\ufeff \t\r\n"))
        except ET.ParseError as e:
            raise MalformedMarkupError(
                message="Failed to parse screenplay markup",
                hint="Check that the file is a well-formed Final Draft (.fdx) document",
                details={"parser_error": str(e)},
            ) from e

        if root.tag != ROOT_TAG and root.find(".//Paragraph") is None:
            raise MalformedMarkupError(
                message=f"Unexpected markup root element <{root.tag}>",
                hint="Expected a <FinalDraft> document made of <Paragraph> elements",
                details={"root": root.tag},
            )
        return root

    def _title_page(self, root: ET.Element) -> tuple[str, list[str]]:
        """Extract title and authors from the title page block."""
        title: str | None = None
        authors: list[str] = []

        title_page = root.find(".//TitlePage")
        if title_page is not None:
            for element in title_page.iter():
                field_type = (element.get("Type") or "").strip().lower()
                if not field_type:
                    continue
                text = "".join(element.itertext()).strip()
                if not text:
                    continue
                if field_type == "title" and title is None:
                    title = text
                elif field_type in AUTHOR_TYPES:
                    authors.append(text)

        return title or root.get("Title") or DEFAULT_TITLE, authors

    def _body_paragraphs(self, root: ET.Element) -> list[ET.Element]:
        content = root.find("Content")
        if content is not None:
            return content.findall(".//Paragraph")

        title_page = root.find(".//TitlePage")
        excluded = (
            {id(p) for p in title_page.iter("Paragraph")}
            if title_page is not None
            else set()
        )
        return [p for p in root.iter("Paragraph") if id(p) not in excluded]

    def _consume(self, state: SceneBuilder, paragraph: ET.Element) -> None:
        text = paragraph_text(paragraph)
        if not text:
            return

        paragraph_type = (paragraph.get("Type") or "").strip().lower()
        if paragraph_type in HEADING_TYPES:
            state.open_scene(parse_scene_heading(text))
            return

        scene = state.ensure_scene()
        kind = PARAGRAPH_KINDS.get(paragraph_type, ElementKind.ACTION)

        if kind is ElementKind.CHARACTER:
            name = CUE_EXTENSION_PATTERN.sub("", text).strip() or text
            state.characters.add(name)
            scene.content.append(SceneElement(kind, text, character=name))
        elif kind is ElementKind.DIALOGUE:
            scene.content.append(
                SceneElement(kind, text, character=scene.last_character())
            )
        else:
            scene.content.append(SceneElement(kind, text))

    def parse(self, xml_content: str) -> ScriptDocument:
        """Parse FDX markup into a ScriptDocument.

        Args:
            xml_content: Markup document as text

        Returns:
            Parsed document with ``source_format`` set to structured-markup and
            a reconstructed text view in ``raw_text``

        Raises:
            MalformedMarkupError: If the input is not a tagged paragraph document
        """
        root = self._load(xml_content)
        title, authors = self._title_page(root)

        state = SceneBuilder()
        for paragraph in self._body_paragraphs(root):
            self._consume(state, paragraph)

        document = ScriptDocument(
            title=title,
            authors=authors,
            raw_text=render_script_text(state.scenes),
            scenes=state.scenes,
            characters=state.characters.to_list(),
            locations=state.locations.to_list(),
            source_format=SourceFormat.STRUCTURED_MARKUP,
        )
        logger.debug(
            "Parsed markup script",
            title=document.title,
            scenes=document.scene_count,
            characters=len(document.characters),
        )
        return document

    def parse_file(self, file_path: Path | str) -> ScriptDocument:
        """Parse an FDX file.

        Args:
            file_path: Path to the markup file

        Returns:
            Parsed document
        """
        path = Path(file_path)
        if not path.is_file():
            raise ScriptEngineFileNotFoundError(
                message=f"Markup file not found: {path}",
                hint="Check that the file path is correct",
                details={"file": str(path)},
            )
        return self.parse(path.read_text(encoding="utf-8"))
