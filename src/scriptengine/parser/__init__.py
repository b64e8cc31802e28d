"""Screenplay parsers for ScriptEngine."""

from __future__ import annotations

from .classifier import Classification, LineClassifier, SceneHeading
from .fountain_parser import FountainParser
from .markup_parser import MarkupParser
from .models import ElementKind, Scene, SceneElement, ScriptDocument, SourceFormat
from .text_renderer import fountain_filename, render_fountain, render_script_text

__all__ = [
    "Classification",
    "ElementKind",
    "FountainParser",
    "LineClassifier",
    "MarkupParser",
    "Scene",
    "SceneElement",
    "SceneHeading",
    "ScriptDocument",
    "SourceFormat",
    "fountain_filename",
    "render_fountain",
    "render_script_text",
]
