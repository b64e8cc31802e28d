"""ScriptEngine: screenplay import and interchange.

ScriptEngine parses Fountain, Final Draft (FDX) and PDF screenplays into a
scene-structured document and exports characters, locations and beats as
JSON for downstream production tools.
"""

from .config import ScriptEngineSettings, get_logger, get_settings
from .exceptions import ScriptEngineError
from .export import BeatExtractor, ExportFormat, ExportSerializer
from .importer import ImportResult, ScriptImporter, detect_format
from .parser import FountainParser, MarkupParser, ScriptDocument, SourceFormat

__version__ = "0.1.0"

__all__ = [
    "BeatExtractor",
    "ExportFormat",
    "ExportSerializer",
    "FountainParser",
    "ImportResult",
    "MarkupParser",
    "ScriptDocument",
    "ScriptEngineError",
    "ScriptEngineSettings",
    "ScriptImporter",
    "SourceFormat",
    "__version__",
    "detect_format",
    "get_logger",
    "get_settings",
]
