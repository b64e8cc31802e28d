"""Beat extraction and interchange export."""

from __future__ import annotations

from .beats import Beat, BeatExtractor, generate_handle
from .schemas import (
    BibleImport,
    DirectorExport,
    ExportFormat,
    ScriptExportEnvelope,
)
from .serializer import ExportSerializer, location_handle

__all__ = [
    "Beat",
    "BeatExtractor",
    "BibleImport",
    "DirectorExport",
    "ExportFormat",
    "ExportSerializer",
    "ScriptExportEnvelope",
    "generate_handle",
    "location_handle",
]
