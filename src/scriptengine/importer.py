"""Format detection and screenplay import."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from scriptengine.config import ScriptEngineSettings, get_logger, get_settings
from scriptengine.exceptions import (
    ScriptEngineFileNotFoundError,
    UnsupportedFormatError,
    ValidationError,
)
from scriptengine.export.beats import Beat, BeatExtractor
from scriptengine.parser import FountainParser, MarkupParser, ScriptDocument
from scriptengine.parser.models import SourceFormat
from scriptengine.pdf_extraction import extract_pdf_text

logger = get_logger(__name__)

EXTENSION_FORMATS = {
    ".fdx": SourceFormat.STRUCTURED_MARKUP,
    ".fountain": SourceFormat.FOUNTAIN,
    ".spmd": SourceFormat.FOUNTAIN,
    ".txt": SourceFormat.FOUNTAIN,
    ".pdf": SourceFormat.PDF,
}
PDF_MAGIC = b"%PDF-"


def _looks_like_markup(text: str) -> bool:
    return text.lstrip("\ufeff \t\r\n").startswith("<?xml") or "<FinalDraft" in text


def detect_format(
    filename: str | None = None,
    content: str | bytes | None = None,
    *,
    default_to_fountain: bool = True,
) -> SourceFormat:
    """Decide which parser handles an input.

    The file extension wins when it is recognised; otherwise the content is
    sniffed for a PDF signature or markup prologue.

    Args:
        filename: Original file name, if known
        content: Raw text or bytes (only the head is inspected)
        default_to_fountain: Treat unrecognised input as Fountain

    Returns:
        Detected SourceFormat

    Raises:
        UnsupportedFormatError: If nothing matches and fallback is disabled
    """
    if filename:
        detected = EXTENSION_FORMATS.get(Path(filename).suffix.lower())
        if detected is not None:
            return detected

    if isinstance(content, bytes):
        if content.startswith(PDF_MAGIC):
            return SourceFormat.PDF
        content = content[:4096].decode("utf-8", errors="ignore")

    if content and _looks_like_markup(content):
        return SourceFormat.STRUCTURED_MARKUP

    if default_to_fountain:
        return SourceFormat.FOUNTAIN

    raise UnsupportedFormatError(
        message="Could not detect screenplay format",
        hint="Use a .fountain, .fdx or .pdf file, or enable default_to_fountain",
        details={"filename": filename or "<unknown>"},
    )


def decode_script_bytes(data: bytes) -> str:
    """Decode script bytes as UTF-8, falling back to latin-1."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.debug("Input is not valid UTF-8, decoding as latin-1")
        return data.decode("latin-1")


@dataclass
class ImportResult:
    """A parsed document together with the beats derived from it."""

    document: ScriptDocument
    beats: list[Beat] = field(default_factory=list)

    def summary(self) -> dict[str, object]:
        return {**self.document.summary(), "beats": len(self.beats)}


class ScriptImporter:
    """Route raw input to the right parser and derive beats."""

    def __init__(
        self,
        settings: ScriptEngineSettings | None = None,
        extractor: BeatExtractor | None = None,
    ) -> None:
        """Initialize the importer.

        Args:
            settings: Settings instance (defaults to global settings)
            extractor: Beat extractor (defaults to a new BeatExtractor)
        """
        self.settings = settings or get_settings()
        self.extractor = extractor or BeatExtractor()
        self.fountain_parser = FountainParser()
        self.markup_parser = MarkupParser()

    def _finish(self, document: ScriptDocument, source: str) -> ImportResult:
        result = ImportResult(document=document, beats=self.extractor.extract(document))
        logger.info("Imported script", source=source, **result.summary())
        return result

    def _check_size(self, size: int, source: str) -> None:
        limit = self.settings.max_import_bytes
        if size > limit:
            raise ValidationError(
                message=f"Script is too large to import: {source}",
                hint=f"Imports are limited to {limit} bytes (max_import_bytes)",
                details={"source": source, "size": size, "limit": limit},
            )

    def parse_text(
        self, text: str, source_format: SourceFormat = SourceFormat.FOUNTAIN
    ) -> ScriptDocument:
        """Parse text that is already known to be Fountain or markup."""
        if source_format is SourceFormat.STRUCTURED_MARKUP:
            return self.markup_parser.parse(text)
        return self.fountain_parser.parse(text)

    def import_text(self, text: str, filename: str | None = None) -> ImportResult:
        """Import screenplay text.

        Args:
            text: Script content
            filename: Original file name used for format detection

        Returns:
            ImportResult with the parsed document and its beats
        """
        source = filename or "<text>"
        self._check_size(len(text.encode("utf-8")), source)

        source_format = detect_format(
            filename, text, default_to_fountain=self.settings.default_to_fountain
        )
        if source_format is SourceFormat.PDF:
            raise UnsupportedFormatError(
                message="PDF input must be imported as bytes or from a file",
                hint="Use import_bytes() or import_file() for PDF scripts",
                details={"source": source},
            )
        return self._finish(self.parse_text(text, source_format), source)

    def import_bytes(self, data: bytes, filename: str | None = None) -> ImportResult:
        """Import raw script bytes (uploads, files read in binary mode).

        PDFs are extracted with pdfplumber and parsed as Fountain text.
        """
        source = filename or "<bytes>"
        self._check_size(len(data), source)

        source_format = detect_format(
            filename, data, default_to_fountain=self.settings.default_to_fountain
        )
        if source_format is SourceFormat.PDF:
            extracted = extract_pdf_text(data)
            document = self.fountain_parser.parse(extracted.text)
            document.source_format = SourceFormat.PDF
            document.page_count = extracted.page_count
            return self._finish(document, source)

        text = decode_script_bytes(data)
        return self._finish(self.parse_text(text, source_format), source)

    def import_file(self, file_path: Path | str) -> ImportResult:
        """Import a script file from disk.

        Raises:
            ScriptEngineFileNotFoundError: If the file does not exist
            ValidationError: If the file exceeds max_import_bytes
        """
        path = Path(file_path)
        if not path.is_file():
            raise ScriptEngineFileNotFoundError(
                message=f"Script file not found: {path}",
                hint="Check that the file path is correct",
                details={"file": str(path)},
            )
        self._check_size(path.stat().st_size, str(path))
        return self.import_bytes(path.read_bytes(), path.name)
