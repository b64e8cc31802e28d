"""PDF text extraction for screenplay import."""

from __future__ import annotations

import io
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pdfplumber

from scriptengine.config import get_logger
from scriptengine.exceptions import ExtractionUnavailableError

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExtractedText:
    """Plain text pulled from a PDF with its page count."""

    text: str
    page_count: int


def extract_pdf_text(
    source: Path | str | bytes,
    *,
    pdf_open: Callable[..., Any] = pdfplumber.open,
) -> ExtractedText:
    """Extract page text from a PDF.

    Pages are joined with a blank line so the Fountain parser sees page
    boundaries as paragraph breaks.

    Args:
        source: Path to a PDF file or its raw bytes
        pdf_open: Opener returning a pdfplumber-compatible document

    Returns:
        ExtractedText with the joined page text and number of pages

    Raises:
        ExtractionUnavailableError: If the PDF cannot be opened or has no
            extractable text (e.g. scanned images)
    """
    handle = io.BytesIO(source) if isinstance(source, bytes) else str(source)
    label = "<bytes>" if isinstance(source, bytes) else str(source)

    try:
        with pdf_open(handle) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        raise ExtractionUnavailableError(
            message="PDF text extraction failed",
            hint="Check that the file is a valid, unencrypted PDF",
            details={"source": label, "error": str(e)},
        ) from e

    text = "\n\n".join(page.strip() for page in pages if page.strip())
    if not text:
        raise ExtractionUnavailableError(
            message="No text could be extracted from the PDF",
            hint="Scanned PDFs need OCR first; export the script as Fountain or FDX instead",
            details={"source": label, "pages": len(pages)},
        )

    logger.debug("Extracted PDF text", source=label, pages=len(pages))
    return ExtractedText(text=text, page_count=len(pages))
