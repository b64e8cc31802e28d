"""Tests for PDF text extraction."""

from contextlib import contextmanager
from types import SimpleNamespace

import pytest

from scriptengine.exceptions import ExtractionUnavailableError
from scriptengine.pdf_extraction import extract_pdf_text


def fake_opener(*page_texts):
    opened = []

    @contextmanager
    def pdf_open(source):
        opened.append(source)
        pages = [SimpleNamespace(extract_text=lambda t=t: t) for t in page_texts]
        yield SimpleNamespace(pages=pages)

    pdf_open.opened = opened
    return pdf_open


def test_pages_joined_with_blank_line():
    opener = fake_opener("INT. ROOM - DAY\n", None, "  JOE\nHi.  ")

    extracted = extract_pdf_text("script.pdf", pdf_open=opener)

    assert extracted.text == "INT. ROOM - DAY\n\nJOE\nHi."
    assert extracted.page_count == 3
    assert opener.opened == ["script.pdf"]


def test_bytes_are_wrapped():
    opener = fake_opener("Text")
    extract_pdf_text(b"%PDF-1.4", pdf_open=opener)
    assert opener.opened[0].read() == b"%PDF-1.4"


def test_no_text_raises():
    with pytest.raises(ExtractionUnavailableError) as exc_info:
        extract_pdf_text("scan.pdf", pdf_open=fake_opener("", None, "   "))
    assert exc_info.value.details == {"source": "scan.pdf", "pages": 3}


def test_open_failure_raises():
    def broken(source):
        raise ValueError("bad xref table")

    with pytest.raises(ExtractionUnavailableError, match="extraction failed"):
        extract_pdf_text("broken.pdf", pdf_open=broken)


def test_invalid_pdf_bytes():
    with pytest.raises(ExtractionUnavailableError):
        extract_pdf_text(b"this is not a pdf")
