"""Unit tests for DocumentLoader."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import fitz  # PyMuPDF
import pytest
from services.document_loader import DocumentLoader


def make_pdf(pages):
    """Build an in-memory PDF with one text line per page."""
    pdf_document = fitz.open()
    for text in pages:
        page = pdf_document.new_page()
        page.insert_text((72, 72), text)
    payload = pdf_document.tobytes()
    pdf_document.close()
    return payload


class TestDocumentLoader:
    """Test suite for DocumentLoader."""

    @pytest.fixture
    def loader(self):
        return DocumentLoader()

    def test_extract_text_and_pages(self, loader):
        """Test extraction of a two-page PDF."""
        payload = make_pdf(["Opening checklist", "Closing procedure for the store"])

        result = loader.extract(payload, "manual.pdf")

        assert result.pages == 2
        assert "Opening checklist" in result.text
        assert "Closing procedure for the store" in result.text
        assert result.text.startswith("\n\n")
        assert result.text.index("Opening") < result.text.index("Closing")

    def test_extract_invalid_payload(self, loader):
        """Test that unparseable bytes give an empty document."""
        result = loader.extract(b"this is not a pdf", "broken.pdf")

        assert result.text == ""
        assert result.pages == 0

    def test_extract_empty_payload(self, loader):
        """Test that an empty upload gives an empty document."""
        result = loader.extract(b"", "empty.pdf")

        assert result.text == ""
        assert result.pages == 0

    def test_load_directory(self, loader, tmp_path):
        """Test reading PDFs from a directory in name order."""
        (tmp_path / "b.pdf").write_bytes(make_pdf(["B"]))
        (tmp_path / "a.PDF").write_bytes(make_pdf(["A"]))
        (tmp_path / "notes.txt").write_text("skip me")

        payloads = loader.load_directory(str(tmp_path))

        assert [name for name, _ in payloads] == ["a.PDF", "b.pdf"]
        assert all(payload.startswith(b"%PDF") for _, payload in payloads)

    def test_load_missing_directory(self, loader, tmp_path):
        """Test that a missing directory yields nothing."""
        assert loader.load_directory(str(tmp_path / "missing")) == []
