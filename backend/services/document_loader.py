"""Document loading service for PDF text extraction."""
import logging
import os
from typing import List, Tuple

import fitz  # PyMuPDF

from models.document import ExtractionResult

logger = logging.getLogger(__name__)


class DocumentLoader:
    """Extracts text and page counts from PDF payloads."""

    def extract(self, payload: bytes, filename: str = "document.pdf") -> ExtractionResult:
        """
        Extract text from a PDF payload page by page.

        Each page's text is preceded by a blank line. A payload that cannot be
        parsed yields an empty result rather than an error.

        Args:
            payload: Raw PDF bytes
            filename: Name used in log messages

        Returns:
            ExtractionResult with the full text and the page count
        """
        try:
            with fitz.open(stream=payload, filetype="pdf") as pdf_document:
                parts = []
                for page in pdf_document:
                    parts.append("\n\n" + page.get_text())
                pages = pdf_document.page_count
        except Exception as e:
            logger.warning(f"PDF parsing failed for {filename}: {str(e)}")
            return ExtractionResult(text="", pages=0)

        text = "".join(parts)
        logger.info(f"Extracted {filename}: {pages} pages, {len(text)} chars")
        return ExtractionResult(text=text, pages=pages)

    def load_directory(self, docs_directory: str) -> List[Tuple[str, bytes]]:
        """
        Read every PDF file in a directory.

        Args:
            docs_directory: Path to directory containing PDF files

        Returns:
            List of (filename, payload) pairs sorted by filename
        """
        if not os.path.isdir(docs_directory):
            logger.error(f"Documents directory not found: {docs_directory}")
            return []

        pdf_files = sorted(f for f in os.listdir(docs_directory) if f.lower().endswith('.pdf'))
        logger.info(f"Found {len(pdf_files)} PDF files in {docs_directory}")

        payloads = []
        for filename in pdf_files:
            with open(os.path.join(docs_directory, filename), "rb") as handle:
                payloads.append((filename, handle.read()))
        return payloads
