"""
PDF text extraction.

Wraps PyMuPDF; all parsing is left to the library.
"""

from __future__ import annotations

import logging

import pymupdf
import pymupdf4llm

from .exceptions import PdfExtractionError

logger = logging.getLogger("arxiv-vault")


class PDFExtractor:
    """
    Extract text from raw PDF bytes.

    With ``as_markdown`` the document is rendered through pymupdf4llm
    instead of returning plain page text.
    """

    def __init__(self, as_markdown: bool = False):
        self.as_markdown = as_markdown

    def extract_text_from_pdf(self, data: bytes) -> str:
        """
        Extract the text of every page.

        Args:
            data: Raw PDF file contents.

        Returns:
            Page texts separated by a blank line, or markdown.

        Raises:
            PdfExtractionError: If the library cannot read the document.
        """
        if not data:
            raise PdfExtractionError("PDF data is empty")

        try:
            with pymupdf.open(stream=data, filetype="pdf") as doc:
                if self.as_markdown:
                    text = pymupdf4llm.to_markdown(doc, show_progress=False)
                else:
                    text = "\n\n".join(page.get_text().strip() for page in doc)
                page_count = doc.page_count
        except Exception as e:
            raise PdfExtractionError(f"Failed to extract text from PDF: {e}") from e

        logger.info(f"Extracted {len(text)} characters from {page_count} pages")
        return text
