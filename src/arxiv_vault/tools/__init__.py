"""
MCP Tools for the plugin commands.

Provides tools for:
- PDF operations: extract text into a note
- arXiv operations: fetch metadata and citation statistics into a note
"""

from .fetch_arxiv_metadata import fetch_arxiv_metadata_tool, handle_fetch_arxiv_metadata
from .get_text_from_pdf import get_text_from_pdf_tool, handle_get_text_from_pdf

__all__ = [
    "get_text_from_pdf_tool",
    "handle_get_text_from_pdf",
    "fetch_arxiv_metadata_tool",
    "handle_fetch_arxiv_metadata",
]
