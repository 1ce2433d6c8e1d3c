"""
Core arXiv metadata module.

This module contains the pure Python business logic with NO MCP dependencies.
It can be used directly by any host application or other Python code.

Example usage:
    from arxiv_vault.core import ArxivClient

    client = ArxivClient()
    metadata = await client.fetch_arxiv_metadata("https://arxiv.org/abs/2404.16260")
    citations = await client.fetch_citation_info("2404.16260")
"""

from .client import ArxivClient, format_abstract, get_influential_papers, parse_arxiv_response
from .exceptions import (
    ArxivVaultError,
    InvalidInputError,
    NotFoundError,
    ParseError,
    PdfExtractionError,
    UpstreamError,
)
from .models import (
    ArxivMetadata,
    CitationInfo,
    CitationLookup,
    ImportedPaper,
    InfluentialPaper,
    NoteWriteResult,
)
from .pdf import PDFExtractor
from .service import ArxivMetadataService
from .urls import extract_arxiv_id, normalize_arxiv_url

__all__ = [
    # Models
    "ArxivMetadata",
    "CitationInfo",
    "CitationLookup",
    "ImportedPaper",
    "InfluentialPaper",
    "NoteWriteResult",
    # Errors
    "ArxivVaultError",
    "InvalidInputError",
    "NotFoundError",
    "ParseError",
    "PdfExtractionError",
    "UpstreamError",
    # Services
    "ArxivClient",
    "ArxivMetadataService",
    "PDFExtractor",
    # Helpers
    "extract_arxiv_id",
    "normalize_arxiv_url",
    "format_abstract",
    "get_influential_papers",
    "parse_arxiv_response",
]
