"""
Data models for arXiv metadata and citation statistics.

These models are pure Pydantic with no MCP dependencies, so the
core pipelines can be used from any host.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ArxivMetadata(BaseModel):
    """
    Bibliographic metadata of one arXiv paper.

    Built from the first ``entry`` of an arXiv Atom feed. Every field
    has a literal fallback, so a parsed entry always yields a record.
    """

    title: str = Field(..., description="Paper title, trimmed")
    paper_link: str = Field(default="", description="Canonical paper URL from the feed id")
    publish_date: str = Field(..., description="Publication date (YYYY-MM-DD)")
    authors: str = Field(default="", description="Author names joined with ', '")
    abstract: str = Field(..., description="Abstract with normalized whitespace")

    class Config:
        frozen = True


class InfluentialPaper(BaseModel):
    """
    A citing or cited paper flagged as influential by Semantic Scholar.
    """

    paper_id: Optional[str] = Field(default=None, description="Semantic Scholar paper ID")
    title: Optional[str] = Field(default=None, description="Paper title")
    url: Optional[str] = Field(default=None, description="Semantic Scholar page URL")
    venue: Optional[str] = Field(default=None, description="Publication venue")
    year: Optional[int] = Field(default=None, description="Publication year")
    authors: str = Field(default="", description="Author names joined with ', '")
    arxiv_id: Optional[str] = Field(default=None, description="arXiv identifier")
    doi: Optional[str] = Field(default=None, description="DOI")
    is_influential: bool = Field(default=True, description="Always true after filtering")
    citation_count: Optional[int] = Field(default=None, description="Total citation count")
    intent: list[str] = Field(default_factory=list, description="Citation intents")

    class Config:
        frozen = True


class CitationInfo(BaseModel):
    """
    Citation statistics for a paper.

    The default instance is the zero value returned whenever the
    citation source is unavailable.
    """

    num_cited_by: int = Field(default=0, ge=0, description="Number of citing papers")
    num_citing: int = Field(default=0, ge=0, description="Number of referenced papers")
    influential_citations: list[InfluentialPaper] = Field(default_factory=list)
    influential_references: list[InfluentialPaper] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True for the zero value."""
        return (
            self.num_cited_by == 0
            and self.num_citing == 0
            and not self.influential_citations
            and not self.influential_references
        )


class CitationLookup(BaseModel):
    """Outcome of one raw Semantic Scholar request."""

    arxiv_id: str
    info: Optional[CitationInfo] = None
    error: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.info is not None


class NoteWriteResult(BaseModel):
    """Where a note was written and whether it was new."""

    path: str = Field(..., description="Vault-relative path of the note")
    created: bool = Field(..., description="False when an existing note was overwritten")


class ImportedPaper(BaseModel):
    """Everything produced by one metadata import."""

    arxiv_id: str
    metadata: ArxivMetadata
    citations: CitationInfo = Field(default_factory=CitationInfo)
    note: NoteWriteResult
    fetched_at: datetime = Field(
        default_factory=datetime.utcnow, description="When this data was fetched"
    )
