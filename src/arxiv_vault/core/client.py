"""
arXiv and Semantic Scholar API client.

Direct HTTP client using httpx. The metadata request is strict and
raises; the citation request is best effort and never raises.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from .exceptions import InvalidInputError, NotFoundError, ParseError, UpstreamError
from .models import ArxivMetadata, CitationInfo, CitationLookup, InfluentialPaper
from .urls import extract_arxiv_id

logger = logging.getLogger("arxiv-vault")

ARXIV_QUERY_URL = "https://export.arxiv.org/api/query"
SEMANTIC_SCHOLAR_PAPER_URL = "https://api.semanticscholar.org/v1/paper/arXiv:{arxiv_id}"

DEFAULT_USER_AGENT = "ArxivVaultPlugin/1.0"

NAMESPACES = {"atom": "http://www.w3.org/2005/Atom"}

NO_TITLE = "제목 없음"
NO_DATE = "날짜 없음"
NO_ABSTRACT = "Abstract 없음"


def format_abstract(text: str) -> str:
    """
    Normalize abstract whitespace into render-ready paragraphs.

    Applying it twice gives the same result as applying it once.
    """
    text = text.strip()
    text = re.sub(r"\n+", "\n", text)
    text = re.sub(r"\s+", " ", text)
    return "\n\n".join(para.strip() for para in text.split("\n"))


def get_influential_papers(papers: Optional[list[dict[str, Any]]]) -> list[InfluentialPaper]:
    """
    Keep only papers flagged as influential, preserving order.

    Args:
        papers: Raw paper dicts from the Semantic Scholar v1 API, or None.

    Returns:
        List of InfluentialPaper objects.
    """
    if not papers:
        return []

    influential = []
    for paper in papers:
        if not paper.get("isInfluential"):
            continue

        authors = paper.get("authors") or []
        influential.append(
            InfluentialPaper(
                paper_id=paper.get("paperId"),
                title=paper.get("title"),
                url=paper.get("url"),
                venue=paper.get("venue"),
                year=paper.get("year"),
                authors=", ".join(author.get("name") or "" for author in authors),
                arxiv_id=paper.get("arxivId"),
                doi=paper.get("doi"),
                is_influential=True,
                citation_count=paper.get("citationCount"),
                intent=paper.get("intent") or [],
            )
        )
    return influential


def _element_text(entry: ET.Element, path: str) -> Optional[str]:
    """Text of the first matching child, or None when absent or empty."""
    elem = entry.find(path, NAMESPACES)
    if elem is None or not elem.text:
        return None
    return elem.text


def parse_arxiv_response(xml_text: str, arxiv_id: str = "") -> ArxivMetadata:
    """
    Parse an arXiv Atom feed into metadata for its first entry.

    Raises:
        ParseError: If the body is not well-formed XML.
        NotFoundError: If the feed has no entry element.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise ParseError(f"Malformed arXiv response: {e}") from e

    entry = root.find("atom:entry", NAMESPACES)
    if entry is None:
        raise NotFoundError(arxiv_id)

    title = (_element_text(entry, "atom:title") or "").strip()
    published = _element_text(entry, "atom:published")
    authors = [
        name.text
        for name in entry.findall("atom:author/atom:name", NAMESPACES)
        if name.text
    ]

    return ArxivMetadata(
        title=title or NO_TITLE,
        paper_link=_element_text(entry, "atom:id") or "",
        publish_date=published.split("T")[0] if published else NO_DATE,
        authors=", ".join(authors),
        abstract=format_abstract(_element_text(entry, "atom:summary") or NO_ABSTRACT),
    )


class ArxivClient:
    """
    Async client for the arXiv query API and the Semantic Scholar v1 API.

    The HTTP transport may be supplied by the host. When it is not,
    the client creates its own and closes it in ``close()``.
    """

    def __init__(
        self,
        http: Optional[httpx.AsyncClient] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: int = 60,
    ):
        """
        Initialize the client.

        Args:
            http: Optional host-supplied HTTP client.
            user_agent: Client identification sent to arXiv.
            timeout: Request timeout in seconds for an owned HTTP client.
        """
        self.user_agent = user_agent
        self.timeout = timeout
        self._client = http
        self._owns_client = http is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    async def fetch_arxiv_metadata(self, url: str) -> ArxivMetadata:
        """
        Fetch bibliographic metadata for the paper a URL points to.

        Args:
            url: arXiv URL or identifier.

        Returns:
            ArxivMetadata for the first feed entry.

        Raises:
            InvalidInputError: If no arXiv id can be extracted.
            UpstreamError: On a non-200 status or a transport failure.
            NotFoundError: If the feed has no entry.
            ParseError: If the feed is not well-formed XML.
        """
        arxiv_id = extract_arxiv_id(url)
        if arxiv_id is None:
            raise InvalidInputError(url)

        client = await self._get_client()
        try:
            response = await client.get(
                ARXIV_QUERY_URL,
                params={"id_list": arxiv_id},
                headers={"User-Agent": self.user_agent},
            )
        except httpx.HTTPError as e:
            raise UpstreamError(f"arXiv API request failed: {e}", url=ARXIV_QUERY_URL) from e

        if response.status_code != 200:
            raise UpstreamError(
                "arXiv API request failed",
                status_code=response.status_code,
                url=str(response.request.url),
            )

        metadata = parse_arxiv_response(response.text, arxiv_id=arxiv_id)

        logger.info(f"Fetched arXiv metadata for {arxiv_id}: {metadata.title}")
        return metadata

    async def lookup_citations(self, arxiv_id: str) -> CitationLookup:
        """
        Request citation data and report the outcome without raising.

        Args:
            arxiv_id: arXiv identifier, optionally versioned.

        Returns:
            CitationLookup carrying either ``info`` or ``error``.
        """
        client = await self._get_client()
        url = SEMANTIC_SCHOLAR_PAPER_URL.format(arxiv_id=arxiv_id)

        try:
            response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL, RuntimeError) as e:
            # RuntimeError: the host closed the transport
            return CitationLookup(arxiv_id=arxiv_id, error=f"request failed: {e}")

        if response.status_code != 200:
            return CitationLookup(
                arxiv_id=arxiv_id,
                error="non-success status",
                status_code=response.status_code,
            )

        try:
            data = response.json()
            info = CitationInfo(
                num_cited_by=data.get("numCitedBy") or 0,
                num_citing=data.get("numCiting") or 0,
                influential_citations=get_influential_papers(data.get("citations")),
                influential_references=get_influential_papers(data.get("references")),
            )
        except (ValueError, TypeError, AttributeError, ValidationError) as e:
            return CitationLookup(
                arxiv_id=arxiv_id,
                error=f"unexpected response body: {e}",
                status_code=response.status_code,
            )

        return CitationLookup(arxiv_id=arxiv_id, info=info, status_code=response.status_code)

    async def fetch_citation_info(self, arxiv_id: str) -> CitationInfo:
        """
        Fetch citation statistics, falling back to the zero value.

        Citation data is optional context, so every failure is logged
        and replaced by an empty CitationInfo.
        """
        lookup = await self.lookup_citations(arxiv_id)
        if not lookup.ok:
            if lookup.status_code is not None:
                logger.warning(
                    f"Citation info unavailable for {arxiv_id} "
                    f"(status {lookup.status_code}): {lookup.error}"
                )
            else:
                logger.warning(f"Citation info unavailable for {arxiv_id}: {lookup.error}")
            return CitationInfo()

        info = lookup.info
        logger.info(
            f"Found {info.num_cited_by} citations and {info.num_citing} references for {arxiv_id}"
        )
        return info

    async def close(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None
