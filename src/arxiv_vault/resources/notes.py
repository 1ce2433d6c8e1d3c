"""
Note writing.

Renders fetched data as human-readable markdown and writes it into
the vault, creating the note or overwriting an existing one.

Vault layout:
    {notes_folder}/{arxiv_id}.md             # Metadata and citations
    {pdf folder}/{pdf stem}-extracted.md     # Text extracted from a PDF
"""

from __future__ import annotations

import logging
from pathlib import PurePosixPath

from ..core.models import ArxivMetadata, CitationInfo, InfluentialPaper, NoteWriteResult
from .vault import VaultStorage

logger = logging.getLogger("arxiv-vault")


class NoteManager:
    """
    Writes markdown notes into a vault.

    Concurrent writes to the same note are not coordinated; the last
    writer wins.
    """

    def __init__(
        self,
        storage: VaultStorage,
        notes_folder: str = "",
        extracted_suffix: str = "-extracted.md",
    ):
        """
        Initialize the note manager.

        Args:
            storage: Host vault storage.
            notes_folder: Vault folder for metadata notes ('' is the root).
            extracted_suffix: Suffix replacing '.pdf' for extracted text notes.
        """
        self.storage = storage
        self.notes_folder = notes_folder.strip("/")
        self.extracted_suffix = extracted_suffix

    def get_metadata_note_path(self, arxiv_id: str) -> str:
        """Vault path of the metadata note for a paper."""
        # Sanitize old-style ids such as 'hep-th/9901001'
        safe_id = arxiv_id.replace("/", "_").replace(":", "_")
        if self.notes_folder:
            return f"{self.notes_folder}/{safe_id}.md"
        return f"{safe_id}.md"

    def get_extracted_note_path(self, pdf_path: str) -> str:
        """Vault path of the extracted text note that sits next to a PDF."""
        pdf = PurePosixPath(pdf_path)
        return str(pdf.with_name(pdf.stem + self.extracted_suffix))

    async def write_note(self, path: str, content: str) -> NoteWriteResult:
        """Create the note, or overwrite it when it already exists."""
        if await self.storage.exists(path):
            await self.storage.modify(path, content)
            return NoteWriteResult(path=path, created=False)

        await self.storage.create(path, content)
        return NoteWriteResult(path=path, created=True)

    async def store_extracted_text(self, pdf_path: str, text: str) -> NoteWriteResult:
        """
        Store text extracted from a PDF.

        Args:
            pdf_path: Vault path of the source PDF.
            text: Extracted text.

        Returns:
            NoteWriteResult for the written note.
        """
        result = await self.write_note(self.get_extracted_note_path(pdf_path), text)
        logger.info(f"Stored extracted text of {pdf_path} at {result.path}")
        return result

    async def store_metadata_note(
        self,
        arxiv_id: str,
        metadata: ArxivMetadata,
        citations: CitationInfo,
    ) -> NoteWriteResult:
        """
        Store paper metadata and citation statistics as markdown.

        Args:
            arxiv_id: arXiv identifier used for the note name.
            metadata: Fetched bibliographic metadata.
            citations: Fetched citation statistics (may be the zero value).

        Returns:
            NoteWriteResult for the written note.
        """
        content = self._format_metadata_markdown(arxiv_id, metadata, citations)
        result = await self.write_note(self.get_metadata_note_path(arxiv_id), content)
        logger.info(f"Stored metadata note for {arxiv_id} at {result.path}")
        return result

    def _format_metadata_markdown(
        self,
        arxiv_id: str,
        metadata: ArxivMetadata,
        citations: CitationInfo,
    ) -> str:
        """Format metadata and citations as markdown."""
        lines = [
            f"# {metadata.title}",
            "",
            f"**arXiv:** [{arxiv_id}]({metadata.paper_link or f'https://arxiv.org/abs/{arxiv_id}'})",
            f"**Authors:** {metadata.authors or 'Unknown'}",
            f"**Published:** {metadata.publish_date}",
            "",
            "## Abstract",
            "",
            metadata.abstract,
            "",
            "## Citations",
            "",
            f"- **Cited by:** {citations.num_cited_by}",
            f"- **References:** {citations.num_citing}",
            "",
        ]

        lines.extend(self._format_paper_list("Influential Citations", citations.influential_citations))
        lines.extend(self._format_paper_list("Influential References", citations.influential_references))

        return "\n".join(lines).rstrip() + "\n"

    def _format_paper_list(self, heading: str, papers: list[InfluentialPaper]) -> list[str]:
        """Format a list of influential papers as a markdown section."""
        if not papers:
            return []

        lines = [f"### {heading} ({len(papers)})", ""]
        for paper in papers:
            title = paper.title or "Untitled"
            entry = f"- [{title}]({paper.url})" if paper.url else f"- {title}"

            details = [d for d in (paper.venue, str(paper.year) if paper.year else None) if d]
            if paper.authors:
                entry += f" - {paper.authors}"
            if details:
                entry += f" ({', '.join(details)})"
            if paper.citation_count is not None:
                entry += f" - {paper.citation_count} citations"
            lines.append(entry)

            if paper.intent:
                lines.append(f"  - Intent: {', '.join(paper.intent)}")

        lines.append("")
        return lines
