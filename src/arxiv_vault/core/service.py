"""
Arxiv metadata service - main business logic.

Combines the metadata and citation pipelines and writes the result
into a vault note. It has NO MCP dependencies.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional, Protocol

from .client import ArxivClient
from .exceptions import ArxivVaultError, InvalidInputError
from .models import ImportedPaper
from .urls import extract_arxiv_id

if TYPE_CHECKING:
    from ..resources.notes import NoteManager

logger = logging.getLogger("arxiv-vault")


class Clipboard(Protocol):
    """Clipboard access provided by the host."""

    async def read_text(self) -> str: ...


Notifier = Callable[[str], None]


class ArxivMetadataService:
    """
    Imports arXiv papers into the vault.

    Example usage:
        service = ArxivMetadataService(client, notes)
        paper = await service.import_paper("https://arxiv.org/abs/2404.16260")
        print(paper.metadata.title, paper.citations.num_cited_by)
    """

    def __init__(
        self,
        client: ArxivClient,
        notes: NoteManager,
        clipboard: Optional[Clipboard] = None,
        notify: Optional[Notifier] = None,
    ):
        """
        Initialize the service.

        Args:
            client: arXiv / Semantic Scholar client.
            notes: Note manager writing into the vault.
            clipboard: Optional host clipboard, source of URLs for
                       fetch_metadata_from_clipboard.
            notify: Optional callback showing a notice to the user.
        """
        self.client = client
        self.notes = notes
        self.clipboard = clipboard
        self.notify = notify or (lambda message: None)

    async def import_paper(self, url: str) -> ImportedPaper:
        """
        Fetch metadata and citations for a paper and write its note.

        Citation data is best effort: when unavailable the note shows
        zero counts and the import still succeeds.

        Args:
            url: arXiv URL or identifier.

        Returns:
            ImportedPaper with metadata, citations and the written note.

        Raises:
            InvalidInputError, UpstreamError, NotFoundError, ParseError:
                From the metadata fetch.
        """
        arxiv_id = extract_arxiv_id(url)
        if arxiv_id is None:
            raise InvalidInputError(url)

        metadata = await self.client.fetch_arxiv_metadata(url)
        citations = await self.client.fetch_citation_info(arxiv_id)
        note = await self.notes.store_metadata_note(arxiv_id, metadata, citations)

        return ImportedPaper(
            arxiv_id=arxiv_id,
            metadata=metadata,
            citations=citations,
            note=note,
        )

    async def fetch_metadata_from_clipboard(self) -> Optional[ImportedPaper]:
        """
        Import the paper whose URL is on the clipboard.

        Errors are shown as notices and never raised.

        Returns:
            ImportedPaper, or None when the import failed.
        """
        if self.clipboard is None:
            self.notify("클립보드를 사용할 수 없습니다.")
            return None

        url = ""
        try:
            url = (await self.clipboard.read_text() or "").strip()
            if not url:
                self.notify("클립보드가 비어 있습니다.")
                return None
            paper = await self.import_paper(url)
        except InvalidInputError:
            self.notify("유효한 Arxiv URL이 아닙니다.")
            return None
        except ArxivVaultError as e:
            logger.error(f"Failed to import {url}: {e}")
            self.notify(f"Arxiv 메타데이터를 가져오지 못했습니다: {e}")
            return None
        except Exception as e:
            logger.error(f"Unexpected error importing {url or 'clipboard URL'}: {e}")
            self.notify(f"Arxiv 메타데이터를 가져오지 못했습니다: {e}")
            return None

        self.notify(f"메타데이터를 저장했습니다: {paper.note.path}")
        return paper
