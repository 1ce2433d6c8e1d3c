"""
MCP Tool: fetch_arxiv_metadata

Fetch arXiv metadata and Semantic Scholar citation statistics for a
paper and write them into a vault note.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import mcp.types as types

from ..core import ArxivVaultError, InvalidInputError

if TYPE_CHECKING:
    from ..plugin import Plugin

logger = logging.getLogger("arxiv-vault")


# Tool definition
fetch_arxiv_metadata_tool = types.Tool(
    name="fetch_arxiv_metadata",
    description="""Fetch metadata and citation statistics for an arXiv paper.

Returns:
- Title, authors, publication date and abstract (from arXiv)
- Citation and reference counts (from Semantic Scholar)
- Influential citing and referenced papers

Citation data is best effort: if Semantic Scholar is unavailable
the counts are zero and the metadata is still returned.

The result is saved as a markdown note at:
{vault}/{notes folder}/{arxiv_id}.md

Accepts abstract links, PDF links, and bare or versioned ids.
If no URL is given, the host clipboard is used.""",
    inputSchema={
        "type": "object",
        "properties": {
            "url": {
                "type": "string",
                "description": "arXiv URL or id (e.g., 'https://arxiv.org/abs/2404.16260')",
            },
        },
    },
)


async def handle_fetch_arxiv_metadata(
    plugin: Plugin,
    arguments: dict[str, Any],
) -> list[types.TextContent]:
    """Handle the fetch_arxiv_metadata tool call."""
    url = arguments.get("url")

    try:
        if not url:
            clipboard = plugin.capabilities.clipboard
            if clipboard is None:
                raise InvalidInputError("")
            url = (await clipboard.read_text()).strip()

        paper = await plugin.arxiv_metadata_service.import_paper(url)
        citations = paper.citations

        result = {
            "arxiv_id": paper.arxiv_id,
            "note_path": paper.note.path,
            "note_status": "created" if paper.note.created else "updated",
            **paper.metadata.model_dump(),
            "num_cited_by": citations.num_cited_by,
            "num_citing": citations.num_citing,
            "influential_citations": [
                {"title": p.title, "year": p.year, "authors": p.authors}
                for p in citations.influential_citations
            ],
            "influential_references": [
                {"title": p.title, "year": p.year, "authors": p.authors}
                for p in citations.influential_references
            ],
        }
        return [types.TextContent(type="text", text=json.dumps(result, indent=2, ensure_ascii=False))]

    except ArxivVaultError as e:
        logger.error(f"Metadata fetch error: {e}")
        return [
            types.TextContent(
                type="text",
                text=json.dumps({"url": url, "status": "error", **e.to_dict()}, indent=2, ensure_ascii=False),
            )
        ]
