"""
MCP Tool: get_text_from_pdf

Extract the text of a PDF stored in the vault into a markdown note.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import mcp.types as types

from ..core import PdfExtractionError

if TYPE_CHECKING:
    from ..plugin import Plugin

logger = logging.getLogger("arxiv-vault")


# Tool definition
get_text_from_pdf_tool = types.Tool(
    name="get_text_from_pdf",
    description="""Extract plain text from a PDF stored in the vault.

The text is written to a markdown note next to the PDF:
{pdf folder}/{pdf name}-extracted.md

An existing note with that name is overwritten.""",
    inputSchema={
        "type": "object",
        "properties": {
            "file_path": {
                "type": "string",
                "description": "Vault-relative PDF path (default: the configured PDF_PATH)",
            },
        },
    },
)


async def handle_get_text_from_pdf(
    plugin: Plugin,
    arguments: dict[str, Any],
) -> list[types.TextContent]:
    """Handle the get_text_from_pdf tool call."""
    file_path = arguments.get("file_path") or plugin.settings.PDF_PATH

    try:
        note = await plugin.extract_pdf_to_note(file_path)

        result = {
            "file_path": file_path,
            "status": "created" if note.created else "updated",
            "note_path": note.path,
        }
        return [types.TextContent(type="text", text=json.dumps(result, indent=2, ensure_ascii=False))]

    except FileNotFoundError as e:
        logger.warning(f"PDF not found: {e}")
        return [
            types.TextContent(
                type="text",
                text=json.dumps({
                    "file_path": file_path,
                    "status": "error",
                    "error": "PDF file not found in vault",
                }, indent=2, ensure_ascii=False),
            )
        ]
    except PdfExtractionError as e:
        logger.error(f"PDF extraction error: {e}")
        return [
            types.TextContent(
                type="text",
                text=json.dumps({
                    "file_path": file_path,
                    "status": "error",
                    **e.to_dict(),
                }, indent=2, ensure_ascii=False),
            )
        ]
