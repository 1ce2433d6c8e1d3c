"""
Tests for the MCP tool handlers.
"""

import json
from pathlib import Path

import pytest

from arxiv_vault.config import Settings
from arxiv_vault.plugin import Capabilities, startup
from arxiv_vault.tools import (
    fetch_arxiv_metadata_tool,
    get_text_from_pdf_tool,
    handle_fetch_arxiv_metadata,
    handle_get_text_from_pdf,
)

from conftest import FakeApi


def _payload(contents) -> dict:
    assert len(contents) == 1
    return json.loads(contents[0].text)


def test_tool_definitions():
    assert get_text_from_pdf_tool.name == "get_text_from_pdf"
    assert fetch_arxiv_metadata_tool.name == "fetch_arxiv_metadata"
    assert "url" in fetch_arxiv_metadata_tool.inputSchema["properties"]


class TestGetTextFromPdfTool:
    """Tests for the get_text_from_pdf tool."""

    @pytest.mark.asyncio
    async def test_extract(
        self,
        capabilities: Capabilities,
        settings: Settings,
        vault_path: Path,
        pdf_bytes: bytes,
    ):
        (vault_path / "paper.pdf").write_bytes(pdf_bytes)
        plugin = await startup(capabilities, settings)

        result = _payload(await handle_get_text_from_pdf(plugin, {"file_path": "paper.pdf"}))

        assert result["status"] == "created"
        assert result["note_path"] == "paper-extracted.md"

    @pytest.mark.asyncio
    async def test_missing_pdf(self, capabilities: Capabilities, settings: Settings):
        plugin = await startup(capabilities, settings)

        result = _payload(await handle_get_text_from_pdf(plugin, {"file_path": "missing.pdf"}))

        assert result["status"] == "error"
        assert result["file_path"] == "missing.pdf"

    @pytest.mark.asyncio
    async def test_invalid_pdf(self, capabilities: Capabilities, settings: Settings, vault_path: Path):
        (vault_path / "broken.pdf").write_bytes(b"garbage")
        plugin = await startup(capabilities, settings)

        result = _payload(await handle_get_text_from_pdf(plugin, {"file_path": "broken.pdf"}))

        assert result["status"] == "error"
        assert result["error_type"] == "PdfExtractionError"


class TestFetchArxivMetadataTool:
    """Tests for the fetch_arxiv_metadata tool."""

    @pytest.mark.asyncio
    async def test_fetch_with_url(self, capabilities: Capabilities, settings: Settings):
        plugin = await startup(capabilities, settings)

        result = _payload(
            await handle_fetch_arxiv_metadata(plugin, {"url": "https://arxiv.org/abs/2404.16260"})
        )

        assert result["arxiv_id"] == "2404.16260"
        assert result["title"] == "Neural Paper Notes: A Study"
        assert result["publish_date"] == "2024-04-24"
        assert result["num_cited_by"] == 3
        assert [p["title"] for p in result["influential_citations"]] == ["Influential Citation"]
        assert result["note_status"] == "created"

    @pytest.mark.asyncio
    async def test_falls_back_to_clipboard(self, capabilities: Capabilities, settings: Settings):
        plugin = await startup(capabilities, settings)

        result = _payload(await handle_fetch_arxiv_metadata(plugin, {}))

        assert result["arxiv_id"] == "2404.16260"

    @pytest.mark.asyncio
    async def test_no_url_and_no_clipboard(
        self,
        capabilities: Capabilities,
        settings: Settings,
    ):
        capabilities.clipboard = None
        plugin = await startup(capabilities, settings)

        result = _payload(await handle_fetch_arxiv_metadata(plugin, {}))

        assert result["status"] == "error"
        assert result["error_type"] == "InvalidInputError"

    @pytest.mark.asyncio
    async def test_error_payload_keeps_non_ascii(self, capabilities: Capabilities, settings: Settings):
        plugin = await startup(capabilities, settings)

        contents = await handle_fetch_arxiv_metadata(plugin, {"url": "논문 링크"})

        assert "논문 링크" in contents[0].text
        assert _payload(contents)["error_type"] == "InvalidInputError"

    @pytest.mark.asyncio
    async def test_upstream_error(
        self,
        capabilities: Capabilities,
        settings: Settings,
        fake_api: FakeApi,
    ):
        fake_api.feed_status = 502
        plugin = await startup(capabilities, settings)

        result = _payload(await handle_fetch_arxiv_metadata(plugin, {"url": "2404.16260"}))

        assert result["status"] == "error"
        assert result["error_type"] == "UpstreamError"
        assert result["details"]["status_code"] == 502
