"""
arxiv-vault MCP Server
======================

This module exposes the plugin commands as MCP tools over stdio,
backed by a vault directory on the local filesystem.
"""

import logging
import sys
from typing import Any, Dict, List, Optional

import httpx
import mcp.types as types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server

from .config import Settings
from .plugin import Capabilities, Plugin, shutdown, startup
from .resources import FileSystemVault
from .tools import (
    fetch_arxiv_metadata_tool,
    get_text_from_pdf_tool,
    handle_fetch_arxiv_metadata,
    handle_get_text_from_pdf,
)

# Initialize settings and server
settings = Settings()

# Configure logging to stderr (stdout is reserved for MCP JSON-RPC)
logging.basicConfig(
    level=logging.WARNING,
    format="%(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("arxiv-vault")

# Create MCP server
server = Server(settings.APP_NAME)

# Set by _async_main for the lifetime of the server
_plugin: Optional[Plugin] = None


def _notify(message: str) -> None:
    """Notices have no UI over stdio; they go to the log."""
    logger.warning(f"Notice: {message}")


@server.list_tools()
async def list_tools() -> List[types.Tool]:
    """List available plugin tools."""
    return [
        get_text_from_pdf_tool,
        fetch_arxiv_metadata_tool,
    ]


@server.call_tool()
async def call_tool(
    name: str,
    arguments: Dict[str, Any],
) -> List[types.TextContent]:
    """Handle tool calls for plugin commands."""
    logger.debug(f"Calling tool {name} with arguments {arguments}")

    try:
        if _plugin is None:
            raise RuntimeError("Plugin is not started")

        if name == "get_text_from_pdf":
            return await handle_get_text_from_pdf(_plugin, arguments or {})
        elif name == "fetch_arxiv_metadata":
            return await handle_fetch_arxiv_metadata(_plugin, arguments or {})
        else:
            return [
                types.TextContent(
                    type="text",
                    text=f"Error: Unknown tool '{name}'",
                )
            ]
    except Exception as e:
        logger.error(f"Tool error: {str(e)}")
        return [
            types.TextContent(
                type="text",
                text=f"Error: {str(e)}",
            )
        ]


async def _async_main():
    """Async entry point for the MCP server."""
    global _plugin

    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Vault path: {settings.VAULT_PATH}")

    async with httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT) as http:
        capabilities = Capabilities(
            storage=FileSystemVault(settings.VAULT_PATH),
            notifier=_notify,
            http=http,
        )
        _plugin = await startup(capabilities, settings)

        try:
            async with stdio_server() as streams:
                await server.run(
                    streams[0],
                    streams[1],
                    InitializationOptions(
                        server_name=settings.APP_NAME,
                        server_version=settings.APP_VERSION,
                        capabilities=server.get_capabilities(
                            notification_options=NotificationOptions(),
                            experimental_capabilities={},
                        ),
                    ),
                )
        finally:
            await shutdown(_plugin)
            _plugin = None


def main():
    """Run the MCP server (synchronous entry point)."""
    import asyncio
    asyncio.run(_async_main())
