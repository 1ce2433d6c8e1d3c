"""
arxiv-vault
===========

Import arXiv papers and PDF text into a markdown note vault.

This package provides:
- core: Pure Python metadata, citation and PDF services (no MCP dependencies)
- resources: Vault storage and markdown note writing
- plugin: Startup/shutdown lifecycle and commands for a host application
- tools: MCP tools exposing the plugin commands
"""

__version__ = "0.1.0"


def main():
    """Run the MCP server."""
    from .server import main as server_main

    server_main()


__all__ = ["main"]
