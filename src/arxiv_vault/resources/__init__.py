"""
Resources layer for vault storage.

Handles reading files from the vault and writing notes as
human-readable markdown.
"""

from .notes import NoteManager
from .vault import FileSystemVault, VaultStorage

__all__ = ["FileSystemVault", "NoteManager", "VaultStorage"]
