"""
Vault storage.

The host application owns the vault; this module defines the narrow
interface the plugin needs and a directory-backed implementation.

Storage structure:
    {vault_root}/{vault-relative path}
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Protocol, runtime_checkable

import aiofiles

logger = logging.getLogger("arxiv-vault")


@runtime_checkable
class VaultStorage(Protocol):
    """File operations provided by the host vault."""

    async def exists(self, path: str) -> bool: ...

    async def read_binary(self, path: str) -> bytes: ...

    async def read_text(self, path: str) -> str: ...

    async def create(self, path: str, text: str) -> None: ...

    async def modify(self, path: str, text: str) -> None: ...


class FileSystemVault:
    """
    Vault backed by a local directory.

    Paths are vault-relative and use forward slashes.
    """

    def __init__(self, root: Path):
        """
        Initialize the vault.

        Args:
            root: Vault root directory. Created if missing.
        """
        self.root = Path(root).expanduser().resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, path: str) -> Path:
        """Map a vault-relative path to a filesystem path inside the root."""
        relative = PurePosixPath(path.replace("\\", "/").lstrip("/"))
        full_path = (self.root / relative).resolve()
        if full_path != self.root and self.root not in full_path.parents:
            raise ValueError(f"Path escapes the vault: {path}")
        return full_path

    async def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    async def read_binary(self, path: str) -> bytes:
        """Read a file's raw bytes. Raises FileNotFoundError if missing."""
        async with aiofiles.open(self._resolve(path), "rb") as f:
            return await f.read()

    async def read_text(self, path: str) -> str:
        async with aiofiles.open(self._resolve(path), "r", encoding="utf-8") as f:
            return await f.read()

    async def create(self, path: str, text: str) -> None:
        """
        Create a new text file.

        Raises:
            FileExistsError: If the file already exists.
        """
        full_path = self._resolve(path)
        if full_path.exists():
            raise FileExistsError(f"File already exists: {path}")
        full_path.parent.mkdir(parents=True, exist_ok=True)

        async with aiofiles.open(full_path, "w", encoding="utf-8") as f:
            await f.write(text)
        logger.info(f"Created {full_path}")

    async def modify(self, path: str, text: str) -> None:
        """
        Overwrite an existing text file.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        full_path = self._resolve(path)
        if not full_path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        async with aiofiles.open(full_path, "w", encoding="utf-8") as f:
            await f.write(text)
        logger.info(f"Updated {full_path}")
