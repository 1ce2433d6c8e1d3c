"""
Plugin lifecycle and commands.

The host calls ``startup`` with a bundle of the capabilities it
provides and ``shutdown`` when the plugin is disabled. Commands are
registered on the returned Plugin and invoked by id.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

import httpx
from pydantic import ValidationError

from .config import PluginSettings, Settings
from .core import ArxivClient, ArxivMetadataService, NoteWriteResult, PDFExtractor, PdfExtractionError
from .core.service import Clipboard, Notifier
from .resources import NoteManager, VaultStorage

logger = logging.getLogger("arxiv-vault")

# Vault-relative location of the persisted PluginSettings
SETTINGS_PATH = ".arxiv-vault/data.json"


@dataclass
class Capabilities:
    """
    Everything the host provides to the plugin.

    Attributes:
        storage: Vault file access.
        notifier: Shows a short notice to the user.
        http: HTTP transport. The plugin creates its own when None.
        clipboard: Clipboard access, if the host has one.
    """

    storage: VaultStorage
    notifier: Notifier
    http: Optional[httpx.AsyncClient] = None
    clipboard: Optional[Clipboard] = None


@dataclass
class Command:
    """A user-invokable command."""

    id: str
    name: str
    callback: Callable[[], Awaitable[Any]]


class Plugin:
    """
    The running plugin.

    Holds the PDF extractor and the arXiv metadata service, and the
    commands wired to them. Command callbacks never raise: failures
    are reported to the user as notices.
    """

    def __init__(self, capabilities: Capabilities, settings: Settings):
        self.capabilities = capabilities
        self.settings = settings
        self.plugin_settings = PluginSettings()
        self.commands: dict[str, Command] = {}

        self.pdf_extractor = PDFExtractor(as_markdown=settings.PDF_AS_MARKDOWN)
        self.client = ArxivClient(
            http=capabilities.http,
            user_agent=settings.USER_AGENT,
            timeout=settings.REQUEST_TIMEOUT,
        )
        self.notes = NoteManager(
            capabilities.storage,
            notes_folder=settings.NOTES_FOLDER,
            extracted_suffix=settings.EXTRACTED_SUFFIX,
        )
        self.arxiv_metadata_service = ArxivMetadataService(
            self.client,
            self.notes,
            clipboard=capabilities.clipboard,
            notify=capabilities.notifier,
        )

    def notify(self, message: str) -> None:
        self.capabilities.notifier(message)

    # ==================== Commands ====================

    def add_command(
        self,
        command_id: str,
        name: str,
        callback: Callable[[], Awaitable[Any]],
    ) -> Command:
        """Register a command under a unique id."""
        if command_id in self.commands:
            raise ValueError(f"Command already registered: {command_id}")
        command = Command(id=command_id, name=name, callback=callback)
        self.commands[command_id] = command
        return command

    async def run_command(self, command_id: str) -> Any:
        """
        Run a registered command.

        Raises:
            KeyError: If no command has this id.
        """
        command = self.commands.get(command_id)
        if command is None:
            raise KeyError(f"Unknown command: {command_id}")
        logger.debug(f"Running command {command_id}")
        return await command.callback()

    # ==================== Settings ====================

    async def load_settings(self) -> PluginSettings:
        """Load persisted settings, keeping defaults for anything missing."""
        storage = self.capabilities.storage
        if await storage.exists(SETTINGS_PATH):
            try:
                raw = await storage.read_text(SETTINGS_PATH)
                self.plugin_settings = PluginSettings.model_validate_json(raw)
            except (ValidationError, UnicodeDecodeError) as e:
                logger.warning(f"Ignoring invalid plugin settings: {e}")
                self.plugin_settings = PluginSettings()
        return self.plugin_settings

    async def save_settings(self) -> None:
        await self.notes.write_note(SETTINGS_PATH, self.plugin_settings.model_dump_json(indent=2))

    # ==================== PDF ====================

    async def extract_pdf_to_note(self, file_path: Optional[str] = None) -> NoteWriteResult:
        """
        Extract text from a vault PDF into a sibling markdown note.

        Args:
            file_path: Vault path of the PDF. Defaults to settings.PDF_PATH.

        Returns:
            NoteWriteResult for the extracted text note.

        Raises:
            FileNotFoundError: If the PDF is not in the vault.
            PdfExtractionError: If text extraction fails.
        """
        path = file_path or self.settings.PDF_PATH
        storage = self.capabilities.storage

        if not await storage.exists(path):
            raise FileNotFoundError(f"PDF not found in vault: {path}")

        data = await storage.read_binary(path)
        text = self.pdf_extractor.extract_text_from_pdf(data)
        return await self.notes.store_extracted_text(path, text)

    async def get_text_from_pdf(self) -> Optional[NoteWriteResult]:
        """Command callback for 'get-text-from-pdf'."""
        try:
            result = await self.extract_pdf_to_note()
        except FileNotFoundError:
            self.notify("PDF 파일을 찾을 수 없습니다.")
            return None
        except PdfExtractionError as e:
            logger.error(f"PDF processing failed: {e}")
            self.notify("PDF 처리 중 오류가 발생했습니다.")
            return None
        except Exception as e:
            logger.error(f"Unexpected PDF processing error: {e}")
            self.notify("PDF 처리 중 오류가 발생했습니다.")
            return None

        if result.created:
            self.notify("새 파일이 생성되었습니다.")
        else:
            self.notify("기존 파일이 업데이트되었습니다.")
        return result


async def startup(capabilities: Capabilities, settings: Optional[Settings] = None) -> Plugin:
    """
    Start the plugin: load settings and register commands.

    Args:
        capabilities: Host-provided capabilities.
        settings: Optional settings instance.

    Returns:
        The running Plugin.
    """
    plugin = Plugin(capabilities, settings or Settings())
    await plugin.load_settings()

    plugin.add_command(
        "get-text-from-pdf",
        "Get Text From PDF",
        plugin.get_text_from_pdf,
    )
    plugin.add_command(
        "fetch-arxiv-metadata",
        "Arxiv 메타데이터 가져오기",
        plugin.arxiv_metadata_service.fetch_metadata_from_clipboard,
    )

    logger.info(f"Started {plugin.settings.APP_NAME} with {len(plugin.commands)} commands")
    return plugin


async def shutdown(plugin: Plugin) -> None:
    """Stop the plugin and release its resources."""
    await plugin.client.close()
    plugin.commands.clear()
    logger.info(f"Stopped {plugin.settings.APP_NAME}")
