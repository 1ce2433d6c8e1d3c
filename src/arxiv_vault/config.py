"""
Configuration for arxiv-vault.

Uses Pydantic Settings for environment variable support.
All settings can be overridden via environment variables with
the ARXIV_VAULT_ prefix.
"""

from pathlib import Path

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are prefixed with ARXIV_VAULT_.
    Example: ARXIV_VAULT_VAULT_PATH=~/Notes

    Storage:
        Notes are written as markdown files inside the vault:
        {VAULT_PATH}/{NOTES_FOLDER}/{arxiv_id}.md
    """

    model_config = SettingsConfigDict(
        env_prefix="ARXIV_VAULT_",
        extra="ignore",
    )

    # Application info
    APP_NAME: str = "arxiv-vault"
    APP_VERSION: str = "0.1.0"

    # Vault configuration
    VAULT_PATH: Path = Path.home() / "ArxivVault"
    NOTES_FOLDER: str = ""  # Vault root

    # HTTP
    USER_AGENT: str = "ArxivVaultPlugin/1.0"
    REQUEST_TIMEOUT: int = 60  # Seconds

    # PDF extraction
    PDF_PATH: str = "2404.16260v1.pdf"  # Vault-relative
    EXTRACTED_SUFFIX: str = "-extracted.md"
    PDF_AS_MARKDOWN: bool = False

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Ensure the vault exists
        self.VAULT_PATH = self.VAULT_PATH.expanduser()
        self.VAULT_PATH.mkdir(parents=True, exist_ok=True)


class PluginSettings(BaseModel):
    """User-editable settings persisted inside the vault."""

    my_setting: str = "default"
