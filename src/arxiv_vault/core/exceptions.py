"""
Exception hierarchy for arxiv-vault.

The metadata pipeline raises these to the caller. The citation
pipeline never does: its failures are mapped to an empty result.
"""

from __future__ import annotations

from typing import Any, Optional


class ArxivVaultError(Exception):
    """
    Base exception for all arxiv-vault errors.

    Args:
        message: Human-readable error message.
        details: Additional context for logging and tool responses.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dict for JSON tool responses."""
        return {
            "error": self.message,
            "error_type": self.__class__.__name__,
            "details": self.details,
        }


class InvalidInputError(ArxivVaultError):
    """The given URL or identifier does not contain an arXiv id."""

    def __init__(self, value: str):
        super().__init__(
            f"Not a valid arXiv URL or identifier: {value!r}",
            details={"value": value},
        )
        self.value = value


class UpstreamError(ArxivVaultError):
    """
    The arXiv metadata endpoint could not be used.

    ``status_code`` is the HTTP status for a non-200 response and
    ``None`` when the request never got a response.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ):
        details: dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if url is not None:
            details["url"] = url
        super().__init__(message, details=details)
        self.status_code = status_code
        self.url = url

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (status {self.status_code})"
        return self.message


class NotFoundError(ArxivVaultError):
    """The query succeeded but the feed holds no entry for the id."""

    def __init__(self, arxiv_id: str):
        super().__init__(
            f"No arXiv paper found for id {arxiv_id}",
            details={"arxiv_id": arxiv_id},
        )
        self.arxiv_id = arxiv_id


class ParseError(ArxivVaultError):
    """A response body does not have the expected shape."""


class PdfExtractionError(ArxivVaultError):
    """The PDF library failed to extract text from the given bytes."""
