"""
arXiv URL and identifier helpers.

Accepted inputs:
- Abstract page: 'https://arxiv.org/abs/2404.16260'
- PDF link: 'https://arxiv.org/pdf/2404.16260v1.pdf'
- Prefixed id: 'arXiv:2404.16260'
- Bare or versioned id: '2404.16260', '2404.16260v2'
- Old-style id: 'hep-th/9901001', 'math.GT/0309136v1'
"""

from __future__ import annotations

import re
from typing import Optional

from .exceptions import InvalidInputError

ABS_URL = "https://arxiv.org/abs/{arxiv_id}"

# YYMM.NNNN (before 2015) or YYMM.NNNNN
_NEW_STYLE_ID = re.compile(r"(?<![\d.])(?P<id>\d{4}\.\d{4,5})(?P<version>v\d+)?(?![\d])")

# archive(.SUBJECT)/YYMMNNN
_OLD_STYLE_ID = re.compile(
    r"(?<![A-Za-z\-])(?P<id>[a-z][a-z\-]*(?:\.[A-Z]{2})?/\d{7})(?P<version>v\d+)?(?!\d)"
)


def extract_arxiv_id(value: str, keep_version: bool = False) -> Optional[str]:
    """
    Extract the arXiv identifier from a URL or id string.

    Args:
        value: Any accepted input form.
        keep_version: Keep a trailing 'vN' marker when present.

    Returns:
        The identifier, or None when no identifier pattern matches.
    """
    if not value:
        return None

    text = value.strip()
    for pattern in (_NEW_STYLE_ID, _OLD_STYLE_ID):
        match = pattern.search(text)
        if match:
            arxiv_id = match.group("id")
            if keep_version and match.group("version"):
                arxiv_id += match.group("version")
            return arxiv_id
    return None


def normalize_arxiv_url(value: str, keep_version: bool = False) -> str:
    """
    Canonicalize any accepted input into an abstract page URL.

    Raises:
        InvalidInputError: If no identifier can be found.
    """
    arxiv_id = extract_arxiv_id(value, keep_version=keep_version)
    if arxiv_id is None:
        raise InvalidInputError(value)
    return ABS_URL.format(arxiv_id=arxiv_id)
