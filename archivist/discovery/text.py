"""Text cleanup for search results."""

import re
from typing import Optional

_PLATFORM_SUFFIXES = (
    re.compile(r" - Medium$", re.IGNORECASE),
    re.compile(r" \| Newsweek$", re.IGNORECASE),
    re.compile(r" - Big Think$", re.IGNORECASE),
)
_WS_RE = re.compile(r"\s+")


def collapse_ws(value: Optional[str]) -> str:
    return _WS_RE.sub(" ", value or "").strip()


def clean_title(title: Optional[str], author_name: Optional[str] = None) -> str:
    """Strip publisher suffixes and trailing bylines from a search title."""
    cleaned = collapse_ws(title)
    for pattern in _PLATFORM_SUFFIXES:
        cleaned = pattern.sub("", cleaned)
    if author_name:
        cleaned = re.sub(rf" by {re.escape(author_name)}.*$", "", cleaned, flags=re.IGNORECASE)
    return cleaned.strip()
