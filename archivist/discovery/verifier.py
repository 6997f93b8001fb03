"""Authorship and language verification for candidate pages.

Both checks are regex heuristics over raw HTML. They are gates that reduce
noise from search results, not a language-ID or identity system: the byline
match is a case-insensitive substring match, and the language fallback only
counts common function words.
"""

import re
from typing import Callable, Dict, Optional, Tuple

from trafilatura import html2txt
from trafilatura.metadata import extract_metadata

from .models import PageResult, Verification
from .page_fetcher import PageFetcher

STOPWORD_SAMPLE_CHARS = 4000
STOPWORD_THRESHOLD = 3

STOPWORDS: Dict[str, Tuple[str, ...]] = {
    "en": ("the", "and", "to", "of", "a", "in", "that", "is", "for", "on"),
    "es": ("el", "la", "de", "que", "y", "en", "los", "se", "del", "las"),
    "fr": ("le", "la", "de", "et", "les", "des", "est", "que", "une", "pour"),
    "de": ("der", "die", "und", "das", "ist", "nicht", "mit", "den", "ein", "zu"),
    "pt": ("o", "a", "de", "que", "e", "do", "da", "em", "um", "para"),
}

_HTML_LANG_RE = re.compile(r"<html[^>]*\blang=[\"']?([a-zA-Z\-_.]+)[\"']?[^>]*>", re.IGNORECASE)
_OG_LOCALE_RE = re.compile(
    r"<meta[^>]+property=[\"']og:locale[\"'][^>]+content=[\"']([^\"']+)[\"']", re.IGNORECASE
)
_CANONICAL_RE = re.compile(
    r"<link[^>]+rel=[\"']canonical[\"'][^>]*href=[\"']([^\"']+)[\"']", re.IGNORECASE
)
_CANONICAL_HREF_FIRST_RE = re.compile(
    r"<link[^>]+href=[\"']([^\"']+)[\"'][^>]*rel=[\"']canonical[\"']", re.IGNORECASE
)
_WS_RE = re.compile(r"\s+")


def _language_code(value: str) -> str:
    return re.split(r"[_-]", value.lower())[0]


def has_author(html: str, author_name: str) -> bool:
    """True if the page carries a byline, author meta tag or JSON-LD author."""
    if not html or not author_name:
        return False
    name = re.escape(author_name)

    byline_re = re.compile(rf"\bby\s+{name}\b", re.IGNORECASE)
    meta_re = re.compile(
        rf"<meta[^>]+(?:name|property)=[\"'](?:author|article:author)[\"'][^>]+"
        rf"content=[\"'][^\"']*{name}[^\"']*[\"']",
        re.IGNORECASE,
    )
    meta_content_first_re = re.compile(
        rf"<meta[^>]+content=[\"'][^\"']*{name}[^\"']*[\"'][^>]+"
        rf"(?:name|property)=[\"'](?:author|article:author)[\"']",
        re.IGNORECASE,
    )
    json_ld_re = re.compile(
        rf"\"author\"\s*:\s*\[?\s*(?:\{{[^}}]*?\"name\"\s*:\s*\"[^\"]*{name}[^\"]*\"[^}}]*\}}"
        rf"|\"[^\"]*{name}[^\"]*\")",
        re.IGNORECASE,
    )

    return any(
        pattern.search(html)
        for pattern in (byline_re, meta_re, meta_content_first_re, json_ld_re)
    )


def visible_text(html: str) -> str:
    """Whitespace-collapsed, lower-cased page text without markup."""
    text = html2txt(html) or ""
    return _WS_RE.sub(" ", text).lower()


def detect_language(html: str, target: str = "en") -> Optional[str]:
    """Best-effort page language.

    Prefers ``<html lang>``, then ``og:locale``. Otherwise counts distinct
    stopwords of the target language in the visible text and returns the
    target code on at least ``STOPWORD_THRESHOLD`` hits, else ``"other"``.
    Returns None for an empty document.
    """
    if not html:
        return None

    match = _HTML_LANG_RE.search(html)
    if match:
        return _language_code(match.group(1))

    match = _OG_LOCALE_RE.search(html)
    if match:
        return _language_code(match.group(1))

    stopwords = STOPWORDS.get(target)
    if not stopwords:
        return "other"

    sample = f" {visible_text(html)[:STOPWORD_SAMPLE_CHARS]} "
    hits = sum(1 for word in stopwords if f" {word} " in sample)
    return target if hits >= STOPWORD_THRESHOLD else "other"


def extract_canonical_href(html: str) -> Optional[str]:
    """Value of ``<link rel="canonical">`` if present."""
    if not html:
        return None
    match = _CANONICAL_RE.search(html) or _CANONICAL_HREF_FIRST_RE.search(html)
    return match.group(1).strip() if match else None


def extract_published(html: str) -> Optional[str]:
    """Publication date from page metadata."""
    if not html:
        return None
    metadata = extract_metadata(html)
    if metadata and metadata.date:
        return str(metadata.date)
    return None


class Verifier:
    """Fetch a candidate page and collect authorship and language signals.

    Args:
        author_name: Name expected in the byline.
        fetcher: Page fetcher used for network access.
        target_language: Language code used by the stopword fallback.
        sleep: Called with ``delay`` after each fetch.
        delay: Courtesy pause between fetches in seconds.
    """

    def __init__(
        self,
        author_name: str,
        fetcher: PageFetcher,
        target_language: str = "en",
        sleep: Optional[Callable[[float], None]] = None,
        delay: float = 0.0,
    ) -> None:
        self.author_name = author_name
        self.fetcher = fetcher
        self.target_language = target_language or "en"
        self.sleep = sleep
        self.delay = delay

    def verify(self, url: str) -> Verification:
        """Fetch ``url`` and evaluate it. Fetch failures yield ``fetched=False``."""
        page = self.fetcher.fetch(url)
        if self.sleep and self.delay:
            self.sleep(self.delay)
        return self.evaluate(page)

    def evaluate(self, page: PageResult) -> Verification:
        """Evaluate an already fetched page."""
        if not page.success:
            return Verification(url=page.url, fetched=False, error=page.error)

        html = page.html
        return Verification(
            url=page.url,
            fetched=True,
            author_ok=has_author(html, self.author_name),
            lang=detect_language(html, self.target_language),
            canonical_href=extract_canonical_href(html),
            published=extract_published(html),
        )
