"""Tests for page fetching and authorship/language verification."""

from __future__ import annotations

import httpx
import pytest

from archivist.discovery import PageFetcher, PageResult, Verifier, detect_language, has_author
from archivist.discovery.verifier import extract_canonical_href
from archivist.models import to_iso_date

AUTHOR = "Daniel Lehewych"


class TestHasAuthor:
    """Tests for has_author."""

    @pytest.mark.parametrize(
        "html",
        [
            "<p>By Daniel Lehewych</p>",
            "<p>by   daniel lehewych, staff</p>",
            '<meta name="author" content="Daniel Lehewych">',
            '<meta property="article:author" content="Written by Daniel Lehewych">',
            '<meta content="Daniel Lehewych" name="author">',
            '<script type="application/ld+json">{"author": {"@type": "Person", "name": "Daniel Lehewych"}}</script>',
            '<script type="application/ld+json">{"author": [{"name": "Daniel Lehewych"}]}</script>',
            '<script type="application/ld+json">{"author": "Daniel Lehewych"}</script>',
        ],
    )
    def test_detects_author_signals(self, html: str):
        """Should accept bylines, author meta tags and JSON-LD authors."""
        assert has_author(html, AUTHOR)

    def test_rejects_other_author(self):
        """Should reject pages by someone else."""
        html = '<p>By Jane Doe</p><meta name="author" content="Jane Doe">'
        assert not has_author(html, AUTHOR)

    def test_lenient_substring_match(self):
        """Should accept a longer name containing the author's name."""
        assert has_author('<meta name="author" content="Daniel Lehewych Jr.">', AUTHOR)

    def test_empty_html(self):
        """Should reject empty documents."""
        assert not has_author("", AUTHOR)


class TestDetectLanguage:
    """Tests for detect_language."""

    def test_html_lang_attribute(self, page):
        """Should prefer the html lang attribute."""
        assert detect_language(page(lang="en-US")) == "en"
        assert detect_language(page(lang="fr")) == "fr"

    def test_og_locale(self):
        """Should fall back to og:locale."""
        html = '<html><head><meta property="og:locale" content="es_ES"></head><body></body></html>'
        assert detect_language(html) == "es"

    def test_stopword_fallback_english(self, page):
        """Should recognize English text without markup hints."""
        assert detect_language(page(lang=None)) == "en"

    def test_stopword_fallback_other(self, page):
        """Should report other for text without target stopwords."""
        html = page(lang=None, body="El perro come la comida de los niños en la casa grande.")
        assert detect_language(html) == "other"

    def test_empty(self):
        """Should return None for an empty document."""
        assert detect_language("") is None


class TestExtractCanonicalHref:
    """Tests for canonical link extraction."""

    def test_rel_first(self):
        assert extract_canonical_href('<link rel="canonical" href="https://x.com/a">') == "https://x.com/a"

    def test_href_first(self):
        assert extract_canonical_href("<link href='https://x.com/b' rel='canonical'>") == "https://x.com/b"

    def test_missing(self):
        assert extract_canonical_href("<html></html>") is None


def _handler(page_html: str):
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/missing":
            return httpx.Response(404)
        if path == "/forbidden":
            return httpx.Response(403)
        if path == "/broken":
            return httpx.Response(503)
        if path == "/report.pdf":
            return httpx.Response(200, headers={"content-type": "application/pdf"}, content=b"%PDF-1.4")
        if path == "/slow":
            raise httpx.ReadTimeout("timed out", request=request)
        if path == "/old":
            return httpx.Response(301, headers={"location": "https://example.com/new"})
        return httpx.Response(200, headers={"content-type": "text/html; charset=utf-8"}, text=page_html)

    return handler


class TestPageFetcher:
    """Tests for PageFetcher."""

    @pytest.fixture
    def fetcher(self, page) -> PageFetcher:
        client = httpx.Client(transport=httpx.MockTransport(_handler(page())), follow_redirects=True)
        return PageFetcher(client=client)

    def test_fetches_html(self, fetcher: PageFetcher):
        """Should return the page body."""
        result = fetcher.fetch("https://example.com/post")
        assert result.success
        assert "Daniel Lehewych" in result.html

    def test_follows_redirects(self, fetcher: PageFetcher):
        """Should report the final URL after redirects."""
        result = fetcher.fetch("https://example.com/old")
        assert result.success
        assert result.final_url == "https://example.com/new"

    @pytest.mark.parametrize(
        "path,error",
        [
            ("/missing", "HTTP 404 (not found)"),
            ("/forbidden", "HTTP 403 (forbidden)"),
            ("/broken", "HTTP 503 (server error)"),
            ("/slow", "request timed out"),
        ],
    )
    def test_http_failures(self, fetcher: PageFetcher, path: str, error: str):
        """Should report failures instead of raising."""
        result = fetcher.fetch(f"https://example.com{path}")
        assert not result.success
        assert result.error == error

    def test_non_html(self, fetcher: PageFetcher):
        """Should reject non-HTML content."""
        result = fetcher.fetch("https://example.com/report.pdf")
        assert not result.success
        assert result.error.startswith("non-HTML content")


class TestVerifier:
    """Tests for Verifier."""

    @pytest.fixture
    def verifier(self, page) -> Verifier:
        client = httpx.Client(transport=httpx.MockTransport(_handler(page())), follow_redirects=True)
        return Verifier(author_name=AUTHOR, fetcher=PageFetcher(client=client))

    def test_verified_page(self, verifier: Verifier):
        """Should report authorship and language for a good page."""
        result = verifier.verify("https://example.com/post")
        assert result.fetched
        assert result.author_ok
        assert result.lang == "en"

    def test_timeout_fails_closed(self, verifier: Verifier):
        """Should mark a timed-out page as not fetched and not verified."""
        result = verifier.verify("https://example.com/slow")
        assert not result.fetched
        assert not result.author_ok
        assert "timed out" in result.error

    def test_sleeps_after_fetch(self, page):
        """Should pause for the courtesy delay after each fetch."""
        pauses = []
        fetcher = PageFetcher(client=httpx.Client(transport=httpx.MockTransport(_handler(page()))))
        verifier = Verifier(author_name=AUTHOR, fetcher=fetcher, sleep=pauses.append, delay=0.15)
        verifier.verify("https://example.com/post")
        assert pauses == [0.15]

    def test_evaluate_reports_canonical_and_date(self, page):
        """Should surface the canonical link and metadata date."""
        html = page(canonical="https://example.com/canonical").replace(
            "<title>Article</title>",
            '<title>Article</title><meta property="article:published_time" content="2024-03-01T10:00:00Z">',
        )
        verifier = Verifier(author_name=AUTHOR, fetcher=None)
        result = verifier.evaluate(PageResult(url="https://example.com/a", html=html, success=True))
        assert result.canonical_href == "https://example.com/canonical"
        assert to_iso_date(result.published) == "2024-03-01"
