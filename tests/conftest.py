"""Shared fixtures."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

import pytest

from archivist.config import ConfigModel
from archivist.discovery import PageResult, SearchHit
from archivist.store import ArticleStore

AUTHOR = "Daniel Lehewych"


def article_html(
    author: Optional[str] = AUTHOR,
    lang: Optional[str] = "en",
    canonical: Optional[str] = None,
    body: str = "This is the text of the article and it is written in English for the readers of the site.",
) -> str:
    """Minimal article page."""
    html_open = f'<html lang="{lang}">' if lang else "<html>"
    head = "<title>Article</title>"
    if canonical:
        head += f'<link rel="canonical" href="{canonical}">'
    byline = f"<p class='byline'>By {author}</p>" if author else ""
    return f"{html_open}<head>{head}</head><body><article>{byline}<p>{body}</p></article></body></html>"


class FakeSearch:
    """Search provider returning the same hits for every query."""

    def __init__(self, hits: Optional[List[SearchHit]] = None, fail_queries: Optional[List[str]] = None):
        self.hits = hits or []
        self.fail_queries = fail_queries or []
        self.queries: List[str] = []

    def search(self, query: str) -> List[SearchHit]:
        self.queries.append(query)
        if query in self.fail_queries:
            raise RuntimeError("quota exceeded")
        return list(self.hits)


class FakeFetcher:
    """Page fetcher serving canned pages; unknown URLs time out."""

    def __init__(self, pages: Optional[Dict[str, str]] = None):
        self.pages = pages or {}
        self.fetched: List[str] = []

    def fetch(self, url: str) -> PageResult:
        self.fetched.append(url)
        if url not in self.pages:
            return PageResult(url=url, success=False, error="request timed out")
        return PageResult(url=url, final_url=url, html=self.pages[url], content_type="text/html", success=True)

    def close(self) -> None:
        pass


@pytest.fixture
def settings() -> ConfigModel:
    """Configuration without courtesy delays."""
    return ConfigModel(
        search={"request_delay": 0},
        verification={"fetch_delay": 0},
    )


@pytest.fixture
def store(tmp_path) -> ArticleStore:
    return ArticleStore(tmp_path / "data" / "articles.json")


@pytest.fixture
def make_hit() -> Callable[..., SearchHit]:
    def _make(link: str, title: str = "An Article", snippet: str = "A snippet.", published: Optional[str] = None):
        metatags = [{"article:published_time": published}] if published else []
        return SearchHit(title=title, link=link, snippet=snippet, metatags=metatags)

    return _make


@pytest.fixture
def page() -> Callable[..., str]:
    """Factory for article pages."""
    return article_html


@pytest.fixture
def fake_search() -> type:
    return FakeSearch


@pytest.fixture
def fake_fetcher() -> type:
    return FakeFetcher
