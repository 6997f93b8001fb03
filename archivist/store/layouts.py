"""On-disk shapes of the article store."""

from abc import ABC, abstractmethod
from collections import Counter
from typing import Any, Dict, List, Optional

import pendulum


class StoreLayout(ABC):
    """How the article list is wrapped inside the JSON document."""

    name: str = ""

    @abstractmethod
    def extract(self, document: Any) -> List[Dict[str, Any]]:
        """Return the raw article dicts held by a document."""
        pass

    @abstractmethod
    def build(self, articles: List[Dict[str, Any]], original: Optional[Any] = None) -> Any:
        """Return the document to write for ``articles``."""
        pass


class ArrayLayout(StoreLayout):
    """A bare JSON array of articles."""

    name = "array"

    def extract(self, document: Any) -> List[Dict[str, Any]]:
        return list(document or [])

    def build(self, articles: List[Dict[str, Any]], original: Optional[Any] = None) -> Any:
        return articles


class EnvelopeLayout(StoreLayout):
    """``{"metadata": {...}, "articles": [...]}`` with refreshed counters.

    Keys other than ``articles`` and the refreshed metadata fields are kept.
    """

    name = "envelope"

    def extract(self, document: Any) -> List[Dict[str, Any]]:
        return list(document.get("articles") or [])

    def build(self, articles: List[Dict[str, Any]], original: Optional[Any] = None) -> Any:
        document = dict(original or {})
        metadata = dict(document.get("metadata") or {})

        platforms = Counter(a.get("platform") or "Unknown" for a in articles)
        metadata.update(
            {
                "totalArticles": len(articles),
                "processedArticles": len(articles),
                "pendingArticles": 0,
                "exportDate": pendulum.now("UTC").to_iso8601_string(),
                "platforms": dict(platforms),
            }
        )

        document["metadata"] = metadata
        document["articles"] = articles
        return document


def detect_layout(document: Any) -> Optional[StoreLayout]:
    """Layout matching a parsed document, or None if unrecognized."""
    if isinstance(document, list):
        return ArrayLayout()
    if isinstance(document, dict) and isinstance(document.get("articles"), list):
        return EnvelopeLayout()
    return None
