"""Build a store from an exported corpus."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pendulum

from ..classification import Classifier
from ..discovery.fingerprint import content_fingerprint
from ..discovery.text import clean_title
from ..discovery.urls import canonicalize
from ..errors import StoreError
from ..models import ArticleRecord, ArticleSchemas, build_url_slug, to_iso_date
from .layouts import detect_layout


def load_export(path: Path) -> List[Dict[str, Any]]:
    """Rows of an export file (bare array or ``{"articles": [...]}``).

    Raises:
        StoreError: If the file is unreadable, not JSON, or holds no articles
    """
    try:
        document = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise StoreError(f"Could not read {path}: {e}")
    except json.JSONDecodeError as e:
        raise StoreError(f"Invalid JSON in {path}: {e}")

    layout = detect_layout(document)
    rows = layout.extract(document) if layout else []
    if not rows:
        raise StoreError("No articles found. Expected an array or { articles: [...] }")
    return rows


def seed_date(row: Dict[str, Any]) -> str:
    """First parseable of ``date``, ``published_at``, ``created_at``; else today."""
    for field in ("date", "published_at", "created_at"):
        value = to_iso_date(row.get(field))
        if value:
            return value
    return pendulum.now("UTC").to_date_string()


def _numeric_id(value: Any) -> Optional[int]:
    """Integer value of an id given as a number or a numeric string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def records_from_export(
    rows: List[Dict[str, Any]],
    classifier: Classifier,
    author_name: Optional[str] = None,
    first_id: int = 1,
) -> Tuple[List[ArticleRecord], int]:
    """Convert export rows into records.

    Rows without a URL or title, and rows whose normalized URL was already
    seen, are skipped. The seed key keeps ``www.``.

    Returns:
        Tuple of (records, skipped_count)
    """
    records: List[ArticleRecord] = []
    seen = set()
    skipped = 0
    explicit_ids = [n for n in (_numeric_id(r.get("id")) for r in rows if r) if n is not None]
    next_id = max([first_id - 1] + explicit_ids) + 1
    discovered_at = pendulum.now("UTC").to_iso8601_string()

    for row in rows:
        row = row or {}
        url = row.get("url")
        title = clean_title(row.get("title") or "", author_name)
        if not url or not title:
            skipped += 1
            continue

        normalized = canonicalize(url, strip_www=False)
        if normalized in seen:
            skipped += 1
            continue
        seen.add(normalized)

        platform = str(row.get("platform") or "Unknown")
        snippet = (row.get("subtitle") or "").strip()
        classification = classifier.classify(title, snippet, platform)

        record_id = row.get("id")
        if record_id is None or record_id == "":
            record_id = next_id
            next_id += 1

        records.append(
            ArticleRecord(
                id=record_id,
                title=title,
                url=url,
                normalized_url=normalized,
                platform=platform,
                date=seed_date(row),
                snippet=snippet,
                fingerprint=content_fingerprint(title, snippet),
                version=1,
                topics=classification.topics,
                type=classification.type,
                schemas=ArticleSchemas(
                    url_slug=build_url_slug(platform, title),
                    type=classification.type,
                    topics=classification.topics,
                ),
                discovered_at=discovered_at,
            )
        )

    return records, skipped
