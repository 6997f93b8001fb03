"""Per-topic article indexes."""

from collections import OrderedDict
from pathlib import Path
from typing import Any, Dict, List, Sequence

from ..config import AuthorConfig
from ..models import DEFAULT_TOPIC, ArticleRecord, slugify
from .jsonld import article_item, item_list, list_item, write_json

MAX_TOPIC_ENTRIES = 200


def group_by_topic(records: Sequence[ArticleRecord]) -> Dict[str, List[ArticleRecord]]:
    """Topic label -> records carrying it, in first-seen topic order."""
    groups: Dict[str, List[ArticleRecord]] = OrderedDict()
    for record in records:
        for topic in record.topics or [DEFAULT_TOPIC]:
            groups.setdefault(topic, []).append(record)
    return groups


def build_topic_index(topic: str, records: Sequence[ArticleRecord], author: AuthorConfig) -> Dict[str, Any]:
    """Newest-first ItemList for one topic, capped at ``MAX_TOPIC_ENTRIES``."""
    newest = sorted(records, key=lambda r: (r.date or "", r.title or ""), reverse=True)
    elements = [
        list_item(position, article_item(record, author))
        for position, record in enumerate(newest[:MAX_TOPIC_ENTRIES], start=1)
    ]
    return item_list(f"Topic: {topic}", elements, total=len(records))


def write_topic_indexes(records: Sequence[ArticleRecord], data_dir: Path, author: AuthorConfig) -> List[Path]:
    """Write ``topics/<topic-slug>.json`` for every topic in use."""
    out_dir = data_dir / "topics"
    out_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for topic, members in group_by_topic(records).items():
        path = out_dir / f"{slugify(topic) or 'general'}.json"
        write_json(path, build_topic_index(topic, members, author))
        paths.append(path)
    return paths
