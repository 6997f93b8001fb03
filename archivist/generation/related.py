"""Related-article lists based on topic overlap."""

from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

from ..config import AuthorConfig
from ..models import DEFAULT_TOPIC, ArticleRecord, slugify
from .jsonld import EPOCH_DATE, article_item, item_list, list_item, outbox_dir_for, write_json

MAX_RELATED = 5


def related_records(
    record: ArticleRecord,
    candidates: Sequence[ArticleRecord],
    limit: int = MAX_RELATED,
) -> List[ArticleRecord]:
    """Best matches for ``record``.

    Ranked by number of shared topics, then same platform, then newest.
    Candidates sharing no topic are never returned.
    """
    topics = set(record.topics or [DEFAULT_TOPIC])
    scored: List[Tuple[int, int, str, ArticleRecord]] = []

    for other in candidates:
        if other is record:
            continue
        shared = len(topics.intersection(other.topics or [DEFAULT_TOPIC]))
        if not shared:
            continue
        same_platform = 1 if (other.platform or "") == (record.platform or "") else 0
        scored.append((shared, same_platform, other.date or EPOCH_DATE, other))

    scored.sort(key=lambda s: (s[0], s[1], s[2]), reverse=True)
    return [s[3] for s in scored[:limit]]


def build_related(
    record: ArticleRecord,
    candidates: Sequence[ArticleRecord],
    author: AuthorConfig,
) -> Dict[str, Any]:
    elements = [
        list_item(position, article_item(other, author))
        for position, other in enumerate(related_records(record, candidates), start=1)
    ]
    return item_list(f"Related Articles by {author.name}", elements)


def write_related(
    records: Sequence[ArticleRecord],
    data_dir: Path,
    outbox_root: Path,
    author: AuthorConfig,
) -> List[Path]:
    """Write ``related/<title-slug>.json`` and refresh each bundle's ``related.json``."""
    out_dir = data_dir / "related"
    out_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for record in records:
        related = build_related(record, records, author)
        path = out_dir / f"{slugify(record.title)[:50] or 'entry'}.json"
        write_json(path, related)
        write_json(outbox_dir_for(outbox_root, record) / "related.json", related)
        paths.append(path)
    return paths
