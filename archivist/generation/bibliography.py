"""Master bibliography with stable, date-based positions."""

from pathlib import Path
from typing import Any, Dict, List, Sequence

from ..config import AuthorConfig
from ..models import ArticleRecord
from .jsonld import article_item, item_list, list_item, outbox_dir_for, write_json

ORDERS = ("asc", "desc")


def order_records(records: Sequence[ArticleRecord], order: str = "asc") -> List[ArticleRecord]:
    """Records by publication date, ties broken by title (always ascending)."""
    if order not in ORDERS:
        raise ValueError(f"Unknown order {order!r}; expected one of {', '.join(ORDERS)}")
    by_title = sorted(records, key=lambda r: r.title or "")
    return sorted(by_title, key=lambda r: r.date or "", reverse=order == "desc")


def build_bibliography(
    records: Sequence[ArticleRecord],
    author: AuthorConfig,
    order: str = "asc",
) -> Dict[str, Any]:
    """schema.org ItemList of every record."""
    elements = [
        list_item(position, article_item(record, author, with_author=True))
        for position, record in enumerate(order_records(records, order), start=1)
    ]
    return item_list(f"{author.name} - Master Bibliography", elements)


def write_bibliography(
    records: Sequence[ArticleRecord],
    data_dir: Path,
    outbox_root: Path,
    author: AuthorConfig,
    order: str = "asc",
) -> Path:
    """Write ``master-bibliography.json`` and refresh each bundle's ``bib.json``.

    Returns:
        Path of the bibliography file
    """
    bibliography = build_bibliography(records, author, order)
    ordered = order_records(records, order)

    for record, entry in zip(ordered, bibliography["itemListElement"]):
        write_json(outbox_dir_for(outbox_root, record) / "bib.json", entry)

    path = data_dir / "master-bibliography.json"
    write_json(path, bibliography)
    return path
