"""Shared JSON-LD building blocks and file helpers."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import AuthorConfig
from ..models import ArticleRecord, slugify

SCHEMA_CONTEXT = "https://schema.org"
EPOCH_DATE = "1970-01-01"

PUBLISHER_DATA: Dict[str, Dict[str, Any]] = {
    "Medium": {
        "@type": "Organization",
        "name": "Medium",
        "logo": {
            "@type": "ImageObject",
            "url": "https://miro.medium.com/max/616/1*OMF3fSqH8t4xBJ9-6oZDZw.png",
            "width": 616,
            "height": 616,
        },
    },
    "Newsweek": {
        "@type": "Organization",
        "name": "Newsweek",
        "logo": {
            "@type": "ImageObject",
            "url": "https://www.newsweek.com/favicon.ico",
            "width": 32,
            "height": 32,
        },
    },
    "BigThink": {
        "@type": "Organization",
        "name": "Big Think",
        "logo": {
            "@type": "ImageObject",
            "url": "https://bigthink.com/favicon.ico",
            "width": 32,
            "height": 32,
        },
    },
}


def publisher_for(platform: str) -> Dict[str, Any]:
    """Organization block for a platform."""
    if platform in PUBLISHER_DATA:
        return dict(PUBLISHER_DATA[platform])
    return {"@type": "Organization", "name": platform or "Web"}


def shadow_url(author: AuthorConfig, record: ArticleRecord) -> str:
    """URL of an article's mirror page on the author's site."""
    return f"{author.site_url}{record.url_slug}"


def person_id(author: AuthorConfig) -> str:
    return author.person_id or f"{author.site_url}/#{slugify(author.name)}"


def person_ref(author: AuthorConfig) -> Dict[str, Any]:
    return {"@type": "Person", "name": author.name, "@id": person_id(author)}


def date_published(record: ArticleRecord) -> str:
    return f"{record.date or EPOCH_DATE}T00:00:00Z"


def article_item(record: ArticleRecord, author: AuthorConfig, with_author: bool = False) -> Dict[str, Any]:
    """Compact ``Article`` reference used inside item lists."""
    item: Dict[str, Any] = {
        "@type": "Article",
        "@id": shadow_url(author, record),
        "name": record.title,
        "url": record.url,
        "datePublished": date_published(record),
    }
    if with_author:
        item["author"] = person_ref(author)
    return item


def list_item(position: int, item: Dict[str, Any]) -> Dict[str, Any]:
    return {"@type": "ListItem", "position": position, "item": item}


def item_list(name: str, elements: List[Dict[str, Any]], total: Optional[int] = None) -> Dict[str, Any]:
    """schema.org ItemList wrapping ``elements``."""
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "ItemList",
        "name": name,
        "numberOfItems": len(elements) if total is None else total,
        "itemListElement": elements,
    }


def outbox_dir_for(outbox_root: Path, record: ArticleRecord) -> Path:
    """Outbox bundle directory, mirroring the archive slug."""
    return outbox_root / record.url_slug.lstrip("/")


def write_json(path: Path, data: Any) -> None:
    """Write pretty-printed JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
