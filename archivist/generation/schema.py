"""Per-article outbox bundles: JSON-LD, header snippet and mirror page."""

import html
import json
from pathlib import Path
from typing import Any, Dict, List

from ..classification import Classification, Enrichment, enrich
from ..config import AuthorConfig
from ..models import DEFAULT_TOPIC, ArticleRecord
from .jsonld import (
    SCHEMA_CONTEXT,
    date_published,
    item_list,
    outbox_dir_for,
    person_ref,
    publisher_for,
    shadow_url,
    write_json,
    write_text,
)

DEFAULT_TYPE = "BlogPosting"


def enrichment_for(record: ArticleRecord) -> Enrichment:
    classification = Classification(
        type=record.type or DEFAULT_TYPE,
        topics=record.topics or [DEFAULT_TOPIC],
    )
    return enrich(record.title, record.snippet, classification)


def build_article_schema(record: ArticleRecord, author: AuthorConfig) -> Dict[str, Any]:
    """JSON-LD for an article's mirror page."""
    url = shadow_url(author, record)
    extra = enrichment_for(record)

    schema: Dict[str, Any] = {
        "@context": SCHEMA_CONTEXT,
        "@type": record.type or DEFAULT_TYPE,
        "@id": url,
        "headline": record.title,
        "description": record.snippet or record.title,
        "author": person_ref(author),
        "datePublished": date_published(record),
        "publisher": publisher_for(record.platform),
        "sameAs": record.url,
        "url": url,
        "mainEntityOfPage": {"@type": "WebPage", "@id": url},
        "inLanguage": "en-US",
        "isAccessibleForFree": True,
        "genre": extra.genre,
        "educationalLevel": extra.educational_level,
        "keywords": ", ".join(record.topics).lower(),
    }
    if record.last_updated:
        schema["dateModified"] = record.last_updated
    if record.version > 1:
        schema["version"] = record.version

    about: List[Dict[str, Any]] = [{"@type": "Thing", "name": t} for t in record.topics]
    about.extend({"@type": "Thing", "name": d, "additionalType": "AcademicDiscipline"} for d in extra.disciplines)
    schema["about"] = about

    mentions = [{"@type": "Person", "name": name} for name in extra.mentions]
    if extra.interview_subject:
        mentions.append({"@type": "Person", "name": extra.interview_subject, "description": "Interview subject"})
    if mentions:
        schema["mentions"] = mentions

    return schema


def build_topic_block(record: ArticleRecord, author: AuthorConfig) -> Dict[str, Any]:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "WebPage",
        "@id": shadow_url(author, record),
        "about": [{"@type": "Thing", "name": t} for t in record.topics],
        "keywords": ", ".join(record.topics).lower(),
    }


def render_header(schema: Dict[str, Any]) -> str:
    """``<head>`` snippet: noindex, canonical to the original and JSON-LD."""
    body = json.dumps(schema, indent=2, ensure_ascii=False).replace("</", "<\\/")
    return (
        '<meta name="robots" content="noindex, follow">\n'
        f'<link rel="canonical" href="{html.escape(schema["sameAs"], quote=True)}">\n'
        '<script type="application/ld+json">\n'
        f"{body}\n"
        "</script>\n"
    )


def render_page(record: ArticleRecord) -> str:
    """Mirror page body linking back to the original."""
    title = html.escape(record.title)
    platform = html.escape(record.platform)
    url = html.escape(record.url, quote=True)
    return (
        '<div class="shadow-archive-entry" style="max-width:800px;margin:0 auto;padding:40px 20px;">\n'
        "  <p><strong>Shadow Archive Entry</strong> | Not Indexed | For Attribution Only</p>\n"
        f"  <h1>{title}</h1>\n"
        f"  <p><strong>Originally Published:</strong> {record.date or ''} on {platform}<br>\n"
        f'     <strong>Original URL:</strong> <a href="{url}">View on {platform}</a></p>\n'
        '  <div class="article-content"><p><em>[Article content to be added]</em></p></div>\n'
        "</div>\n"
    )


def build_meta(record: ArticleRecord) -> Dict[str, Any]:
    return {
        "id": record.id,
        "title": record.title,
        "url": record.url,
        "platform": record.platform,
        "date": record.date,
        "urlSlug": record.url_slug,
        "type": record.type,
        "topics": record.topics,
        "version": record.version,
        "fingerprint": record.fingerprint,
    }


def write_outbox(record: ArticleRecord, outbox_root: Path, author: AuthorConfig) -> Path:
    """Write the outbox bundle for a record and return its directory.

    ``bib.json`` and ``related.json`` are owned by the bibliography and
    related builders; an empty related list is written only as a placeholder.
    """
    out_dir = outbox_dir_for(outbox_root, record)
    schema = build_article_schema(record, author)

    write_json(out_dir / "schema.json", schema)
    write_json(out_dir / "topic.json", build_topic_block(record, author))
    write_text(out_dir / "header.html", render_header(schema))
    write_text(out_dir / "page.html", render_page(record))
    write_json(out_dir / "meta.json", build_meta(record))

    related_path = out_dir / "related.json"
    if not related_path.exists():
        write_json(related_path, item_list(f"Related Articles by {author.name}", []))

    return out_dir
