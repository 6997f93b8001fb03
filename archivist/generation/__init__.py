"""Artifact generation for the static site."""

from .bibliography import build_bibliography, order_records, write_bibliography
from .jsonld import PUBLISHER_DATA, publisher_for, write_json
from .related import build_related, related_records, write_related
from .report import format_as_markdown, write_report
from .schema import build_article_schema, build_topic_block, render_header, render_page, write_outbox
from .topics import MAX_TOPIC_ENTRIES, build_topic_index, group_by_topic, write_topic_indexes

__all__ = [
    "MAX_TOPIC_ENTRIES",
    "PUBLISHER_DATA",
    "build_article_schema",
    "build_bibliography",
    "build_related",
    "build_topic_block",
    "build_topic_index",
    "format_as_markdown",
    "group_by_topic",
    "order_records",
    "publisher_for",
    "related_records",
    "render_header",
    "render_page",
    "write_bibliography",
    "write_json",
    "write_outbox",
    "write_related",
    "write_report",
    "write_topic_indexes",
]
