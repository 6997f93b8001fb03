"""Data models for Archivist."""

from .article import ArticleRecord, ArticleSchemas, DEFAULT_TOPIC, build_url_slug, slugify, to_iso_date
from .base import StoreModel
from .run import RunReport, SkipEntry

__all__ = [
    "ArticleRecord",
    "ArticleSchemas",
    "DEFAULT_TOPIC",
    "RunReport",
    "SkipEntry",
    "StoreModel",
    "build_url_slug",
    "slugify",
    "to_iso_date",
]
