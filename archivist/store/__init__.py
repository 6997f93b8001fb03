"""Persisted article store."""

from .article_store import ArticleStore
from .layouts import ArrayLayout, EnvelopeLayout, StoreLayout, detect_layout
from .seed import load_export, records_from_export, seed_date

__all__ = [
    "ArrayLayout",
    "ArticleStore",
    "EnvelopeLayout",
    "StoreLayout",
    "detect_layout",
    "load_export",
    "records_from_export",
    "seed_date",
]
