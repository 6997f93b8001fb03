"""Candidate discovery: search, URL keys, fingerprints and verification."""

from .fingerprint import content_fingerprint
from .models import PageResult, SearchHit, Verification
from .page_fetcher import PageFetcher
from .search import GoogleSearchClient, SearchProvider, build_queries
from .text import clean_title, collapse_ws
from .urls import (
    canonical_key,
    canonicalize,
    detect_platform,
    extract_host,
    host_matches,
    is_known_non_article_url,
    unwrap_url,
)
from .verifier import Verifier, detect_language, has_author

__all__ = [
    "GoogleSearchClient",
    "PageFetcher",
    "PageResult",
    "SearchHit",
    "SearchProvider",
    "Verification",
    "Verifier",
    "build_queries",
    "canonical_key",
    "canonicalize",
    "clean_title",
    "collapse_ws",
    "content_fingerprint",
    "detect_language",
    "detect_platform",
    "extract_host",
    "has_author",
    "host_matches",
    "is_known_non_article_url",
    "unwrap_url",
]
