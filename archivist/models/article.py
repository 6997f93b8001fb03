"""Article record persisted in the article store."""

import re
from typing import List, Optional, Union

import pendulum
from pydantic import Field, model_validator

from .base import StoreModel

DEFAULT_TOPIC = "General"

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(value: Optional[str]) -> str:
    """Lower-case, hyphen-separated slug."""
    return _SLUG_RE.sub("-", (value or "").lower()).strip("-")


def to_iso_date(value: Optional[str]) -> Optional[str]:
    """``YYYY-MM-DD`` for a date or timestamp string; None if unparseable."""
    if not value:
        return None
    try:
        parsed = pendulum.parse(str(value).strip(), strict=False)
    except (ValueError, TypeError, OverflowError):
        return None
    return parsed.date().isoformat() if hasattr(parsed, "date") else None


def build_url_slug(platform: Optional[str], title: Optional[str]) -> str:
    """Archive mirror path for an article: /archive/<platform>/<title>."""
    platform_slug = slugify(platform or "web") or "web"
    title_slug = slugify(title)[:50] or "entry"
    return f"/archive/{platform_slug}/{title_slug}"


class ArticleSchemas(StoreModel):
    """Derived data consumed by the site generators."""

    url_slug: Optional[str] = Field(None, alias="urlSlug")
    type: Optional[str] = None
    topics: List[str] = Field(default_factory=list)


class ArticleRecord(StoreModel):
    """A discovered article."""

    id: Union[int, str] = Field(..., description="Unique id, never reused")
    title: str = Field(..., description="Cleaned display title")
    url: str = Field(..., description="Source URL as discovered")
    normalized_url: Optional[str] = Field(None, alias="normalizedUrl", description="Deduplication key")
    platform: str = Field("Unknown", description="Publisher name")
    date: Optional[str] = Field(None, description="Publication date (YYYY-MM-DD)")
    snippet: str = Field("", description="Excerpt used for classification and display")
    fingerprint: Optional[str] = Field(None, description="Hash of normalized title and snippet")
    previous_fingerprint: Optional[str] = Field(None, alias="previousFingerprint")
    version: int = Field(1, ge=1, description="Bumped once per content change")
    topics: List[str] = Field(default_factory=list, description="Topic labels")
    type: Optional[str] = Field(None, description="Genre label")
    schemas: ArticleSchemas = Field(default_factory=ArticleSchemas)
    discovered_at: Optional[str] = Field(None, alias="discoveredAt")
    last_updated: Optional[str] = Field(None, alias="lastUpdated")

    @model_validator(mode="after")
    def fill_classification(self) -> "ArticleRecord":
        """Older records keep topics/type only under ``schemas``."""
        if not self.topics:
            self.topics = list(self.schemas.topics) or [DEFAULT_TOPIC]
        if self.type is None and self.schemas.type:
            self.type = self.schemas.type
        if not self.schemas.topics:
            self.schemas.topics = list(self.topics)
        if self.schemas.type is None and self.type is not None:
            self.schemas.type = self.type
        return self

    @property
    def url_slug(self) -> str:
        """Stored archive slug, derived when the record predates slugs."""
        return self.schemas.url_slug or build_url_slug(self.platform, self.title)

    def set_classification(self, type_label: str, topics: List[str]) -> None:
        """Replace type and topics, keeping ``schemas`` in step."""
        self.type = type_label
        self.topics = list(topics) or [DEFAULT_TOPIC]
        self.schemas.type = self.type
        self.schemas.topics = list(self.topics)
