"""Data models for discovery."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

# Metatag keys that carry a publication date, in preference order
PUBLISHED_TAGS = (
    "article:published_time",
    "og:article:published_time",
    "datepublished",
    "date",
    "dc.date",
    "pubdate",
    "publish-date",
)


class SearchHit(BaseModel):
    """A single search provider result."""

    title: str = Field("", description="Result title as returned by the provider")
    link: str = Field(..., description="Result URL")
    snippet: str = Field("", description="Result excerpt")
    metatags: List[Dict[str, Any]] = Field(default_factory=list, description="Page metatags, if provided")

    @property
    def published(self) -> Optional[str]:
        """First publication date found in the metatags."""
        for tags in self.metatags:
            lowered = {str(k).lower(): v for k, v in tags.items()}
            for key in PUBLISHED_TAGS:
                value = lowered.get(key)
                if value:
                    return str(value)
        return None


class PageResult(BaseModel):
    """Result of fetching a candidate page."""

    url: str = Field(..., description="Requested URL")
    final_url: Optional[str] = Field(None, description="URL after redirects")
    html: str = Field("", description="Page HTML")
    content_type: Optional[str] = Field(None, description="Response content type")
    success: bool = Field(True, description="Whether an HTML page was fetched")
    error: Optional[str] = Field(None, description="Error message if failed")


class Verification(BaseModel):
    """Authorship and language signals for a candidate page."""

    url: str = Field(..., description="Verified URL")
    fetched: bool = Field(False, description="Whether the page could be fetched")
    author_ok: bool = Field(False, description="Whether a byline for the author was found")
    lang: Optional[str] = Field(None, description="Detected language code or 'other'")
    canonical_href: Optional[str] = Field(None, description="Page canonical link")
    published: Optional[str] = Field(None, description="Publication date from page metadata")
    error: Optional[str] = Field(None, description="Fetch error if not fetched")
