"""Configuration models."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


DEFAULT_EXCLUDED_HOSTS = [
    "webcache.googleusercontent.com",
    "google.com",
    "news.google.com",
    "bing.com",
    "duckduckgo.com",
    "yahoo.com",
    "facebook.com",
    "m.facebook.com",
    "twitter.com",
    "x.com",
    "t.co",
    "linkedin.com",
    "lnkd.in",
    "reddit.com",
    "www.reddit.com",
    "r.jina.ai",
    "getpocket.com",
    "feedly.com",
    "flipboard.com",
    # Redirect wrappers that could not be unwrapped
    "safelinks.protection.outlook.com",
    "safelinks.office.net",
    "urldefense.com",
]


class AuthorConfig(BaseModel):
    """The person whose bylines are being archived."""

    name: str = Field("Daniel Lehewych", description="Author display name used in queries and byline checks")
    site_url: str = Field("https://daniellehewych.org", description="Site hosting the shadow archive")
    person_id: Optional[str] = Field(None, description="JSON-LD @id for the author (default: <site_url>/#<name-slug>)")

    @field_validator("site_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Keep site URL joinable with slugs."""
        return v.rstrip("/")


class SearchConfig(BaseModel):
    """Search provider configuration."""

    endpoint: str = Field("https://www.googleapis.com/customsearch/v1", description="Custom Search endpoint")
    api_key_env: str = Field("GOOGLE_API_KEY", description="Environment variable for API key")
    engine_id_env: str = Field("SEARCH_ENGINE_ID", description="Environment variable for search engine ID")
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    engine_id: Optional[str] = Field(None, description="Search engine ID (prefer engine_id_env)")
    date_window: str = Field("d14", description="Recency window passed as dateRestrict")
    results_per_query: int = Field(10, description="Results requested per query", ge=1, le=10)
    timeout: float = Field(15.0, description="Request timeout in seconds", gt=0)
    request_delay: float = Field(0.25, description="Pause between queries in seconds", ge=0)


class VerificationConfig(BaseModel):
    """Authorship and language gates."""

    enabled: bool = Field(True, description="Require a byline match before accepting")
    language: str = Field("en", description="Target language code (empty disables the gate)")
    timeout: float = Field(8.0, description="Page fetch timeout in seconds", gt=0)
    fetch_delay: float = Field(0.15, description="Pause between page fetches in seconds", ge=0)
    user_agent: str = Field("Archivist/0.1 (byline discovery)", description="User-Agent for page fetches")

    @field_validator("language")
    @classmethod
    def lower_language(cls, v: str) -> str:
        """Language codes compare lower-cased."""
        return v.strip().lower()


class FilterConfig(BaseModel):
    """Hosts that never yield candidates."""

    exclude_hosts: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_HOSTS),
        description="Search engines, social networks and link shorteners",
    )
    blocklist: List[str] = Field(
        default_factory=lambda: ["gesahkita.com", "gesahkita.id"],
        description="Extra hosts to block (subdomains included)",
    )

    @field_validator("exclude_hosts", "blocklist")
    @classmethod
    def lower_hosts(cls, v: List[str]) -> List[str]:
        """Normalize host lists."""
        return [h.strip().lower() for h in v if h and h.strip()]


class StorageConfig(BaseModel):
    """Where the article store and generated artifacts live."""

    workspace_root: str = Field(".", description="Root directory for data")
    data_dir: str = Field("data", description="Data directory relative to workspace root")
    articles_file: str = Field("articles.json", description="Article store file name")


class ConfigModel(BaseModel):
    """Main configuration model."""

    author: AuthorConfig = Field(default_factory=AuthorConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    verification: VerificationConfig = Field(default_factory=VerificationConfig)
    filters: FilterConfig = Field(default_factory=FilterConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    require_credentials: bool = Field(True, description="Treat missing search credentials as fatal")
