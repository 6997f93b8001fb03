"""Models describing a single discovery run."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .article import ArticleRecord


class SkipEntry(BaseModel):
    """A candidate rejected during a run."""

    title: str = Field("", description="Cleaned title from the search hit")
    url: str = Field(..., description="Candidate URL")
    host: str = Field("", description="Candidate host")
    reason: str = Field(..., description="Why the candidate was skipped")


class RunReport(BaseModel):
    """Outcome of a discovery run."""

    started_at: str = Field(..., description="When the run started")
    finished_at: Optional[str] = Field(None, description="When the run finished")
    queries: List[str] = Field(default_factory=list, description="Queries sent to the search provider")
    search_errors: List[str] = Field(default_factory=list, description="Failed queries with errors")
    raw_results: int = Field(0, description="Search hits before deduplication")
    intra_run_duplicates: int = Field(0, description="Hits sharing a key with an earlier hit")
    canonical_duplicates: int = Field(0, description="New pages whose canonical link points at a known article")
    unchanged: int = Field(0, description="Stored articles seen again without content changes")
    new_articles: List[ArticleRecord] = Field(default_factory=list)
    updated_articles: List[ArticleRecord] = Field(default_factory=list)
    skipped: List[SkipEntry] = Field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.new_articles or self.updated_articles)

    def summary(self) -> Dict[str, Any]:
        """Counts for logs and the JSON report."""
        return {
            "queries": len(self.queries),
            "search_errors": len(self.search_errors),
            "raw_results": self.raw_results,
            "intra_run_duplicates": self.intra_run_duplicates,
            "canonical_duplicates": self.canonical_duplicates,
            "unchanged": self.unchanged,
            "new": len(self.new_articles),
            "updated": len(self.updated_articles),
            "skipped": len(self.skipped),
        }
