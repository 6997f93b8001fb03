"""Search provider client."""

from typing import List, Optional, Protocol

import httpx

from ..errors import MissingCredentialsError
from .models import SearchHit


class SearchProvider(Protocol):
    """Interface for running a single free-text query."""

    def search(self, query: str) -> List[SearchHit]:
        """Return hits for a query; may be empty."""
        ...


def build_queries(author_name: str) -> List[str]:
    """Fixed queries used to find bylines for an author."""
    return [
        f'"{author_name}"',
        f'"by {author_name}"',
        f'author:"{author_name}"',
    ]


class GoogleSearchClient:
    """Google Custom Search JSON API client.

    Args:
        api_key: API key.
        engine_id: Programmable search engine ID (``cx``).
        date_window: ``dateRestrict`` value such as ``d14``.
        num_results: Results per query (the API caps this at 10).
        timeout: Request timeout in seconds.
        endpoint: API endpoint.
        client: Optional preconfigured httpx client.
    """

    def __init__(
        self,
        api_key: Optional[str],
        engine_id: Optional[str],
        date_window: str = "d14",
        num_results: int = 10,
        timeout: float = 15.0,
        endpoint: str = "https://www.googleapis.com/customsearch/v1",
        client: Optional[httpx.Client] = None,
    ) -> None:
        if not api_key or not engine_id:
            raise MissingCredentialsError(
                "Search credentials required. Set GOOGLE_API_KEY and SEARCH_ENGINE_ID."
            )
        self.api_key = api_key
        self.engine_id = engine_id
        self.date_window = date_window
        self.num_results = num_results
        self.endpoint = endpoint
        self._client = client or httpx.Client(timeout=timeout)

    def search(self, query: str) -> List[SearchHit]:
        """Run one query.

        Raises:
            httpx.HTTPError: On transport failure or non-2xx response.
        """
        params = {
            "key": self.api_key,
            "cx": self.engine_id,
            "q": query,
            "num": self.num_results,
        }
        if self.date_window:
            params["dateRestrict"] = self.date_window

        response = self._client.get(self.endpoint, params=params)
        response.raise_for_status()
        data = response.json()

        hits = []
        for item in data.get("items") or []:
            link = item.get("link")
            if not link:
                continue
            pagemap = item.get("pagemap") or {}
            hits.append(
                SearchHit(
                    title=item.get("title") or "",
                    link=link,
                    snippet=item.get("snippet") or "",
                    metatags=pagemap.get("metatags") or [],
                )
            )
        return hits

    def close(self) -> None:
        self._client.close()
