"""Candidate page fetcher."""

import re
from typing import Optional

import httpx

from .models import PageResult

HTML_CONTENT_TYPE_RE = re.compile(r"text/html|application/xhtml\+xml", re.IGNORECASE)


class PageFetcher:
    """Fetch candidate pages as HTML.

    Every failure (timeout, transport error, non-2xx status, non-HTML body)
    is reported on the result instead of raised.
    """

    def __init__(
        self,
        timeout: float = 8.0,
        user_agent: str = "Archivist/0.1 (byline discovery)",
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize page fetcher."""
        self.timeout = timeout
        self.user_agent = user_agent
        self._client = client or httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers={
                "User-Agent": user_agent,
                "Accept": "text/html,application/xhtml+xml",
            },
        )

    def fetch(self, url: str) -> PageResult:
        """Fetch a single page."""
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            error_msg = f"HTTP {status}"
            if status == 404:
                error_msg = "HTTP 404 (not found)"
            elif status == 403:
                error_msg = "HTTP 403 (forbidden)"
            elif status >= 500:
                error_msg = f"HTTP {status} (server error)"
            return PageResult(url=url, success=False, error=error_msg)
        except httpx.TimeoutException:
            return PageResult(url=url, success=False, error="request timed out")
        except httpx.HTTPError as e:
            return PageResult(url=url, success=False, error=f"{type(e).__name__}: {e}")

        content_type = response.headers.get("content-type", "")
        if not HTML_CONTENT_TYPE_RE.search(content_type):
            return PageResult(
                url=url,
                final_url=str(response.url),
                content_type=content_type,
                success=False,
                error=f"non-HTML content ({content_type or 'unknown'})",
            )

        return PageResult(
            url=url,
            final_url=str(response.url),
            html=response.text,
            content_type=content_type,
            success=True,
        )

    def close(self) -> None:
        self._client.close()
