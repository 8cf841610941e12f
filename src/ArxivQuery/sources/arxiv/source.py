"""arXiv query source.

Composes URL rendering, HTTP fetching and feed parsing into one call:
render the request URL, fetch it once, then parse the body.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from ArxivQuery.core.models import FeedPage, Paper
from ArxivQuery.core.query import ARXIV_API_URL, QueryRequest
from ArxivQuery.sources.arxiv.client import ArxivApiClient
from ArxivQuery.sources.arxiv.parser import parse_feed_page
from ArxivQuery.utils.log import log


class FeedFetcher(Protocol):
    """Transport collaborator: fetch a URL and return the body text."""

    def fetch(self, url: str, *, timeout: Optional[float] = None) -> str:
        """Fetch `url`; raise `TransportError` on failure."""
        raise NotImplementedError

    def close(self) -> None:
        """Release transport resources."""
        raise NotImplementedError


@dataclass(slots=True)
class ArxivSource:
    """Runs `QueryRequest`s against the arXiv API.

    Holds no per-query state, so one instance can serve many requests.
    """

    client: FeedFetcher = field(default_factory=ArxivApiClient)
    base_url: str = ARXIV_API_URL
    timeout: Optional[float] = None

    def search(self, request: QueryRequest) -> list[Paper]:
        """Execute one request and return papers in feed order.

        Args:
            request: Query to run.

        Returns:
            Parsed papers; empty when nothing matched.

        Raises:
            TransportError: If fetching fails.
            MalformedFeedError: If the response is not well-formed XML.
        """
        return list(self.search_page(request).papers)

    def search_page(self, request: QueryRequest) -> FeedPage:
        """Execute one request and return papers plus the feed's total result count."""
        url = request.to_url(self.base_url)
        log.debug("arXiv query url: %s", url)
        body = self.client.fetch(url, timeout=self.timeout)
        page = parse_feed_page(body)
        log.info(
            "arXiv query parsed %d entries (total_results=%s)",
            len(page.papers),
            page.total_results if page.total_results is not None else "unknown",
        )
        return page

    def close(self) -> None:
        """Close the underlying client."""
        self.client.close()

    def __enter__(self) -> ArxivSource:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
