"""arXiv API client.

Issues a single HTTP GET per request and returns the raw feed XML. Failures
are raised as `TransportError` straight away, with no retry or backoff.
"""

from __future__ import annotations

from typing import Optional

import requests

from ArxivQuery.core.errors import TransportError
from ArxivQuery.utils.log import log

DEFAULT_TIMEOUT = 30.0

HEADERS = {
    "User-Agent": "arxiv-query/0.1",
    "Accept": "application/atom+xml,application/xml;q=0.9,*/*;q=0.8",
}


class ArxivApiClient:
    """Low-level HTTP client for the arXiv Atom API.

    Only fetches; query rendering and feed parsing live elsewhere.
    """

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None) -> None:
        """Initialize the client.

        Args:
            timeout: Default request timeout in seconds.
            session: Optional session to reuse; one is created otherwise.
        """
        self.timeout = timeout
        self._session = session or requests.Session()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def __enter__(self) -> ArxivApiClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def fetch(self, url: str, *, timeout: Optional[float] = None) -> str:
        """Fetch a fully rendered arXiv API URL.

        The URL is sent as-is; it is already percent-encoded by
        `QueryRequest.to_url`.

        Args:
            url: Request URL.
            timeout: Request timeout in seconds; defaults to the client timeout.

        Returns:
            Response body text (Atom XML).

        Raises:
            TransportError: On connection errors, timeouts, or non-2xx responses.
        """
        timeout = timeout if timeout is not None else self.timeout
        log.debug("arXiv request: url=%s timeout=%s", url, timeout)
        try:
            resp = self._session.get(url, headers=HEADERS, timeout=timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"arXiv request failed: {e}", url=url) from e

        try:
            resp.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise TransportError(
                f"arXiv returned HTTP {resp.status_code}",
                url=url,
                status_code=resp.status_code,
            ) from e

        log.debug("arXiv response ok: status=%s bytes=%s", resp.status_code, len(resp.content))
        return resp.text
