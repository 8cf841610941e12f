"""Error types raised by ArxivQuery.

All library errors derive from `ArxivQueryError` so callers can catch one base
class at an application boundary.
"""

from __future__ import annotations

from typing import Optional


class ArxivQueryError(Exception):
    """Base class for all ArxivQuery errors."""


class ContractError(ArxivQueryError, ValueError):
    """Invalid builder or request input, detected before any network call."""


class TransportError(ArxivQueryError):
    """Network or HTTP failure while fetching a feed.

    Attributes:
        url: Request URL that failed.
        status_code: HTTP status code when a response was received.
    """

    def __init__(self, message: str, *, url: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MalformedFeedError(ArxivQueryError):
    """Feed body is not well-formed XML.

    Attributes:
        line: 1-based line of the parse error, if known.
        column: 0-based column of the parse error, if known.
    """

    def __init__(self, message: str, *, line: Optional[int] = None, column: Optional[int] = None) -> None:
        super().__init__(message)
        self.line = line
        self.column = column
