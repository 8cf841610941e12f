"""Percent-encoding for arXiv `search_query` components."""

from __future__ import annotations

from urllib.parse import quote

ENCODED_SPACE = "%20"


def encode_component(text: str) -> str:
    """Percent-encode text for use inside a URL query value.

    Everything outside the unreserved set (letters, digits, ``-_.~``) is
    encoded, including spaces (``%20``) and quotes. Request rendering turns
    ``%20`` into ``+`` afterwards.

    Args:
        text: Raw user text.

    Returns:
        Encoded text.
    """
    return quote(text, safe="")


def spaces_to_plus(encoded: str) -> str:
    """Replace encoded spaces with ``+``."""
    return encoded.replace(ENCODED_SPACE, "+")
