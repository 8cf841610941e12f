"""arXiv identifier helpers."""

from __future__ import annotations

import re
from urllib.parse import urlparse

_VERSION_RE = re.compile(r"v\d+$")


def normalize_arxiv_id(raw_id: str, *, keep_version: bool = False) -> str:
    """Extract the bare arXiv id from an entry id or abs/pdf URL.

    Args:
        raw_id: Raw id or URL, e.g. ``http://arxiv.org/abs/2401.00001v2``.
        keep_version: Whether to keep the version suffix (e.g. ``v2``).

    Returns:
        Normalized id such as ``2401.00001``; "" for empty input.
    """
    if not raw_id:
        return ""

    value = raw_id.strip()
    if "arxiv.org" in value:
        path = urlparse(value).path or ""
        for marker in ("/abs/", "/pdf/"):
            if marker in path:
                value = path.split(marker, 1)[1]
                break
        else:
            value = path.lstrip("/")
        if value.endswith(".pdf"):
            value = value[: -len(".pdf")]

    value = value.strip("/")
    if not value:
        return raw_id
    if not keep_version:
        value = _VERSION_RE.sub("", value)
    return value
