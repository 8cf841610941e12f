"""JSON output.

Renders papers into JSON-serializable objects and documents.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Optional

from ArxivQuery.core.models import Paper
from ArxivQuery.sources.arxiv.ids import normalize_arxiv_id


def render_json(papers: Iterable[Paper]) -> list[dict[str, Any]]:
    """Render papers into JSON-serializable dicts.

    Each dict holds every `Paper` field plus the bare ``arxiv_id``.
    """
    out: list[dict[str, Any]] = []
    for paper in papers:
        d = paper.to_dict()
        d["arxiv_id"] = normalize_arxiv_id(paper.id)
        out.append(d)
    return out


def dump_json(
    papers: Iterable[Paper],
    *,
    total_results: Optional[int] = None,
    indent: int = 2,
) -> str:
    """Render papers into a JSON document.

    Args:
        papers: Papers to render.
        total_results: Feed-level total match count, included when known.
        indent: JSON indentation.

    Returns:
        JSON text with ``count``, optional ``total_results`` and ``papers``.
    """
    items = render_json(papers)
    doc: dict[str, Any] = {"count": len(items)}
    if total_results is not None:
        doc["total_results"] = total_results
    doc["papers"] = items
    return json.dumps(doc, ensure_ascii=False, indent=indent)
