"""Output renderers for query results (console text, JSON)."""

from __future__ import annotations

from typing import Optional, Sequence

from ArxivQuery.core.models import Paper
from ArxivQuery.renderers.console import render_text
from ArxivQuery.renderers.json import dump_json, render_json

OUTPUT_FORMATS = ("text", "json")


def render_papers(papers: Sequence[Paper], fmt: str, *, total_results: Optional[int] = None) -> str:
    """Render papers in the given output format.

    Raises:
        ValueError: If `fmt` is not one of `OUTPUT_FORMATS`.
    """
    if fmt == "text":
        return render_text(papers)
    if fmt == "json":
        return dump_json(papers, total_results=total_results) + "\n"
    raise ValueError(f"Unsupported output format: {fmt}")


__all__ = [
    "OUTPUT_FORMATS",
    "dump_json",
    "render_json",
    "render_papers",
    "render_text",
]
