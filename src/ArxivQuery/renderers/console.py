"""Console text output.

Renders a list of `Paper` into human-friendly text.
"""

from __future__ import annotations

from typing import Iterable

from ArxivQuery.core.models import Paper
from ArxivQuery.sources.arxiv.ids import normalize_arxiv_id


def _fmt_date(paper: Paper, which: str) -> str:
    """Format `published` or `updated` as YYYY-mm-dd, or "-" when missing."""
    dt = paper.published_at() if which == "published" else paper.updated_at()
    if not dt:
        return "-"
    return dt.strftime("%Y-%m-%d")


def render_text(papers: Iterable[Paper]) -> str:
    """Render papers into a human-readable text block.

    Args:
        papers: Iterable of papers.

    Returns:
        A formatted string ready to be printed; "No papers found." when empty.
    """
    lines: list[str] = []
    for idx, paper in enumerate(papers, start=1):
        title = " ".join(paper.title.split())
        arxiv_id = normalize_arxiv_id(paper.id, keep_version=True)
        lines.append(f"{idx}. {title}" + (f" [{arxiv_id}]" if arxiv_id else ""))
        lines.append(f"   Authors: {', '.join(paper.authors)}")
        if paper.primary_category:
            others = [c for c in paper.categories if c != paper.primary_category]
            suffix = f" (also: {', '.join(others)})" if others else ""
            lines.append(f"   Category: {paper.primary_category}{suffix}")
        lines.append(f"   Published: {_fmt_date(paper, 'published')}  Updated: {_fmt_date(paper, 'updated')}")
        if paper.journal_ref:
            lines.append(f"   Journal: {paper.journal_ref}")
        for comment in paper.comments:
            lines.append(f"   Comment: {comment}")
        if paper.doi:
            lines.append(f"   DOI: {paper.doi}")
        if paper.pdf_url:
            lines.append(f"   PDF: {paper.pdf_url}")
        lines.append("")

    if not lines:
        return "No papers found.\n"
    return "\n".join(lines).rstrip() + "\n"
