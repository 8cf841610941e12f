from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from dateutil import parser as dt_parser


def _parse_dt(value: str) -> Optional[datetime]:
    """Parse an Atom timestamp (RFC 3339), or return None when empty."""
    if not value:
        return None
    return dt_parser.isoparse(value)


@dataclass(frozen=True, slots=True)
class Paper:
    """One arXiv search result.

    String fields that the feed did not provide are empty strings, and list
    fields are empty tuples. Sequences keep feed order and are not
    deduplicated.

    Attributes:
        id: Entry identifier URL (e.g. ``http://arxiv.org/abs/2401.00001v1``).
        title: Title text as it appears in the feed.
        authors: Author names.
        abstract: Abstract text, trimmed and with newlines removed.
        published: First-version timestamp string.
        updated: Latest-version timestamp string.
        doi: DOI link, or "".
        comments: Author comments.
        journal_ref: Journal reference, or "".
        pdf_url: PDF link, or "".
        primary_category: Primary subject category code.
        categories: All subject category codes.
    """

    id: str = ""
    title: str = ""
    authors: tuple[str, ...] = ()
    abstract: str = ""
    published: str = ""
    updated: str = ""
    doi: str = ""
    comments: tuple[str, ...] = ()
    journal_ref: str = ""
    pdf_url: str = ""
    primary_category: str = ""
    categories: tuple[str, ...] = ()

    def published_at(self) -> Optional[datetime]:
        """Return `published` as a timezone-aware datetime, or None."""
        return _parse_dt(self.published)

    def updated_at(self) -> Optional[datetime]:
        """Return `updated` as a timezone-aware datetime, or None."""
        return _parse_dt(self.updated)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable mapping of all fields."""
        return {
            "id": self.id,
            "title": self.title,
            "authors": list(self.authors),
            "abstract": self.abstract,
            "published": self.published,
            "updated": self.updated,
            "doi": self.doi,
            "comments": list(self.comments),
            "journal_ref": self.journal_ref,
            "pdf_url": self.pdf_url,
            "primary_category": self.primary_category,
            "categories": list(self.categories),
        }


@dataclass(slots=True)
class PaperDraft:
    """Mutable accumulator for one feed entry; `seal` produces the `Paper`."""

    id: str = ""
    title: str = ""
    authors: list[str] = field(default_factory=list)
    abstract: str = ""
    published: str = ""
    updated: str = ""
    doi: str = ""
    comments: list[str] = field(default_factory=list)
    journal_ref: str = ""
    pdf_url: str = ""
    primary_category: str = ""
    categories: list[str] = field(default_factory=list)

    def seal(self) -> Paper:
        return Paper(
            id=self.id,
            title=self.title,
            authors=tuple(self.authors),
            abstract=self.abstract,
            published=self.published,
            updated=self.updated,
            doi=self.doi,
            comments=tuple(self.comments),
            journal_ref=self.journal_ref,
            pdf_url=self.pdf_url,
            primary_category=self.primary_category,
            categories=tuple(self.categories),
        )


@dataclass(frozen=True, slots=True)
class FeedPage:
    """Papers parsed from one feed, plus the feed-level result count.

    Attributes:
        papers: Papers in document order.
        total_results: ``opensearch:totalResults`` if the feed provides it.
    """

    papers: tuple[Paper, ...] = ()
    total_results: Optional[int] = None
