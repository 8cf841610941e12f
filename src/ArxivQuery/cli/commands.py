"""Command implementations for the ArxivQuery CLI.

Turns CLI option values into a `QueryRequest`, runs it, and renders the
results, keeping business logic out of the click layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence

from ArxivQuery.config import AppConfig
from ArxivQuery.core.query import (
    AndNot,
    Field,
    Group,
    QueryExpression,
    QueryRequest,
    QueryTerm,
    and_,
    or_,
    submitted_date,
)
from ArxivQuery.renderers import render_papers
from ArxivQuery.sources.arxiv.source import ArxivSource
from ArxivQuery.utils.log import log


@dataclass(frozen=True, slots=True)
class QueryOptions:
    """Raw query-related CLI option values.

    Attributes:
        terms: Field -> values to match, in option order.
        excludes: Field -> values to exclude via ANDNOT.
        match: "all" joins terms with AND, "any" with OR.
        submitted_from: Optional YYYYMMDDHHMM lower bound.
        submitted_to: Optional YYYYMMDDHHMM upper bound.
        start: Optional result offset.
        max_results: Optional result cap; falls back to config.
        sort_by: Optional sort key; falls back to config.
        sort_order: Optional sort order; falls back to config.
    """

    terms: Mapping[Field, Sequence[str]]
    excludes: Mapping[Field, Sequence[str]]
    match: str = "all"
    submitted_from: Optional[str] = None
    submitted_to: Optional[str] = None
    start: Optional[int] = None
    max_results: Optional[int] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None


def _collect_terms(by_field: Mapping[Field, Sequence[str]]) -> list[QueryTerm]:
    return [QueryTerm(field, value) for field, values in by_field.items() for value in values]


def build_expression(options: QueryOptions) -> QueryExpression:
    """Combine CLI terms into one expression.

    Terms are joined by AND (``match="all"``) or OR (``match="any"``).
    Excluded terms follow via ANDNOT; an OR-joined base is grouped first
    so the exclusion applies to the whole disjunction.

    Raises:
        ValueError: If no search terms were given.
    """
    terms = _collect_terms(options.terms)
    if not terms:
        raise ValueError("At least one search term option is required")

    base: QueryExpression
    if len(terms) == 1:
        base = terms[0]
    elif options.match == "any":
        base = or_(terms)
    else:
        base = and_(terms)

    excluded = _collect_terms(options.excludes)
    if not excluded:
        return base
    if options.match == "any" and len(terms) > 1:
        base = Group((base,))
    return AndNot((base, *excluded))


def build_request(options: QueryOptions, config: AppConfig) -> QueryRequest:
    """Build a `QueryRequest` from CLI options, falling back to config defaults.

    Raises:
        ValueError: If options are inconsistent or invalid (`ContractError`
            for invalid values).
    """
    if (options.submitted_from is None) != (options.submitted_to is None):
        raise ValueError("--submitted-from and --submitted-to must be given together")

    date_range = None
    if options.submitted_from is not None and options.submitted_to is not None:
        date_range = submitted_date(options.submitted_from, options.submitted_to)

    defaults = config.request
    return QueryRequest(
        expression=build_expression(options),
        submitted_date=date_range,
        start=options.start,
        max_results=options.max_results if options.max_results is not None else defaults.max_results,
        sort_by=options.sort_by or defaults.sort_by,
        sort_order=options.sort_order or defaults.sort_order,
    )


@dataclass(slots=True)
class SearchCommand:
    """Runs one request and renders the results.

    Writes to `output` when set; otherwise returns the rendered text for the
    caller to print.
    """

    source: ArxivSource
    request: QueryRequest
    output_format: str = "text"
    output: Optional[Path] = None

    def execute(self) -> str:
        """Execute the search.

        Returns:
            Rendered output ("" when written to a file).
        """
        log.info("Query: %s", self.request.render_query())
        page = self.source.search_page(self.request)
        log.info("Fetched %d papers", len(page.papers))

        rendered = render_papers(page.papers, self.output_format, total_results=page.total_results)
        if self.output is None:
            return rendered

        self.output.parent.mkdir(parents=True, exist_ok=True)
        self.output.write_text(rendered, encoding="utf-8")
        log.info("Wrote %d papers to %s", len(page.papers), self.output)
        return ""
