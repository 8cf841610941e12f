"""ArxivQuery: arXiv API query builder and Atom feed parser.

Example:
    >>> from ArxivQuery import QueryRequest, and_, or_, group, title, subject_category, Category
    >>> expr = and_(
    ...     or_(title("ai"), title("llm")),
    ...     group(or_(subject_category(Category.CS_AI), subject_category(Category.CS_LG))),
    ... )
    >>> request = QueryRequest(expr, max_results=100).with_submitted_date("202412010000", "202412012359")
    >>> with ArxivSource() as source:  # doctest: +SKIP
    ...     papers = source.search(request)
"""

from ArxivQuery.core.errors import ArxivQueryError, ContractError, MalformedFeedError, TransportError
from ArxivQuery.core.models import FeedPage, Paper
from ArxivQuery.core.query import (
    ARXIV_API_URL,
    And,
    AndNot,
    Category,
    DateRange,
    Field,
    Group,
    Or,
    QueryExpression,
    QueryRequest,
    QueryTerm,
    SortBy,
    SortOrder,
    abstract,
    all_fields,
    and_,
    and_not,
    author,
    comment,
    group,
    identifier,
    journal_ref,
    or_,
    render,
    report_number,
    subject_category,
    submitted_date,
    term,
    title,
)
from ArxivQuery.sources.arxiv.client import ArxivApiClient
from ArxivQuery.sources.arxiv.ids import normalize_arxiv_id
from ArxivQuery.sources.arxiv.parser import parse_feed, parse_feed_page
from ArxivQuery.sources.arxiv.source import ArxivSource

__all__ = [
    # Query building
    "ARXIV_API_URL",
    "QueryExpression",
    "QueryTerm",
    "And",
    "Or",
    "AndNot",
    "Group",
    "DateRange",
    "Field",
    "Category",
    "SortBy",
    "SortOrder",
    "QueryRequest",
    "term",
    "title",
    "author",
    "abstract",
    "comment",
    "journal_ref",
    "subject_category",
    "report_number",
    "identifier",
    "all_fields",
    "and_",
    "or_",
    "and_not",
    "group",
    "submitted_date",
    "render",
    # Records and parsing
    "Paper",
    "FeedPage",
    "parse_feed",
    "parse_feed_page",
    "normalize_arxiv_id",
    # Transport
    "ArxivApiClient",
    "ArxivSource",
    # Errors
    "ArxivQueryError",
    "ContractError",
    "MalformedFeedError",
    "TransportError",
]
