"""arXiv search query expressions.

A query is a small immutable tree:

- `QueryTerm` leaves: one searchable field plus raw user text, rendered as
  ``<prefix>:"<percent-encoded text>"``.
- Combinators `And` / `Or` / `AndNot` over one or more child expressions,
  rendered as the children joined by ``+AND+`` / ``+OR+`` / ``+ANDNOT+``.
- `Group`, rendered as ``%28`` + children + ``%29``.

The arXiv API reads operators as a flat left-to-right token stream. Nothing
here adds parentheses implicitly: mixing And and Or without a `Group` changes
the meaning of the query.

`QueryRequest` carries the expression together with the submitted-date range,
pagination and sort parameters, and renders the final request URL.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import re
from typing import Optional, TypeVar, Union

from ArxivQuery.core.encoding import encode_component, spaces_to_plus
from ArxivQuery.core.errors import ContractError

ARXIV_API_URL = "http://export.arxiv.org/api/query"

_TIMESTAMP_RE = re.compile(r"[0-9]{12}")


class Field(str, Enum):
    """Searchable arXiv fields, valued by their query prefix."""

    TITLE = "ti"
    AUTHOR = "au"
    ABSTRACT = "abs"
    COMMENT = "co"
    JOURNAL_REF = "jr"
    SUBJECT_CATEGORY = "cat"
    REPORT_NUMBER = "rn"
    ID = "id"
    ALL = "all"


class Category(str, Enum):
    """Common arXiv computer-science subject categories."""

    CS_AI = "cs.AI"
    CS_CL = "cs.CL"
    CS_LG = "cs.LG"
    CS_GT = "cs.GT"
    CS_CV = "cs.CV"
    CS_CR = "cs.CR"
    CS_CC = "cs.CC"
    CS_CE = "cs.CE"
    CS_CY = "cs.CY"
    CS_DS = "cs.DS"
    CS_DM = "cs.DM"
    CS_DC = "cs.DC"
    CS_ET = "cs.ET"
    CS_FL = "cs.FL"
    CS_GL = "cs.GL"
    CS_GR = "cs.GR"
    CS_AR = "cs.AR"
    CS_HC = "cs.HC"
    CS_IR = "cs.IR"


class SortBy(str, Enum):
    """Sort keys accepted by the `sortBy` parameter."""

    RELEVANCE = "relevance"
    LAST_UPDATED_DATE = "lastUpdatedDate"
    SUBMITTED_DATE = "submittedDate"


class SortOrder(str, Enum):
    """Sort directions accepted by the `sortOrder` parameter."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True, slots=True)
class QueryExpression:
    """Base node for search expressions.

    Operators are shorthand for two-child combinators:
    ``a & b`` is ``And(a, b)``, ``a | b`` is ``Or(a, b)``, ``a - b`` is
    ``AndNot(a, b)``.
    """

    def __and__(self, other: QueryExpression) -> And:
        return And((self, other))

    def __or__(self, other: QueryExpression) -> Or:
        return Or((self, other))

    def __sub__(self, other: QueryExpression) -> AndNot:
        return AndNot((self, other))

    def render(self) -> str:
        """Render this expression into its encoded `search_query` form."""
        return render(self)


@dataclass(frozen=True, slots=True)
class QueryTerm(QueryExpression):
    """Field match: ``<prefix>:"<text>"``."""

    field: Field
    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.field, Field):
            raise ContractError(f"Unknown query field: {self.field!r}")
        if not isinstance(self.text, str):
            raise ContractError(f"Query text must be a string, got {type(self.text).__name__}")


@dataclass(frozen=True, slots=True)
class _Combinator(QueryExpression):
    children: tuple[QueryExpression, ...]

    def __post_init__(self) -> None:
        children = tuple(self.children)
        if not children:
            raise ContractError(f"{type(self).__name__} requires at least one child expression")
        for idx, child in enumerate(children):
            if not isinstance(child, QueryExpression):
                raise ContractError(
                    f"{type(self).__name__} child {idx} is not a query expression: {child!r}"
                )
        object.__setattr__(self, "children", children)


@dataclass(frozen=True, slots=True)
class And(_Combinator):
    """Children joined by ``AND``."""


@dataclass(frozen=True, slots=True)
class Or(_Combinator):
    """Children joined by ``OR``."""


@dataclass(frozen=True, slots=True)
class AndNot(_Combinator):
    """Children joined by ``ANDNOT``."""


@dataclass(frozen=True, slots=True)
class Group(_Combinator):
    """Children wrapped in encoded parentheses."""


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive submitted-date window in ``YYYYMMDDHHMM`` form.

    Not a `QueryExpression`: the range is always ANDed onto the whole query by
    `QueryRequest` and cannot be nested in combinators.
    """

    start: str
    end: str

    def __post_init__(self) -> None:
        for name, value in (("start", self.start), ("end", self.end)):
            if not isinstance(value, str) or not _TIMESTAMP_RE.fullmatch(value):
                raise ContractError(f"submitted date {name} must be YYYYMMDDHHMM, got {value!r}")

    def render(self) -> str:
        return f"submittedDate:[{self.start}+TO+{self.end}]"


_OPERATOR_TOKENS = {
    And: "+AND+",
    Or: "+OR+",
    AndNot: "+ANDNOT+",
}


def render(expr: QueryExpression) -> str:
    """Render an expression tree into its encoded `search_query` form.

    Args:
        expr: Expression to render.

    Returns:
        Encoded expression string.

    Raises:
        ContractError: If `expr` is not a known expression node.
    """
    match expr:
        case QueryTerm(field=field, text=text):
            return f'{field.value}:"{encode_component(text)}"'
        case Group(children=children):
            return "%28" + "".join(render(child) for child in children) + "%29"
        case And(children=children) | Or(children=children) | AndNot(children=children):
            return _OPERATOR_TOKENS[type(expr)].join(render(child) for child in children)
        case _:
            raise ContractError(f"Unsupported query node: {expr!r}")


def _children(exprs: tuple) -> tuple:
    if len(exprs) == 1 and isinstance(exprs[0], (list, tuple)):
        return tuple(exprs[0])
    return exprs


def term(field: Field, text: str) -> QueryTerm:
    return QueryTerm(field, text)


def title(text: str) -> QueryTerm:
    return QueryTerm(Field.TITLE, text)


def author(text: str) -> QueryTerm:
    return QueryTerm(Field.AUTHOR, text)


def abstract(text: str) -> QueryTerm:
    return QueryTerm(Field.ABSTRACT, text)


def comment(text: str) -> QueryTerm:
    return QueryTerm(Field.COMMENT, text)


def journal_ref(text: str) -> QueryTerm:
    return QueryTerm(Field.JOURNAL_REF, text)


def subject_category(category: Union[Category, str]) -> QueryTerm:
    """Match a subject category, e.g. ``Category.CS_AI`` or ``"math.CO"``."""
    value = category.value if isinstance(category, Category) else category
    return QueryTerm(Field.SUBJECT_CATEGORY, value)


def report_number(text: str) -> QueryTerm:
    return QueryTerm(Field.REPORT_NUMBER, text)


def identifier(text: str) -> QueryTerm:
    return QueryTerm(Field.ID, text)


def all_fields(text: str) -> QueryTerm:
    return QueryTerm(Field.ALL, text)


def and_(*exprs: QueryExpression) -> And:
    """Join expressions with ``AND``; accepts varargs or a single list."""
    return And(_children(exprs))


def or_(*exprs: QueryExpression) -> Or:
    """Join expressions with ``OR``; accepts varargs or a single list."""
    return Or(_children(exprs))


def and_not(*exprs: QueryExpression) -> AndNot:
    """Join expressions with ``ANDNOT``; accepts varargs or a single list."""
    return AndNot(_children(exprs))


def group(*exprs: QueryExpression) -> Group:
    """Parenthesize expressions so they bind tighter than the surrounding operator."""
    return Group(_children(exprs))


def submitted_date(start: str, end: str) -> DateRange:
    return DateRange(start, end)


_E = TypeVar("_E", SortBy, SortOrder)


def coerce_enum(enum_cls: type[_E], value: object, name: str) -> _E:
    """Coerce enum members, API values ("submittedDate") or names ("submitted-date")."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value)
        except ValueError:
            key = value.strip().replace("-", "_").upper()
            if key in enum_cls.__members__:
                return enum_cls.__members__[key]
    allowed = ", ".join(member.value for member in enum_cls)
    raise ContractError(f"{name} must be one of: {allowed}; got {value!r}")


def _check_count(value: object, name: str) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ContractError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ContractError(f"{name} must be non-negative, got {value}")


@dataclass(frozen=True, slots=True)
class QueryRequest:
    """A complete arXiv API request.

    Attributes:
        expression: Search expression.
        submitted_date: Optional submitted-date range, ANDed onto the expression.
        start: Optional zero-based result offset.
        max_results: Optional result cap.
        sort_by: Optional sort key.
        sort_order: Optional sort direction.

    Unset optional fields are not sent, so the API defaults apply.
    """

    expression: QueryExpression
    submitted_date: Optional[DateRange] = None
    start: Optional[int] = None
    max_results: Optional[int] = None
    sort_by: Optional[SortBy] = None
    sort_order: Optional[SortOrder] = None

    def __post_init__(self) -> None:
        if not isinstance(self.expression, QueryExpression):
            raise ContractError(f"expression must be a query expression, got {self.expression!r}")
        if self.submitted_date is not None and not isinstance(self.submitted_date, DateRange):
            raise ContractError(f"submitted_date must be a DateRange, got {self.submitted_date!r}")
        _check_count(self.start, "start")
        _check_count(self.max_results, "max_results")
        if self.sort_by is not None:
            object.__setattr__(self, "sort_by", coerce_enum(SortBy, self.sort_by, "sort_by"))
        if self.sort_order is not None:
            object.__setattr__(self, "sort_order", coerce_enum(SortOrder, self.sort_order, "sort_order"))

    def with_submitted_date(self, start: str, end: str) -> QueryRequest:
        return replace(self, submitted_date=DateRange(start, end))

    def with_start(self, start: int) -> QueryRequest:
        return replace(self, start=start)

    def with_max_results(self, max_results: int) -> QueryRequest:
        return replace(self, max_results=max_results)

    def with_sort(self, sort_by: SortBy | str, sort_order: SortOrder | str | None = None) -> QueryRequest:
        return replace(self, sort_by=sort_by, sort_order=sort_order if sort_order is not None else self.sort_order)

    def render_query(self) -> str:
        """Render the `search_query` value plus the trailing request parameters.

        Order is fixed: expression, date range, ``&start``, ``&max_results``,
        ``&sortBy``, ``&sortOrder``. Only parameters that were set appear.
        """
        query = render(self.expression)
        if self.submitted_date is not None:
            query = f"{query}+AND+{self.submitted_date.render()}"
        query = spaces_to_plus(query)

        if self.start is not None:
            query += f"&start={self.start}"
        if self.max_results is not None:
            query += f"&max_results={self.max_results}"
        if self.sort_by is not None:
            query += f"&sortBy={self.sort_by.value}"
        if self.sort_order is not None:
            query += f"&sortOrder={self.sort_order.value}"
        return query

    def to_url(self, base_url: str = ARXIV_API_URL) -> str:
        """Return the full request URL."""
        return f"{base_url}?search_query={self.render_query()}"
