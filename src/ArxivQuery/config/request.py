"""Request defaults applied when the CLI does not set a value."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ArxivQuery.config.common import expect_optional_int, expect_optional_str, get_section
from ArxivQuery.core.query import SortBy, SortOrder, coerce_enum


@dataclass(frozen=True, slots=True)
class RequestDefaults:
    """Validated ``request`` section; None means "let the API decide"."""

    max_results: Optional[int] = None
    sort_by: Optional[SortBy] = None
    sort_order: Optional[SortOrder] = None


def load_request_defaults(raw: Mapping[str, Any]) -> RequestDefaults:
    """Load the optional ``request`` section.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If a sort value is unknown (raised as `ContractError`).
    """
    section = get_section(raw, "request", required=False)
    sort_by = expect_optional_str(section.get("sort_by"), "request.sort_by")
    sort_order = expect_optional_str(section.get("sort_order"), "request.sort_order")
    return RequestDefaults(
        max_results=expect_optional_int(section.get("max_results"), "request.max_results"),
        sort_by=coerce_enum(SortBy, sort_by, "request.sort_by") if sort_by is not None else None,
        sort_order=coerce_enum(SortOrder, sort_order, "request.sort_order") if sort_order is not None else None,
    )


def check_request_defaults(config: RequestDefaults) -> None:
    if config.max_results is not None and config.max_results < 0:
        raise ValueError("request.max_results must be non-negative")
