"""API configuration: endpoint and transport timeout."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any, Mapping

from ArxivQuery.config.common import expect_float, expect_str, get_section
from ArxivQuery.core.query import ARXIV_API_URL
from ArxivQuery.sources.arxiv.client import DEFAULT_TIMEOUT

BASE_URL_ENV = "ARXIV_QUERY_BASE_URL"


@dataclass(frozen=True, slots=True)
class ApiConfig:
    """Validated ``api`` section.

    Attributes:
        base_url: Query endpoint, without the ``?search_query=`` part.
        timeout: Request timeout in seconds.
    """

    base_url: str = ARXIV_API_URL
    timeout: float = DEFAULT_TIMEOUT


def load_api(raw: Mapping[str, Any]) -> ApiConfig:
    """Load the optional ``api`` section.

    The ``ARXIV_QUERY_BASE_URL`` environment variable, when set, takes
    precedence over ``api.base_url``.
    """
    section = get_section(raw, "api", required=False)
    base_url = expect_str(section.get("base_url", ARXIV_API_URL), "api.base_url")
    env_url = os.getenv(BASE_URL_ENV)
    if env_url:
        base_url = env_url
    return ApiConfig(
        base_url=base_url.strip(),
        timeout=expect_float(section.get("timeout", DEFAULT_TIMEOUT), "api.timeout"),
    )


def check_api(config: ApiConfig) -> None:
    if not config.base_url.startswith(("http://", "https://")):
        raise ValueError("api.base_url must be an http(s) URL")
    if "?" in config.base_url:
        raise ValueError("api.base_url must not contain a query string")
    if config.timeout <= 0:
        raise ValueError("api.timeout must be positive")
