"""Click CLI interface definitions.

Defines the command-line interface and routes commands to the runner.
"""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Any, Callable

import click
from dotenv import load_dotenv

from ArxivQuery.cli.commands import QueryOptions, build_request
from ArxivQuery.cli.runner import CommandRunner
from ArxivQuery.config import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    default_config,
    load_config,
    load_config_with_defaults,
)
from ArxivQuery.core.errors import ContractError
from ArxivQuery.core.query import Field, QueryRequest, SortBy, SortOrder
from ArxivQuery.renderers import OUTPUT_FORMATS

# CLI option name -> searchable field.
_TERM_OPTIONS: dict[str, Field] = {
    "title": Field.TITLE,
    "author": Field.AUTHOR,
    "abstract": Field.ABSTRACT,
    "comment": Field.COMMENT,
    "journal_ref": Field.JOURNAL_REF,
    "category": Field.SUBJECT_CATEGORY,
    "report_number": Field.REPORT_NUMBER,
    "arxiv_id": Field.ID,
    "all_fields": Field.ALL,
}
_EXCLUDE_OPTIONS: dict[str, Field] = {
    "exclude_title": Field.TITLE,
    "exclude_author": Field.AUTHOR,
    "exclude_category": Field.SUBJECT_CATEGORY,
}


def _resolve_config(config_path: Path) -> AppConfig:
    """Load the config file, merged over defaults when both exist.

    A missing file is only accepted for the default path, in which case the
    built-in defaults are used.
    """
    if not config_path.exists():
        if config_path == DEFAULT_CONFIG_PATH:
            return default_config()
        raise click.BadParameter(f"Config file not found: {config_path}", param_hint="--config")
    if config_path != DEFAULT_CONFIG_PATH and DEFAULT_CONFIG_PATH.exists():
        return load_config_with_defaults(config_path, DEFAULT_CONFIG_PATH)
    return load_config(config_path)


def query_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the shared query-building options to a command."""
    options = [
        click.option("--title", "title", multiple=True, help="Match in title (repeatable)."),
        click.option("--author", "author", multiple=True, help="Match author name (repeatable)."),
        click.option("--abstract", "abstract", multiple=True, help="Match in abstract (repeatable)."),
        click.option("--comment", "comment", multiple=True, help="Match in comments (repeatable)."),
        click.option("--journal-ref", "journal_ref", multiple=True, help="Match journal reference (repeatable)."),
        click.option("--category", "category", multiple=True, help="Subject category, e.g. cs.AI (repeatable)."),
        click.option("--report-number", "report_number", multiple=True, help="Match report number (repeatable)."),
        click.option("--id", "arxiv_id", multiple=True, help="Match arXiv identifier (repeatable)."),
        click.option("--all", "all_fields", multiple=True, help="Match in all fields (repeatable)."),
        click.option("--exclude-title", "exclude_title", multiple=True, help="Exclude title matches (repeatable)."),
        click.option("--exclude-author", "exclude_author", multiple=True, help="Exclude author matches (repeatable)."),
        click.option(
            "--exclude-category", "exclude_category", multiple=True, help="Exclude a subject category (repeatable)."
        ),
        click.option(
            "--match",
            type=click.Choice(["all", "any"]),
            default="all",
            show_default=True,
            help="Join terms with AND (all) or OR (any).",
        ),
        click.option("--submitted-from", help="Submitted-date lower bound, YYYYMMDDHHMM."),
        click.option("--submitted-to", help="Submitted-date upper bound, YYYYMMDDHHMM."),
        click.option("--start", type=click.IntRange(min=0), help="Zero-based result offset."),
        click.option("--max-results", type=click.IntRange(min=0), help="Maximum number of results."),
        click.option("--sort-by", type=click.Choice([s.value for s in SortBy]), help="Sort key."),
        click.option("--sort-order", type=click.Choice([s.value for s in SortOrder]), help="Sort order."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_request(ctx: click.Context, params: dict[str, Any]) -> QueryRequest:
    options = QueryOptions(
        terms={field: params[name] for name, field in _TERM_OPTIONS.items() if params[name]},
        excludes={field: params[name] for name, field in _EXCLUDE_OPTIONS.items() if params[name]},
        match=params["match"],
        submitted_from=params["submitted_from"],
        submitted_to=params["submitted_to"],
        start=params["start"],
        max_results=params["max_results"],
        sort_by=params["sort_by"],
        sort_order=params["sort_order"],
    )
    try:
        return build_request(options, ctx.obj)
    except (ContractError, ValueError) as e:
        raise click.UsageError(str(e), ctx=ctx) from e


def _pop_query_params(func: Callable[..., Any]) -> Callable[..., Any]:
    """Pass query options to the command as one `params` dict."""
    names = [*_TERM_OPTIONS, *_EXCLUDE_OPTIONS, "match", "submitted_from", "submitted_to", "start",
             "max_results", "sort_by", "sort_order"]

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        params = {name: kwargs.pop(name) for name in names}
        return func(*args, params=params, **kwargs)

    return wrapper


@click.group(help="ArxivQuery: build arXiv API queries and parse the results.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from a .env file before reading config.
    """
    load_dotenv()
    ctx.obj = _resolve_config(config_path)


@cli.command("search")
@query_options
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="text",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--output",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write results to this file instead of stdout.",
)
@_pop_query_params
@click.pass_context
def search_cmd(ctx: click.Context, params: dict[str, Any], output_format: str, output: Path | None) -> None:
    """Search arXiv and print the matching papers.

    Raises:
        click.Abort: When the search fails.
    """
    request = _build_request(ctx, params)
    runner = CommandRunner(ctx.obj)
    rendered = runner.run_search(ctx.command.name, request, output_format=output_format, output=output)
    if rendered:
        click.echo(rendered, nl=False)


@cli.command("url")
@query_options
@_pop_query_params
@click.pass_context
def url_cmd(ctx: click.Context, params: dict[str, Any]) -> None:
    """Print the request URL for a query without fetching it."""
    request = _build_request(ctx, params)
    click.echo(request.to_url(ctx.obj.api.base_url))
