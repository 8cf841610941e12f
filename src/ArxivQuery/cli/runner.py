"""Command runner for coordinating CLI execution.

Handles logging configuration, source lifecycle and error reporting.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ArxivQuery.cli.commands import SearchCommand
from ArxivQuery.config import AppConfig
from ArxivQuery.core.query import QueryRequest
from ArxivQuery.sources.arxiv.client import ArxivApiClient
from ArxivQuery.sources.arxiv.source import ArxivSource
from ArxivQuery.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with resource cleanup."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def create_source(self) -> ArxivSource:
        """Create an `ArxivSource` from the api config."""
        api = self.config.api
        return ArxivSource(
            client=ArxivApiClient(timeout=api.timeout),
            base_url=api.base_url,
            timeout=api.timeout,
        )

    def run_search(
        self,
        action: str,
        request: QueryRequest,
        *,
        output_format: str,
        output: Optional[Path] = None,
    ) -> str:
        """Execute a search with logging and source cleanup.

        Args:
            action: The CLI command name (e.g. 'search').
            request: Request to run.
            output_format: "text" or "json".
            output: Optional file to write results to.

        Returns:
            Rendered output for the terminal ("" when written to a file).

        Raises:
            click.Abort: When the search fails.
        """
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            with self.create_source() as source:
                command = SearchCommand(
                    source=source,
                    request=request,
                    output_format=output_format,
                    output=output,
                )
                return command.execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Search failed: %s", e)
            raise click.Abort from e
