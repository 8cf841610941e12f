"""CLI package for ArxivQuery command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from ArxivQuery.cli.runner import CommandRunner
from ArxivQuery.cli.ui import cli


def main() -> None:
    """Run the ArxivQuery CLI.

    Entry point referenced by the console script in pyproject.toml.
    """
    cli()
