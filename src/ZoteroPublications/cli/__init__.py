"""CLI package for ZoteroPublications command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from ZoteroPublications.cli.runner import CommandRunner
from ZoteroPublications.cli.ui import cli


def main() -> None:
    """Run ZoteroPublications CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
