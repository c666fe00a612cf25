"""Command runner for coordinating CLI execution.

Manages logging configuration, component creation and error handling for
command execution.
"""

from __future__ import annotations

from pathlib import Path

import click

from ZoteroPublications.cli.commands import RenderCommand, SummaryCommand
from ZoteroPublications.config import AppConfig
from ZoteroPublications.renderers import PageWriter
from ZoteroPublications.sources.json_file import load_records
from ZoteroPublications.utils.log import configure_logging, log


class CommandRunner:
    """Runs CLI commands with logging set up and failures turned into aborts."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
        """
        self.config = config

    def run_render(self, action: str, input_path: Path, details_key: str | None = None) -> Path:
        """Render records from ``input_path`` into an HTML page.

        Raises:
            click.Abort: When rendering fails.
        """
        self._configure_logging(action)
        try:
            records = load_records(input_path)
            command = RenderCommand(
                config=self.config,
                records=records,
                page_writer=PageWriter(self.config.output, self.config.display.template_dir),
                details_key=details_key,
            )
            return command.execute(action)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Render failed: %s", e)
            raise click.Abort from e

    def run_summary(self, action: str, input_path: Path) -> list[str]:
        """Log an outline of the records in ``input_path``.

        Raises:
            click.Abort: When loading or grouping fails.
        """
        self._configure_logging(action)
        try:
            return SummaryCommand(config=self.config, records=load_records(input_path)).execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Summary failed: %s", e)
            raise click.Abort from e

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
