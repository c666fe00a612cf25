"""Command implementations for the ZoteroPublications CLI.

Encapsulates what each command does, separated from CLI parameter handling
and resource setup.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ZoteroPublications.config import AppConfig, DisplayConfig
from ZoteroPublications.core.models import Record, record_data, record_key
from ZoteroPublications.core.store import RecordStore
from ZoteroPublications.renderers import PageWriter, Presenter, Surface
from ZoteroPublications.renderers.template_utils import format_category_name
from ZoteroPublications.utils.log import log


def build_store(records: Sequence[Record], display: DisplayConfig) -> RecordStore:
    """Create a store and apply the configured grouping."""
    store = RecordStore(records)
    if display.group == "type":
        store.group_by_type(display.expand)
    return store


@dataclass(slots=True)
class RenderCommand:
    """Render records into a surface and write the resulting page."""

    config: AppConfig
    records: Sequence[Record]
    page_writer: PageWriter
    details_key: str | None = None

    def execute(self, action: str) -> Path:
        """Display the publications, optionally open one record, write the page.

        Args:
            action: CLI command name, used in the output file name.

        Returns:
            Path of the written page.

        Raises:
            RecordNotFoundError: If ``details_key`` matches no record.
        """
        surface = Surface(classes=("zotero-publications",))
        presenter = Presenter(surface, self.config.display)

        presenter.toggle_spinner(surface, True)
        store = build_store(self.records, self.config.display)
        presenter.display_publications(store)
        presenter.toggle_spinner(surface, False)
        log.info("Rendered %d records (%s)", len(store.raw), "grouped by type" if store.grouped else "flat")

        if self.details_key:
            presenter.show_details(self.details_key)
            log.info("Showing details of %s", self.details_key)

        return self.page_writer.write(surface.markup, len(store.raw), action)


@dataclass(slots=True)
class SummaryCommand:
    """Log an outline of the records, one line per group or per record."""

    config: AppConfig
    records: Sequence[Record]

    def execute(self) -> list[str]:
        """Log and return the outline lines."""
        store = build_store(self.records, self.config.display)
        lines: list[str] = []
        if store.grouped:
            for key, bucket in store:
                marker = "+" if bucket.expanded else "-"
                lines.append(f"{marker} {format_category_name(key)} ({len(bucket)})")
        else:
            for idx, record in enumerate(store, start=1):
                title = record_data(record).get("title") or "(untitled)"
                lines.append(f"{idx}. [{record_key(record) or '?'}] {title}")

        for line in lines:
            log.info(line)
        return lines
