"""Standalone HTML page output."""

from __future__ import annotations

import html
from datetime import datetime
from pathlib import Path

from ZoteroPublications.config import OutputConfig
from ZoteroPublications.renderers.template_renderer import TemplateRenderer
from ZoteroPublications.renderers.template_utils import OutputError, load_template
from ZoteroPublications.utils.log import log


class PageWriter:
    """Wrap surface markup into a document and write it to disk."""

    def __init__(self, output_config: OutputConfig, template_dir: str = "") -> None:
        """Initialize page writer.

        Args:
            output_config: Output configuration.
            template_dir: Template directory; empty uses the built-in templates.
        """
        self.output_dir = Path(output_config.base_dir) / "html"
        self.title = output_config.title
        self.document_template = load_template(template_dir, output_config.document_template)
        self.template_renderer = TemplateRenderer()

    def render(self, markup: str, record_count: int, timestamp: datetime | None = None) -> str:
        """Render the full document around ``markup``."""
        timestamp_dt = timestamp or datetime.now()
        return self.template_renderer.render(
            self.document_template,
            {
                "title": html.escape(self.title),
                "timestamp": timestamp_dt.strftime("%Y-%m-%d %H:%M:%S"),
                "record_count": str(record_count),
                "content": markup,
            },
        )

    def write(self, markup: str, record_count: int, action: str) -> Path:
        """Write the document to ``<base_dir>/html/<action>_<timestamp>.html``.

        Returns:
            Path of the written file.

        Raises:
            OutputError: If output directory or file writing fails.
        """
        timestamp_dt = datetime.now()
        content = self.render(markup, record_count, timestamp_dt)

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputError(f"Failed to create output directory: {self.output_dir}") from exc

        output_path = self.output_dir / f"{action}_{timestamp_dt.strftime('%Y%m%d_%H%M%S')}.html"
        try:
            output_path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise OutputError(f"Failed to write HTML file: {output_path}") from exc

        log.info("HTML saved to %s", output_path)
        return output_path
