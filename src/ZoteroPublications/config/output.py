"""Output domain configuration for written pages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ZoteroPublications.config.common import (
    expect_str,
    get_optional_value,
    get_required_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Output configuration."""

    base_dir: str
    document_template: str
    title: str


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    """Load output domain config from raw mapping.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "output", required=True)
    return OutputConfig(
        base_dir=expect_str(get_required_value(section, "base_dir", "output.base_dir"), "output.base_dir"),
        document_template=expect_str(
            get_optional_value(section, "document_template", "document.html"),
            "output.document_template",
        ),
        title=expect_str(get_optional_value(section, "title", "Publications"), "output.title"),
    )


def check_output(config: OutputConfig) -> None:
    """Validate output domain constraints.

    Raises:
        ValueError: If values violate output constraints.
    """
    if not config.base_dir.strip():
        raise ValueError("output.base_dir must not be empty")
    if not config.document_template.strip():
        raise ValueError("output.document_template must not be empty")
