"""Runtime domain configuration (logging)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ZoteroPublications.config.common import (
    expect_bool,
    expect_choice,
    expect_str,
    get_optional_value,
    get_section,
)

_ALLOWED_LOG_LEVELS = {"debug", "info", "warning", "error", "critical"}


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Logging behavior for CLI runs."""

    level: str
    to_file: bool
    dir: str


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    """Load runtime configuration from the ``log`` section.

    Every key is optional; a missing section logs INFO to the console only.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If the level is unknown.
    """
    section = get_section(raw, "log", required=False)
    level = expect_choice(get_optional_value(section, "level", "INFO"), "log.level", _ALLOWED_LOG_LEVELS)
    return RuntimeConfig(
        level=level.upper(),
        to_file=expect_bool(get_optional_value(section, "to_file", False), "log.to_file"),
        dir=expect_str(get_optional_value(section, "dir", "log"), "log.dir"),
    )


def check_runtime(config: RuntimeConfig) -> None:
    """Validate runtime constraints.

    Raises:
        ValueError: If file logging is enabled without a directory.
    """
    if config.to_file and not config.dir.strip():
        raise ValueError("log.dir must not be empty when log.to_file is true")
