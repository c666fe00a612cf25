from __future__ import annotations

"""Public configuration API for ZoteroPublications."""

from ZoteroPublications.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from ZoteroPublications.config.display import DisplayConfig
from ZoteroPublications.config.output import OutputConfig
from ZoteroPublications.config.runtime import RuntimeConfig

__all__ = [
    "RuntimeConfig",
    "DisplayConfig",
    "OutputConfig",
    "AppConfig",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
]
