"""Display domain configuration consumed by the template layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ZoteroPublications.config.common import (
    expect_bool,
    expect_choice,
    expect_int,
    expect_str,
    expect_str_list,
    get_optional_value,
    get_section,
)
from ZoteroPublications.core.models import EXPAND_ALL

_ALLOWED_GROUPING = {"none", "type"}


@dataclass(frozen=True, slots=True)
class DisplayConfig:
    """Static display options.

    Attributes:
        group: Grouping applied before display ("none" or "type").
        expand: Item types shown pre-expanded, or ``"all"``.
        show_branding: Whether top-level lists end with Zotero branding.
        shorten_abstract: Maximum abstract length in list view; 0 keeps it whole.
        template_dir: Directory with custom templates; empty uses the built-in set.
    """

    group: str = "none"
    expand: str | tuple[str, ...] = ()
    show_branding: bool = True
    shorten_abstract: int = 300
    template_dir: str = ""


def load_display(raw: Mapping[str, Any]) -> DisplayConfig:
    """Load display configuration from the ``display`` section.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If ``display.group`` is not a supported grouping.
    """
    section = get_section(raw, "display", required=False)
    defaults = DisplayConfig()
    return DisplayConfig(
        group=expect_choice(get_optional_value(section, "group", defaults.group), "display.group", _ALLOWED_GROUPING),
        expand=_load_expand(get_optional_value(section, "expand", [])),
        show_branding=expect_bool(
            get_optional_value(section, "show_branding", defaults.show_branding),
            "display.show_branding",
        ),
        shorten_abstract=expect_int(
            get_optional_value(section, "shorten_abstract", defaults.shorten_abstract),
            "display.shorten_abstract",
        ),
        template_dir=expect_str(
            get_optional_value(section, "template_dir", defaults.template_dir),
            "display.template_dir",
        ),
    )


def check_display(config: DisplayConfig) -> None:
    """Validate display constraints.

    Raises:
        ValueError: If values violate display constraints.
    """
    if config.shorten_abstract < 0:
        raise ValueError("display.shorten_abstract must be >= 0")
    if config.expand and config.group == "none":
        raise ValueError("display.expand requires display.group to be set")


def _load_expand(value: Any) -> str | tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        if value.strip().lower() == EXPAND_ALL:
            return EXPAND_ALL
        raise ValueError(f'display.expand must be "{EXPAND_ALL}" or a list of item types')
    return tuple(item.strip() for item in expect_str_list(value, "display.expand") if item.strip())
