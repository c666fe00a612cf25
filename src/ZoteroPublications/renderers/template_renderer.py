"""Placeholder substitution for markup templates."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Mapping

from ZoteroPublications.utils.log import log


_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


@dataclass(slots=True)
class TemplateRenderer:
    """Fill ``{name}`` placeholders, optionally dropping lines with empty fields.

    Context values are inserted as-is; callers escape them beforehand.
    """

    warned_placeholders: set[str] = field(default_factory=set)

    def render(self, template: str, context: Mapping[str, str]) -> str:
        """Render a template, keeping every line.

        Args:
            template: Raw template content.
            context: Placeholder mapping.

        Returns:
            Rendered content. Unknown placeholders are kept as-is.
        """
        self._warn_unknown_keys(_PLACEHOLDER_RE.findall(template), context)
        return template.format_map(_SafeFormatDict(context))

    def render_conditional(self, template: str, context: Mapping[str, str]) -> str:
        """Render a template and omit lines whose known placeholders are empty.

        Args:
            template: Raw template content.
            context: Placeholder mapping.

        Returns:
            Rendered content with conditional lines removed.
        """
        output_lines: list[str] = []
        for line in template.splitlines():
            placeholders = _PLACEHOLDER_RE.findall(line)
            if not placeholders:
                output_lines.append(line)
                continue

            self._warn_unknown_keys(placeholders, context)

            known = [key for key in placeholders if key in context]
            if known and any(not context.get(key, "") for key in known):
                continue

            output_lines.append(line.format_map(_SafeFormatDict(context)))

        return "\n".join(output_lines)

    def _warn_unknown_keys(self, keys: list[str], context: Mapping[str, str]) -> None:
        for key in keys:
            if key in context or key in self.warned_placeholders:
                continue
            self.warned_placeholders.add(key)
            log.warning("Unknown template placeholder: %s", key)


class _SafeFormatDict(dict[str, str]):
    def __missing__(self, key: str) -> str:  # noqa: D401 - simple behavior
        return "{" + key + "}"
