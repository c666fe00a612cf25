"""Shared helpers and errors for the template layer."""

from __future__ import annotations

import html
import re
from pathlib import Path
from urllib.parse import urlparse

from ZoteroPublications.utils.log import log

BUILTIN_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

# Item types whose display names do not follow from splitting camelCase.
_CATEGORY_NAMES = {
    "computerProgram": "Software",
    "tvBroadcast": "TV Broadcast",
    "webpage": "Web Page",
}


class TemplateNotFoundError(FileNotFoundError):
    """Raised when a template file cannot be found."""


class TemplateError(RuntimeError):
    """Raised when a template cannot be loaded."""


class OutputError(RuntimeError):
    """Raised when output cannot be written."""


def load_template(template_dir: str, filename: str) -> str:
    """Load a template file.

    An empty ``template_dir`` selects the templates shipped with the package.
    A configured directory is resolved against the working directory and must
    stay inside it.

    Args:
        template_dir: Template directory from configuration, or empty.
        filename: Template file name relative to the directory.

    Returns:
        Template content decoded as UTF-8 text.

    Raises:
        TemplateError: If the resolved path escapes the working directory or
            reading fails.
        TemplateNotFoundError: If the template file does not exist.
    """
    if template_dir:
        root = Path.cwd().resolve()
        base_dir = Path(template_dir)
        if not base_dir.is_absolute():
            base_dir = root / base_dir
        template_path = (base_dir / filename).resolve()
        try:
            template_path.relative_to(root)
        except ValueError as exc:
            raise TemplateError(f"Template path must be inside project root: {template_path}") from exc
    else:
        template_path = BUILTIN_TEMPLATE_DIR / filename

    if not template_path.exists():
        raise TemplateNotFoundError(f"Template file not found: {template_path}")

    try:
        return template_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TemplateError(f"Failed to read template: {template_path}") from exc


def format_category_name(name: str) -> str:
    """Turn a Zotero item type into a display title.

    >>> format_category_name("journalArticle")
    'Journal Article'
    """
    if name in _CATEGORY_NAMES:
        return _CATEGORY_NAMES[name]
    words = _CAMEL_BOUNDARY_RE.sub(" ", name).split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def escape_url(url: str) -> str:
    """Validate and escape a URL used in an HTML attribute.

    Returns:
        Escaped URL when its scheme is http(s), or an empty string.
    """
    if not url:
        return ""

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        log.warning("Disallowed URL scheme: %s (URL: %s)", parsed.scheme, url)
        return ""
    return html.escape(url, quote=True)


def build_doi_url(doi: str | None) -> str:
    """Build an escaped DOI URL from a DOI string or URL."""
    if not doi:
        return ""

    normalized = doi.strip()
    if not normalized:
        return ""

    if normalized.startswith(("http://", "https://")):
        return escape_url(normalized)

    return escape_url(f"https://doi.org/{normalized}")


def shorten(text: str, limit: int) -> str:
    """Cut ``text`` at a word boundary to at most ``limit`` characters plus an ellipsis.

    A ``limit`` of 0 returns the text unchanged.
    """
    if limit <= 0 or len(text) <= limit:
        return text
    cut = text[:limit].rsplit(" ", 1)[0].rstrip(" ,;:.")
    return (cut or text[:limit]) + "…"
