"""Rendering of Zotero records into a display surface.

Exports the presenter, its surface, the template layer and the page writer
used by the CLI.
"""

from __future__ import annotations

from ZoteroPublications.renderers.page import PageWriter
from ZoteroPublications.renderers.presenter import Command, Presenter, resolve_trigger
from ZoteroPublications.renderers.surface import InteractionEvent, Surface
from ZoteroPublications.renderers.templates import TemplateSet, load_template_set

__all__ = [
    "Command",
    "InteractionEvent",
    "PageWriter",
    "Presenter",
    "Surface",
    "TemplateSet",
    "load_template_set",
    "resolve_trigger",
]
