"""Markup templates for publication lists and detail views.

Each method of :class:`TemplateSet` is a pure function from a view model to
markup text. Methods receive the presenter so they can call back into it for
nested rendering (a group renders its items through ``presenter.render_items``).
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Sequence

from ZoteroPublications.core.models import Bucket, Record, record_key
from ZoteroPublications.core.store import RecordStore
from ZoteroPublications.renderers.template_renderer import TemplateRenderer
from ZoteroPublications.renderers.template_utils import (
    build_doi_url,
    escape_url,
    format_category_name,
    load_template,
    shorten,
)

if TYPE_CHECKING:
    from ZoteroPublications.renderers.presenter import Presenter


@dataclass(frozen=True, slots=True)
class TemplateSet:
    """Loaded template texts plus the renderer that fills them."""

    item_template: str
    items_template: str
    group_template: str
    groups_template: str
    branding_template: str
    details_template: str
    template_renderer: TemplateRenderer = field(default_factory=TemplateRenderer)

    def item(self, record: Record, data: Mapping[str, Any], presenter: Presenter) -> str:
        """Render one list entry."""
        context = _prepare_record_context(record, data)
        context["abstract"] = html.escape(
            shorten(str(data.get("abstractNote") or ""), presenter.config.shorten_abstract)
        )
        return self.template_renderer.render_conditional(self.item_template, context)

    def items(self, items: RecordStore | Iterable[Record], presenter: Presenter) -> str:
        """Render a flat list of records.

        A top-level :class:`RecordStore` also gets the branding footer; plain
        sequences (the contents of a group) do not.
        """
        blocks = [presenter.render_item(record) for record in items]
        branding = ""
        if isinstance(items, RecordStore) and presenter.config.show_branding:
            branding = presenter.render_branding()
        return self.template_renderer.render_conditional(
            self.items_template,
            {"items": "\n".join(blocks), "branding": branding},
        )

    def group(self, title: str, items: Sequence[Record], expand: bool, presenter: Presenter) -> str:
        """Render one expandable group."""
        return self.template_renderer.render(
            self.group_template,
            {
                "title": html.escape(title),
                "expanded_class": " zotero-group-expanded" if expand else "",
                "aria_expanded": "true" if expand else "false",
                "items": presenter.render_items(items),
            },
        )

    def groups(self, groups: RecordStore | Mapping[str, Bucket], presenter: Presenter) -> str:
        """Render every group of a grouped view."""
        pairs = groups.items() if isinstance(groups, Mapping) else groups
        blocks = [presenter.render_group(bucket) for _, bucket in pairs]
        branding = presenter.render_branding() if presenter.config.show_branding else ""
        return self.template_renderer.render_conditional(
            self.groups_template,
            {"groups": "\n".join(blocks), "branding": branding},
        )

    def branding(self) -> str:
        """Render the static branding footer."""
        return self.branding_template.strip()

    def details(self, record: Record, data: Mapping[str, Any], presenter: Presenter) -> str:
        """Render the single-record detail view."""
        del presenter
        context = _prepare_record_context(record, data)
        context.update(
            {
                "abstract": html.escape(str(data.get("abstractNote") or "")),
                "type_label": html.escape(format_category_name(str(data.get("itemType") or ""))),
                "publication": html.escape(str(data.get("publicationTitle") or data.get("bookTitle") or "")),
                "publisher": html.escape(str(data.get("publisher") or "")),
                "doi": html.escape(str(data.get("DOI") or "")),
                "doi_url": build_doi_url(data.get("DOI")),
                "url": escape_url(str(data.get("url") or "")),
            }
        )
        return self.template_renderer.render_conditional(self.details_template, context)


def load_template_set(template_dir: str = "") -> TemplateSet:
    """Load all templates from ``template_dir`` (empty: built-in templates).

    Raises:
        TemplateNotFoundError: If a template file is missing.
        TemplateError: If a template cannot be read.
    """
    return TemplateSet(
        item_template=load_template(template_dir, "item.html"),
        items_template=load_template(template_dir, "items.html"),
        group_template=load_template(template_dir, "group.html"),
        groups_template=load_template(template_dir, "groups.html"),
        branding_template=load_template(template_dir, "branding.html"),
        details_template=load_template(template_dir, "details.html"),
    )


def format_creators(creators: Any) -> str:
    """Join Zotero creators as ``"Last, First; Name"``."""
    if not isinstance(creators, list):
        return ""
    names: list[str] = []
    for creator in creators:
        if not isinstance(creator, Mapping):
            continue
        if creator.get("name"):
            names.append(str(creator["name"]))
            continue
        last = str(creator.get("lastName") or "").strip()
        first = str(creator.get("firstName") or "").strip()
        if last and first:
            names.append(f"{last}, {first}")
        elif last or first:
            names.append(last or first)
    return "; ".join(names)


def _prepare_record_context(record: Record, data: Mapping[str, Any]) -> dict[str, str]:
    """Escaped placeholder values shared by list and detail templates."""
    return {
        "key": html.escape(str(record_key(record) or ""), quote=True),
        "item_type": html.escape(str(data.get("itemType") or "unknown"), quote=True),
        "title": html.escape(str(data.get("title") or "")),
        "creators": html.escape(format_creators(data.get("creators"))),
        "date": html.escape(str(data.get("date") or "")),
    }
