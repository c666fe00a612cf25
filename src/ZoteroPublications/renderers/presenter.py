"""Presenter for Zotero publications.

Renders a :class:`RecordStore` into a :class:`Surface` through the template
layer and interprets clicks on the surface as one of three commands.

Interaction markers are ``data-trigger`` attributes on rendered elements:

* ``expand-group`` toggles the enclosing group open or closed,
* ``details`` (with ``data-item`` holding a record key) shows that record,
* ``details-exit`` returns from the detail view to the list.

Each click resolves to the marker nearest to the clicked element.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Mapping, Optional

from bs4.element import PageElement, Tag

from ZoteroPublications.config.display import DisplayConfig
from ZoteroPublications.core.models import Bucket, Record, RecordNotFoundError, record_data
from ZoteroPublications.core.store import RecordStore
from ZoteroPublications.renderers.surface import InteractionEvent, Surface
from ZoteroPublications.renderers.template_utils import format_category_name
from ZoteroPublications.renderers.templates import TemplateSet, load_template_set
from ZoteroPublications.utils.log import log

GROUP_CLASS = "zotero-group"
GROUP_EXPANDED_CLASS = "zotero-group-expanded"
LOADING_CLASS = "zotero-loading"


class Command(str, Enum):
    """Interaction commands, valued by their ``data-trigger`` marker."""

    EXPAND_GROUP = "expand-group"
    SHOW_DETAILS = "details"
    EXIT_DETAILS = "details-exit"


def resolve_trigger(target: PageElement) -> Optional[tuple[Command, Tag]]:
    """Find the nearest element at or above ``target`` with a known marker.

    Returns:
        The command and the marked element, or None when no ancestor carries a
        recognized ``data-trigger``.
    """
    node: Optional[PageElement] = target
    while node is not None:
        if isinstance(node, Tag):
            trigger = node.get("data-trigger")
            if trigger:
                try:
                    return Command(trigger), node
                except ValueError:
                    pass
        node = node.parent
    return None


def _closest_with_class(element: Tag, class_name: str) -> Optional[Tag]:
    node: Optional[Tag] = element
    while node is not None:
        if class_name in (node.get("class") or []):
            return node
        node = node.parent
    return None


class Presenter:
    """Render publications into a surface and handle its interactions."""

    def __init__(
        self,
        surface: Surface,
        config: DisplayConfig,
        templates: TemplateSet | None = None,
    ) -> None:
        """Initialize presenter.

        Args:
            surface: Surface this presenter writes to for its whole lifetime.
            config: Display options; read by templates only.
            templates: Template layer; the built-in set when omitted.
        """
        self.surface = surface
        self.config = config
        self.templates = templates or load_template_set(config.template_dir)
        self.last_store: RecordStore | None = None
        self.last_markup: str | None = None
        self._handlers: dict[Command, Callable[[Tag], None]] = {
            Command.EXPAND_GROUP: self._on_expand_group,
            Command.SHOW_DETAILS: self._on_show_details,
            Command.EXIT_DETAILS: self._on_exit_details,
        }

    def render_item(self, record: Record) -> str:
        return self.templates.item(record, record_data(record), self)

    def render_items(self, records: RecordStore | list[Record]) -> str:
        return self.templates.items(records, self)

    def render_group(self, bucket: Bucket) -> str:
        return self.templates.group(format_category_name(bucket.key), bucket.items, bucket.expanded, self)

    def render_groups(self, groups: RecordStore | Mapping[str, Bucket]) -> str:
        return self.templates.groups(groups, self)

    def render_branding(self) -> str:
        return self.templates.branding()

    def render_details(self, record: Record) -> str:
        return self.templates.details(record, record_data(record), self)

    def display_publications(self, store: RecordStore) -> None:
        """Render a store into the surface and snapshot the markup.

        Grouped stores render as groups, others as a flat list. The snapshot
        is what :meth:`exit_details` restores.
        """
        if store.grouped:
            markup = self.render_groups(store)
        else:
            markup = self.render_items(store)

        self.last_store = store
        self.surface.write(markup)
        self.last_markup = markup
        self.surface.listen(self.handle_event)
        log.debug("Displayed %d %s", len(store), "groups" if store.grouped else "records")

    def display_details(self, record: Record) -> None:
        """Render one record's detail view; the list snapshot is kept."""
        self.surface.write(self.render_details(record))

    def show_details(self, key: str) -> None:
        """Display the detail view of the record with ``key``.

        Raises:
            RecordNotFoundError: If nothing was displayed yet or the last
                displayed store has no record with this key.
        """
        if self.last_store is None:
            raise RecordNotFoundError(f"No record with key {key!r}: nothing displayed")
        self.display_details(self.last_store.find(key))

    def exit_details(self) -> None:
        """Restore the last list view exactly as it was rendered."""
        if self.last_markup is None:
            return
        self.surface.write(self.last_markup)

    def toggle_spinner(self, surface: Surface, activate: Optional[bool] = None) -> bool:
        """Toggle the loading marker on ``surface``.

        Args:
            surface: Surface to mark.
            activate: ``None`` flips the marker, ``True`` sets it, ``False`` clears it.

        Returns:
            Whether the marker is set afterwards.
        """
        return surface.toggle_class(LOADING_CLASS, activate)

    def handle_event(self, event: InteractionEvent) -> None:
        """Dispatch one click to the command of its nearest marker."""
        resolved = resolve_trigger(event.target)
        if resolved is None:
            return
        command, element = resolved
        log.debug("Interaction: %s", command.value)
        self._handlers[command](element)

    def _on_expand_group(self, trigger: Tag) -> None:
        group = _closest_with_class(trigger, GROUP_CLASS)
        if group is None:
            log.debug("expand-group marker outside of a group")
            return
        expanded = self.surface.toggle_element_class(group, GROUP_EXPANDED_CLASS)
        self.surface.set_attribute(group, "aria-expanded", "true" if expanded else "false")

    def _on_show_details(self, trigger: Tag) -> None:
        key = trigger.get("data-item")
        if not key:
            log.warning("Ignoring details request without data-item")
            return
        try:
            self.show_details(key)
        except RecordNotFoundError as exc:
            log.warning("Ignoring details request: %s", exc)

    def _on_exit_details(self, trigger: Tag) -> None:
        del trigger
        self.exit_details()
