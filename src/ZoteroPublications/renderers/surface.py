"""Display surface backed by a parsed HTML tree.

A surface holds the markup of one display region, one click listener, and a
set of marker classes on the region itself (e.g. the loading marker).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from bs4 import BeautifulSoup
from bs4.element import PageElement, Tag

from ZoteroPublications.utils.log import log


@dataclass(frozen=True, slots=True)
class InteractionEvent:
    """A click-style event originating at ``target`` inside ``surface``."""

    target: PageElement
    surface: Surface


Listener = Callable[[InteractionEvent], None]


class Surface:
    """A region whose contents are replaced wholesale by markup writes.

    ``markup`` returns exactly the text last written until an element is
    mutated in place, after which it is the serialized tree.
    """

    def __init__(self, markup: str = "", classes: tuple[str, ...] = ()) -> None:
        self.classes: set[str] = set(classes)
        self._markup = markup
        self._tree: Optional[BeautifulSoup] = None
        self._listener: Optional[Listener] = None

    @property
    def markup(self) -> str:
        return self._markup

    def write(self, markup: str) -> None:
        """Replace the whole content of the surface."""
        self._markup = markup
        self._tree = None

    @property
    def tree(self) -> BeautifulSoup:
        """Parsed tree of the current markup, built on first access."""
        if self._tree is None:
            self._tree = BeautifulSoup(self._markup, "html.parser")
        return self._tree

    def listen(self, listener: Listener) -> None:
        """Register the click listener, replacing any previous one."""
        self._listener = listener

    @property
    def listener(self) -> Optional[Listener]:
        return self._listener

    def click(self, target: PageElement) -> None:
        """Deliver a click originating at ``target`` to the listener."""
        if self._listener is None:
            log.debug("Click ignored: no listener registered")
            return
        self._listener(InteractionEvent(target=target, surface=self))

    def find(self, **attrs: str) -> Optional[Tag]:
        """Return the first element in the current tree carrying ``attrs``.

        Keyword names use underscores for dashes: ``data_trigger="details"``
        matches ``data-trigger="details"``; ``class_`` matches one class.
        """
        return self.tree.find(attrs=_attr_names(attrs))

    def find_all(self, **attrs: str) -> list[Tag]:
        """Return every element in the current tree carrying ``attrs``."""
        return list(self.tree.find_all(attrs=_attr_names(attrs)))

    def toggle_class(self, name: str, force: Optional[bool] = None) -> bool:
        """Toggle a marker class on the surface itself.

        Args:
            name: Class name.
            force: ``True`` adds, ``False`` removes, ``None`` flips.

        Returns:
            Whether the class is present afterwards.
        """
        active = name not in self.classes if force is None else force
        if active:
            self.classes.add(name)
        else:
            self.classes.discard(name)
        return active

    def toggle_element_class(self, element: Tag, name: str, force: Optional[bool] = None) -> bool:
        """Toggle a class on an element of the current tree.

        Returns:
            Whether the class is present afterwards.
        """
        classes = list(element.get("class") or [])
        active = name not in classes if force is None else force
        if active and name not in classes:
            classes.append(name)
        elif not active:
            classes = [cls for cls in classes if cls != name]
        element["class"] = classes
        self._sync()
        return active

    def set_attribute(self, element: Tag, name: str, value: str) -> None:
        """Set an attribute on an element of the current tree."""
        element[name] = value
        self._sync()

    def _sync(self) -> None:
        # Element edits happen on the parsed tree; keep the text view in step.
        self._markup = str(self.tree)


def _attr_names(attrs: dict[str, str]) -> dict[str, str]:
    # class_ -> class, data_item -> data-item
    return {name.rstrip("_").replace("_", "-"): value for name, value in attrs.items()}
