"""Collaborator protocols and the editing context they are bundled in."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from bs4.element import Tag


class PropertyStore(Protocol):
    """Storage of style rules and generated ids."""

    def get_style_object(self, node: Tag, computed: bool = False) -> dict[str, str] | None:
        """Return the style map of a node, or None when it has none."""
        ...

    def set_style(self, node: Tag, style: dict[str, str]) -> None:
        """Replace the style map of a node."""
        ...

    def init_id(self, node: Tag, document: Tag | None) -> str:
        """Assign a unique generated id to a new node and return it."""
        ...

    def get_id(self, node: Tag) -> str | None:
        """Return the generated id of a node."""
        ...


class PageRegistry(Protocol):
    """Which pages exist and which nodes are visible on them."""

    def is_in_page(self, node: Tag, page: str | None) -> bool:
        """Whether a node is visible on ``page``."""
        ...

    def pages_of(self, node: Tag) -> list[str]:
        """Names of the pages a node is attached to; empty means every page."""
        ...

    def all_page_names(self) -> list[str]:
        """Names of every registered page."""
        ...


class DocumentBody(Protocol):
    """The stage: root editable node and current selection."""

    def root_node(self) -> Tag:
        ...

    def set_editable(self, node: Tag, editable: bool) -> None:
        ...

    def set_selection(self, nodes: Sequence[Tag]) -> None:
        ...

    def get_selection(self) -> list[Tag]:
        ...


class Location(Protocol):
    """Where the edited document lives."""

    def current_base_url(self) -> str | None:
        """Absolute URL of the document, or None for an unsaved one."""
        ...


class Viewport(Protocol):
    """Scroll state of the stage."""

    def scroll_x(self) -> int:
        ...

    def scroll_y(self) -> int:
        ...


@dataclass
class EditorContext:
    """Collaborators and ambient state an :class:`ElementModel` works with.

    Attributes:
        properties: Style and id storage.
        pages: Page registry.
        body: Stage body and selection.
        location: Base URL provider used by the sanitization codec.
        viewport: Scroll offsets used to place new elements.
        active_page: Page currently shown in the editor, None when the
            document has no pages.
    """

    properties: PropertyStore
    pages: PageRegistry
    body: DocumentBody
    location: Location
    viewport: Viewport
    active_page: str | None = None

    def redraw(self) -> None:
        """Ask the selection tools to refresh."""
        self.body.set_selection(self.body.get_selection())
