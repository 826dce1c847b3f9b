"""In-memory collaborators for editing a parsed document.

These back an :class:`~pagemodel.context.EditorContext` when the layer runs
outside the editor UI: in scripts, the CLI and tests.
"""

from __future__ import annotations

import itertools
import time
from typing import Iterable, Sequence

from bs4 import BeautifulSoup
from bs4.element import Tag

from pagemodel.constants import ID_ATTR, ID_PREFIX, PAGED_CLASS_NAME, SELECTED_CLASS_NAME
from pagemodel.context import EditorContext
from pagemodel.html_utils import (
    add_class,
    find_stage_root,
    get_classes,
    remove_class,
)
from pagemodel.styles import string_to_style, style_to_string

_id_counter = itertools.count()


class InMemoryPropertyStore:
    """Style rules keyed by generated id.

    Ids look like ``silex-id-<milliseconds>-<counter>`` and are written to the
    node both as ``data-silex-id`` and as a class, so that published
    stylesheets can target ``.silex-id-...``.
    """

    def __init__(self) -> None:
        self._styles: dict[str, dict[str, str]] = {}

    def get_style_object(self, node: Tag, computed: bool = False) -> dict[str, str] | None:
        element_id = self.get_id(node)
        stored = self._styles.get(element_id) if element_id else None
        if not computed:
            return dict(stored) if stored is not None else None
        # inline declarations apply first, stored rules override them
        style = string_to_style(node.get("style", ""))
        style.update({name: value for name, value in (stored or {}).items() if value})
        return style

    def set_style(self, node: Tag, style: dict[str, str]) -> None:
        element_id = self.get_id(node) or self.init_id(node, None)
        self._styles[element_id] = dict(style)

    def init_id(self, node: Tag, document: Tag | None) -> str:
        existing = self.get_id(node)
        if existing:
            return existing
        while True:
            element_id = f"{ID_PREFIX}{int(time.time() * 1000)}-{next(_id_counter)}"
            if document is None or document.find(attrs={ID_ATTR: element_id}) is None:
                break
        node[ID_ATTR] = element_id
        add_class(node, element_id)
        return element_id

    def get_id(self, node: Tag) -> str | None:
        return node.get(ID_ATTR)

    def render_css(self) -> str:
        """Stored rules as a stylesheet, one rule per element."""
        rules = []
        for element_id, style in self._styles.items():
            declarations = style_to_string(style)
            if declarations:
                rules.append(f".{element_id} {{ {declarations} }}")
        return "\n".join(rules)


class ClassPageRegistry:
    """Pages stored as class names on the nodes they show.

    A node with no page class is shown on every page.
    """

    def __init__(self, page_names: Iterable[str] = ()) -> None:
        self._page_names = list(page_names)

    def all_page_names(self) -> list[str]:
        return list(self._page_names)

    def pages_of(self, node: Tag) -> list[str]:
        return [name for name in get_classes(node) if name in self._page_names]

    def is_in_page(self, node: Tag, page: str | None) -> bool:
        return page is not None and page in self.pages_of(node)

    def add_page(self, name: str) -> None:
        if name not in self._page_names:
            self._page_names.append(name)

    def add_to_page(self, node: Tag, page: str) -> None:
        self.add_page(page)
        add_class(node, page)
        add_class(node, PAGED_CLASS_NAME)

    def remove_from_page(self, node: Tag, page: str) -> None:
        remove_class(node, page)
        if not self.pages_of(node):
            remove_class(node, PAGED_CLASS_NAME)


class StageBody:
    """Body of a parsed document, with editable flags and selection."""

    def __init__(self, document: BeautifulSoup) -> None:
        self.document = document
        self._editable: dict[int, Tag] = {}
        self._selection: list[Tag] = []

    def root_node(self) -> Tag:
        return find_stage_root(self.document)

    def set_editable(self, node: Tag, editable: bool) -> None:
        if editable:
            self._editable[id(node)] = node
        else:
            self._editable.pop(id(node), None)

    def is_editable(self, node: Tag) -> bool:
        return id(node) in self._editable

    def set_selection(self, nodes: Sequence[Tag]) -> None:
        for node in self._selection:
            remove_class(node, SELECTED_CLASS_NAME)
        self._selection = list(nodes)
        for node in self._selection:
            add_class(node, SELECTED_CLASS_NAME)

    def get_selection(self) -> list[Tag]:
        return list(self._selection)


class StaticLocation:
    def __init__(self, base_url: str | None = None) -> None:
        self.base_url = base_url

    def current_base_url(self) -> str | None:
        return self.base_url


class FixedViewport:
    def __init__(self, x: int = 0, y: int = 0) -> None:
        self.x = x
        self.y = y

    def scroll_x(self) -> int:
        return self.x

    def scroll_y(self) -> int:
        return self.y


def create_context(
    document: BeautifulSoup,
    *,
    base_url: str | None = None,
    page_names: Iterable[str] = (),
    active_page: str | None = None,
) -> EditorContext:
    """Wire in-memory collaborators around a parsed document."""
    return EditorContext(
        properties=InMemoryPropertyStore(),
        pages=ClassPageRegistry(page_names),
        body=StageBody(document),
        location=StaticLocation(base_url),
        viewport=FixedViewport(),
        active_page=active_page,
    )
