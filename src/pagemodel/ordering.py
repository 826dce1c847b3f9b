"""Sibling order of model nodes as seen on the active page.

Nodes attached to other pages stay in the tree but are skipped when looking
for the next or previous sibling, so moving an element up or down on one page
only swaps it with elements the author can see.
"""

from __future__ import annotations

from typing import Iterable

from bs4.element import Tag

from pagemodel.classifier import is_element
from pagemodel.constants import JUST_ADDED_CLASS_NAME, DomDirection
from pagemodel.context import PageRegistry
from pagemodel.html_utils import remove_class


def is_visible(node: Tag, pages: PageRegistry, active_page: str | None) -> bool:
    """Visible on the active page, or on every page because it has none."""
    return pages.is_in_page(node, active_page) or not pages.pages_of(node)


def previous_visible(
    node: Tag, pages: PageRegistry, active_page: str | None
) -> Tag | None:
    """Closest visible model node before ``node`` among its siblings."""
    if node.parent is None:
        return None
    return _scan(node, node.parent.contents, pages, active_page)


def next_visible(
    node: Tag, pages: PageRegistry, active_page: str | None
) -> Tag | None:
    """Closest visible model node after ``node`` among its siblings."""
    if node.parent is None:
        return None
    return _scan(node, reversed(node.parent.contents), pages, active_page)


def move(
    node: Tag,
    direction: DomDirection,
    pages: PageRegistry,
    active_page: str | None,
) -> bool:
    """Move ``node`` in its parent's children.

    UP and DOWN swap the node with its next or previous visible sibling;
    TOP makes it the last child (painted above the others) and BOTTOM the
    first one. Returns False when there is nothing to swap with.
    """
    direction = DomDirection(direction)
    moved = False
    parent = node.parent
    if parent is not None:
        if direction is DomDirection.UP:
            sibling = next_visible(node, pages, active_page)
            if sibling is not None:
                node.insert_before(sibling)
                moved = True
        elif direction is DomDirection.DOWN:
            sibling = previous_visible(node, pages, active_page)
            if sibling is not None:
                node.insert_after(sibling)
                moved = True
        elif direction is DomDirection.TOP:
            parent.append(node)
            moved = True
        elif direction is DomDirection.BOTTOM:
            parent.insert(0, node)
            moved = True
    remove_class(node, JUST_ADDED_CLASS_NAME)
    return moved


def _scan(
    node: Tag,
    siblings: Iterable[object],
    pages: PageRegistry,
    active_page: str | None,
) -> Tag | None:
    candidate: Tag | None = None
    for sibling in siblings:
        if not is_element(sibling):
            continue
        if sibling is node:
            return candidate
        if is_visible(sibling, pages, active_page):
            candidate = sibling
    return None
