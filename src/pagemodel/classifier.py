"""Read and write the reserved attributes of model nodes."""

from __future__ import annotations

from typing import Iterator

from bs4.element import Tag

from pagemodel.constants import LINK_ATTR, TYPE_ATTR, ElementType


def get_type(node: Tag) -> ElementType | None:
    """Type of a model node, or None when ``node`` is not one.

    Unknown type values are treated as not being a model node.
    """
    value = node.get(TYPE_ATTR)
    if value is None:
        return None
    try:
        return ElementType(value)
    except ValueError:
        return None


def is_element(node: object) -> bool:
    """Whether ``node`` is a tag carrying a model type."""
    return isinstance(node, Tag) and node.get(TYPE_ATTR) is not None


def iter_elements(root: Tag) -> Iterator[Tag]:
    """All model nodes below ``root``, in document order."""
    yield from root.find_all(attrs={TYPE_ATTR: True})


def get_link(node: Tag) -> str | None:
    return node.get(LINK_ATTR)


def set_link(node: Tag, link: str | None) -> None:
    """Set the link of a node.

    ``link`` is an absolute or relative URL, or an internal page link
    starting with ``#!``. None or an empty string removes the attribute.
    """
    if link:
        node[LINK_ATTR] = link
    elif LINK_ATTR in node.attrs:
        del node[LINK_ATTR]
