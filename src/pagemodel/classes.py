"""Public class names of model nodes.

A node's class attribute mixes editor bookkeeping (internal classes, page
names, the generated id) with classes the author added. Authors only read
and write the latter.
"""

from __future__ import annotations

from typing import Iterable

from bs4.element import Tag

from pagemodel.constants import RESERVED_CLASS_NAMES
from pagemodel.html_utils import add_class, get_classes, set_classes


def is_reserved_class(name: str, page_names: Iterable[str], element_id: str | None) -> bool:
    return name in RESERVED_CLASS_NAMES or name in page_names or name == element_id


def get_class_name(node: Tag, page_names: Iterable[str], element_id: str | None) -> str:
    """Space separated author classes of ``node``."""
    page_names = set(page_names)
    return " ".join(
        name
        for name in get_classes(node)
        if not is_reserved_class(name, page_names, element_id)
    ).strip()


def set_class_name(
    node: Tag,
    class_name: str | None,
    page_names: Iterable[str],
    element_id: str | None,
) -> None:
    """Replace the author classes of ``node``, keeping reserved ones.

    None or an empty string removes every author class.
    """
    page_names = set(page_names)
    keep = [
        name
        for name in get_classes(node)
        if is_reserved_class(name, page_names, element_id)
    ]
    set_classes(node, keep)
    for name in (class_name or "").split():
        add_class(node, name)
