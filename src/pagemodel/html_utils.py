"""Shared HTML utilities for stage document processing."""

from __future__ import annotations

from typing import Iterable

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

_FRAGMENT_PARSER = "html.parser"
_DOCUMENT_PARSER = "lxml"
_DESCRIBED_ATTRS = ("data-silex-type", "data-silex-id", "id")


def parse_document(html: str) -> BeautifulSoup:
    """Parse a full HTML document."""
    return BeautifulSoup(html, _DOCUMENT_PARSER)


def parse_fragment(html: str) -> BeautifulSoup:
    """Parse an HTML fragment without adding html/body wrappers."""
    return BeautifulSoup(html, _FRAGMENT_PARSER)


def new_tag(name: str, attrs: dict[str, str] | None = None) -> Tag:
    """Create a detached tag."""
    return BeautifulSoup("", _FRAGMENT_PARSER).new_tag(name, attrs=attrs or {})


def find_stage_root(soup: BeautifulSoup) -> Tag:
    """Find the root editable element of a stage document.

    Falls back to the soup itself for fragments without a body.
    """
    if soup.body is not None:
        return soup.body
    return soup


def get_classes(tag: Tag) -> list[str]:
    value = tag.get("class")
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return [name for name in value if name]


def set_classes(tag: Tag, names: Iterable[str]) -> None:
    names = list(names)
    if names:
        tag["class"] = names
    elif "class" in tag.attrs:
        del tag["class"]


def has_class(tag: Tag, name: str) -> bool:
    return name in get_classes(tag)


def add_class(tag: Tag, name: str) -> None:
    classes = get_classes(tag)
    if name not in classes:
        classes.append(name)
        set_classes(tag, classes)


def remove_class(tag: Tag, name: str) -> None:
    classes = get_classes(tag)
    if name in classes:
        set_classes(tag, [c for c in classes if c != name])


def element_children(tag: Tag) -> list[Tag]:
    """Direct children that are elements, skipping text and comments."""
    return [child for child in tag.children if isinstance(child, Tag)]


def is_descendant(node: Tag, ancestor: Tag) -> bool:
    """Whether ``node`` sits strictly below ``ancestor``.

    Compares by identity: bs4 tags compare equal when their markup matches.
    """
    return any(parent is ancestor for parent in node.parents)


def document_of(node: Tag) -> Tag:
    """Topmost ancestor of ``node``, the soup itself for attached nodes."""
    top = node
    for parent in node.parents:
        top = parent
    return top


def inner_html(tag: Tag) -> str:
    return "".join(str(child) for child in tag.contents)


def replace_inner_html(tag: Tag, html: str) -> None:
    tag.clear()
    fragment = parse_fragment(html)
    for child in list(fragment.contents):
        tag.append(child.extract())


def describe_node(node: Tag) -> str:
    """Short opening-tag description of a node, for log messages."""
    parts = [node.name or "?"]
    for attr in _DESCRIBED_ATTRS:
        value = node.get(attr)
        if value:
            parts.append(f'{attr}="{value}"')
    return f"<{' '.join(parts)}>"
