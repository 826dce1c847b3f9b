"""Default markup and style of new model nodes."""

from __future__ import annotations

from typing import Callable

from bs4.element import Tag

from pagemodel.constants import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_HEIGHT,
    DEFAULT_HTML_CONTENT,
    DEFAULT_TEXT_CONTENT,
    DEFAULT_WIDTH,
    DROP_OFFSET_X,
    DROP_OFFSET_Y,
    ELEMENT_CONTENT_CLASS_NAME,
    TEXT_FORMAT_CLASS_NAME,
    TYPE_ATTR,
    ElementType,
)
from pagemodel.html_utils import new_tag, replace_inner_html

_WITH_BACKGROUND = frozenset({ElementType.CONTAINER, ElementType.HTML})


def _element_div(element_type: ElementType) -> Tag:
    return new_tag("div", {TYPE_ATTR: element_type.value})


def _content_div(html: str, *extra_classes: str) -> Tag:
    content = new_tag("div")
    content["class"] = [ELEMENT_CONTENT_CLASS_NAME, *extra_classes]
    replace_inner_html(content, html)
    return content


def build_container() -> Tag:
    return _element_div(ElementType.CONTAINER)


def build_text() -> Tag:
    element = _element_div(ElementType.TEXT)
    # "normal" keeps default formatting when the editor leaves a bare text node
    element.append(_content_div(DEFAULT_TEXT_CONTENT, TEXT_FORMAT_CLASS_NAME))
    return element


def build_html() -> Tag:
    element = _element_div(ElementType.HTML)
    element.append(_content_div(DEFAULT_HTML_CONTENT))
    return element


def build_image() -> Tag:
    # The image tag is added once loaded
    return _element_div(ElementType.IMAGE)


_BUILDERS: dict[ElementType, Callable[[], Tag]] = {
    ElementType.CONTAINER: build_container,
    ElementType.TEXT: build_text,
    ElementType.HTML: build_html,
    ElementType.IMAGE: build_image,
}


def build_element(element_type: ElementType) -> Tag:
    """Detached markup of a new element of the given type."""
    return _BUILDERS[ElementType(element_type)]()


def drop_position(scroll_x: int, scroll_y: int) -> tuple[int, int]:
    """Where new elements land: a fixed offset from the visible top left corner."""
    return DROP_OFFSET_X + scroll_x, DROP_OFFSET_Y + scroll_y


def default_style(element_type: ElementType, left: int, top: int) -> dict[str, str]:
    style = {
        "height": f"{DEFAULT_HEIGHT}px",
        "width": f"{DEFAULT_WIDTH}px",
        "top": f"{top}px",
        "left": f"{left}px",
    }
    if element_type in _WITH_BACKGROUND:
        style["background-color"] = DEFAULT_BACKGROUND_COLOR
    return style
