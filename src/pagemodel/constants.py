"""Markup vocabulary and geometry defaults.

The attribute and class names below are written into saved documents, so
their values must stay byte-for-byte stable.
"""

from __future__ import annotations

from enum import Enum
from typing import Final


class ElementType(str, Enum):
    """Kinds of model node, stored in the ``data-silex-type`` attribute."""

    CONTAINER = "container"
    IMAGE = "image"
    TEXT = "text"
    HTML = "html"


class DomDirection(str, Enum):
    """Direction for moving a node among its siblings."""

    UP = "UP"
    DOWN = "DOWN"
    TOP = "TOP"
    BOTTOM = "BOTTOM"


TYPE_ATTR: Final[str] = "data-silex-type"
LINK_ATTR: Final[str] = "data-silex-href"
ID_ATTR: Final[str] = "data-silex-id"
ID_PREFIX: Final[str] = "silex-id-"

ELEMENT_CONTENT_CLASS_NAME: Final[str] = "silex-element-content"
LOADING_ELEMENT_CLASS_NAME: Final[str] = "loading-image"
JUST_ADDED_CLASS_NAME: Final[str] = "silex-just-added"
SELECTED_CLASS_NAME: Final[str] = "silex-selected"
EDITABLE_CLASS_NAME: Final[str] = "editable-style"
BACKGROUND_CLASS_NAME: Final[str] = "background"
PAGED_CLASS_NAME: Final[str] = "paged-element"
PAGED_VISIBLE_CLASS_NAME: Final[str] = "paged-element-visible"
PREVENT_DRAGGABLE_CLASS_NAME: Final[str] = "prevent-draggable"
PREVENT_RESIZABLE_CLASS_NAME: Final[str] = "prevent-resizable"
PREVENT_DROPPABLE_CLASS_NAME: Final[str] = "prevent-droppable"
TEXT_FORMAT_CLASS_NAME: Final[str] = "normal"

SCRIPT_CLASS_NAME: Final[str] = "silex-script"
CACHE_CONTROL_PARAM_NAME: Final[str] = "silex-cache-control"


def type_class_name(element_type: ElementType) -> str:
    """CSS class tagging a node with its type, e.g. ``text-element``."""
    return f"{element_type.value}-element"


# Classes owned by the editor; never shown to authors as their own classes.
RESERVED_CLASS_NAMES: Final[frozenset[str]] = frozenset(
    {
        EDITABLE_CLASS_NAME,
        SELECTED_CLASS_NAME,
        JUST_ADDED_CLASS_NAME,
        ELEMENT_CONTENT_CLASS_NAME,
        LOADING_ELEMENT_CLASS_NAME,
        PAGED_CLASS_NAME,
        PAGED_VISIBLE_CLASS_NAME,
        PREVENT_DRAGGABLE_CLASS_NAME,
        PREVENT_RESIZABLE_CLASS_NAME,
        PREVENT_DROPPABLE_CLASS_NAME,
        *(type_class_name(element_type) for element_type in ElementType),
    }
)

# Geometry, in CSS pixels
MIN_WIDTH: Final[int] = 20
MIN_HEIGHT: Final[int] = 20
DEFAULT_WIDTH: Final[int] = 100
DEFAULT_HEIGHT: Final[int] = 100
DROP_OFFSET_X: Final[int] = 100
DROP_OFFSET_Y: Final[int] = 100

DEFAULT_BACKGROUND_COLOR: Final[str] = "#FFFFFF"
DEFAULT_TEXT_CONTENT: Final[str] = "New text box"
DEFAULT_HTML_CONTENT: Final[str] = "<p>New HTML box</p>"
