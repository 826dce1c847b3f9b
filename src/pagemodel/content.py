"""Find the node holding a model node's user content."""

from __future__ import annotations

import logging

from bs4.element import Tag

from pagemodel.classifier import get_type, is_element
from pagemodel.constants import ELEMENT_CONTENT_CLASS_NAME, ElementType
from pagemodel.exceptions import StructuralInconsistency, report
from pagemodel.html_utils import element_children, has_class

logger = logging.getLogger(__name__)


def find_content_nodes(node: Tag) -> list[Tag]:
    """Content-marked descendants of ``node``, not looking inside nested model nodes."""
    found: list[Tag] = []
    for child in element_children(node):
        if has_class(child, ELEMENT_CONTENT_CLASS_NAME):
            found.append(child)
        elif not is_element(child):
            found.extend(find_content_nodes(child))
    return found


def get_content_node(node: Tag) -> Tag:
    """Return the node which holds the content of ``node``.

    Text, HTML and loaded image elements have exactly one descendant marked
    ``silex-element-content``; containers hold their content themselves.
    When the marker is missing or ambiguous the node itself is returned, and
    the inconsistency is reported unless the node's type allows it.
    """
    element_type = get_type(node)
    if element_type is ElementType.CONTAINER:
        return node

    candidates = find_content_nodes(node)
    if len(candidates) == 1:
        return candidates[0]

    if len(candidates) > 1:
        report(
            StructuralInconsistency(
                f"found {len(candidates)} content nodes, expected one"
            ),
            node,
            logger=logger,
        )
    elif element_type in (ElementType.TEXT, ElementType.HTML):
        report(
            StructuralInconsistency(f"{element_type.value} element has no content node"),
            node,
            logger=logger,
        )
    elif element_type is ElementType.IMAGE:
        logger.debug("Image element has no image yet")
    return node
