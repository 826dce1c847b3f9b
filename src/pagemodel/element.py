"""Manipulate the model nodes of a stage document.

:class:`ElementModel` is the entry point of the package. It binds the
per-concern helpers (classifier, content resolver, ordering, class names,
factory, image loading) to an :class:`~pagemodel.context.EditorContext`, and
funnels every piece of text entering or leaving the tree through the
sanitization codec.

Misuse such as removing the body or loading an image into a text element is
logged and ignored rather than raised.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterator

from bs4.element import Tag

from pagemodel import classes, classifier, content, ordering
from pagemodel.constants import (
    BACKGROUND_CLASS_NAME,
    EDITABLE_CLASS_NAME,
    JUST_ADDED_CLASS_NAME,
    DomDirection,
    ElementType,
    type_class_name,
)
from pagemodel.context import EditorContext
from pagemodel.exceptions import PreconditionViolation, StructuralInconsistency, report
from pagemodel.factory import build_element, default_style, drop_position
from pagemodel.html_utils import (
    add_class,
    document_of,
    element_children,
    inner_html,
    is_descendant,
    remove_class,
    replace_inner_html,
)
from pagemodel.image_loader import (
    NOT_AN_IMAGE_MESSAGE,
    ErrorCallback,
    ImageFetcher,
    ImageLoadController,
    LoadedCallback,
    LoadResult,
)
from pagemodel.sanitize import to_authoring_form, to_publish_form
from pagemodel.schemas import ElementInfo
from pagemodel.styles import style_to_string, to_selector_case
from pagemodel.urls import add_url_keyword

logger = logging.getLogger(__name__)


class ElementModel:
    """Element operations for one edited document."""

    def __init__(
        self, context: EditorContext, *, fetcher: ImageFetcher | None = None
    ) -> None:
        self.context = context
        self.images = ImageLoadController(context, fetcher)

    # Codec

    def to_authoring_form(self, raw_html: str) -> str:
        return to_authoring_form(raw_html, self.context.location.current_base_url())

    def to_publish_form(self, html: str) -> str:
        return to_publish_form(html, self.context.location.current_base_url())

    # Classification

    get_type = staticmethod(classifier.get_type)
    get_link = staticmethod(classifier.get_link)
    set_link = staticmethod(classifier.set_link)
    get_content_node = staticmethod(content.get_content_node)

    def iter_elements(self, root: Tag | None = None) -> Iterator[Tag]:
        """Model nodes below ``root``, the stage body by default."""
        if root is None:
            root = self.context.body.root_node()
        return classifier.iter_elements(root)

    # Styles and attributes

    def get_all_styles(self, node: Tag, computed: bool = False) -> str:
        style = self.context.properties.get_style_object(node, computed)
        return self.to_publish_form(style_to_string(style))

    def get_style(self, node: Tag, name: str, computed: bool = False) -> str | None:
        """Value of one style property in publish form, None when unset."""
        style = self.context.properties.get_style_object(node, computed)
        value = style.get(to_selector_case(name)) if style else None
        if value:
            return self.to_publish_form(value)
        return None

    def set_style(self, node: Tag, name: str, value: str | None = None) -> None:
        """Set one style property; None clears it.

        The property store is only written when the value changes.
        """
        name = to_selector_case(name)
        style = dict(self.context.properties.get_style_object(node) or {})
        new_value = "" if value is None else self.to_authoring_form(value)
        if style.get(name) != new_value:
            style[name] = new_value
            self.context.properties.set_style(node, style)
        remove_class(node, JUST_ADDED_CLASS_NAME)

    def set_attribute(
        self,
        node: Tag,
        name: str,
        value: str | None = None,
        apply_to_content: bool = False,
    ) -> None:
        """Set or, with None, remove an attribute of the node or its content node."""
        if apply_to_content:
            node = self.get_content_node(node)
        if value is not None:
            node[name] = value
        elif name in node.attrs:
            del node[name]

    def set_background_image(self, node: Tag, url: str | None) -> None:
        if url:
            self.set_style(node, "background-image", add_url_keyword(url))
        else:
            self.set_style(node, "background-image")
        self.context.redraw()

    # Content

    def get_inner_html(self, node: Tag) -> str:
        """HTML of the content node, in publish form."""
        body = self.context.body
        body.set_editable(node, False)
        try:
            html = inner_html(self.get_content_node(node))
        finally:
            body.set_editable(node, True)
        return self.to_publish_form(html)

    def set_inner_html(self, node: Tag, html: str) -> None:
        if self.get_type(node) is ElementType.IMAGE:
            report(PreconditionViolation("image elements have no HTML content"), node, logger=logger)
            return
        target = self.get_content_node(node)
        body = self.context.body
        body.set_editable(node, False)
        try:
            replace_inner_html(target, self.to_authoring_form(html))
        finally:
            body.set_editable(node, True)

    def get_image_url(self, node: Tag) -> str:
        if self.get_type(node) is not ElementType.IMAGE:
            report(PreconditionViolation(NOT_AN_IMAGE_MESSAGE), node, logger=logger)
            return ""
        image = self.get_content_node(node)
        if image is node:
            report(
                StructuralInconsistency("The image could not be retrieved from the element."),
                node,
                logger=logger,
            )
            return ""
        return image.get("src", "")

    def set_image_url(
        self,
        node: Tag,
        url: str,
        on_loaded: LoadedCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> asyncio.Task[LoadResult] | None:
        """Load ``url`` into an image element, see :class:`ImageLoadController`."""
        return self.images.set_image_url(node, url, on_loaded, on_error)

    # Ordering

    def previous_visible(self, node: Tag) -> Tag | None:
        return ordering.previous_visible(node, self.context.pages, self.context.active_page)

    def next_visible(self, node: Tag) -> Tag | None:
        return ordering.next_visible(node, self.context.pages, self.context.active_page)

    def move(self, node: Tag, direction: DomDirection) -> bool:
        if node is self.context.body.root_node():
            report(PreconditionViolation("the stage body cannot be moved"), node, logger=logger)
            return False
        return ordering.move(node, direction, self.context.pages, self.context.active_page)

    # Class names

    def get_class_name(self, node: Tag) -> str:
        return classes.get_class_name(
            node,
            self.context.pages.all_page_names(),
            self.context.properties.get_id(node),
        )

    def set_class_name(self, node: Tag, class_name: str | None = None) -> None:
        classes.set_class_name(
            node,
            class_name,
            self.context.pages.all_page_names(),
            self.context.properties.get_id(node),
        )

    # Lifecycle

    def add_element(self, container: Tag, node: Tag) -> None:
        """Append ``node`` to ``container`` and flag it as just added."""
        container.append(node)
        add_class(node, JUST_ADDED_CLASS_NAME)

    def remove_element(self, node: Tag) -> bool:
        """Detach ``node`` from the stage.

        Only nodes inside the stage body can be removed, never the body
        itself. Returns whether the node was removed.
        """
        root = self.context.body.root_node()
        if node is root or not is_descendant(node, root):
            report(
                PreconditionViolation("could not delete the element because it is not in the stage element"),
                node,
                logger=logger,
            )
            return False
        node.extract()
        return True

    def create_element(self, element_type: ElementType | str) -> Tag | None:
        """Create an element with default content and style and add it to the stage.

        New elements go in the background container when the stage has one,
        100px right of and below the visible top left corner.
        """
        try:
            element_type = ElementType(element_type)
        except ValueError:
            report(PreconditionViolation(f"unknown element type {element_type!r}"), logger=logger)
            return None

        root = self.context.body.root_node()
        container = root.find(class_=BACKGROUND_CLASS_NAME)
        if container is None:
            container = root
        viewport = self.context.viewport
        left, top = drop_position(viewport.scroll_x(), viewport.scroll_y())

        element = build_element(element_type)
        add_class(element, EDITABLE_CLASS_NAME)
        self.context.properties.init_id(element, document_of(root))
        self.context.properties.set_style(element, default_style(element_type, left, top))
        self.context.body.set_editable(element, True)
        add_class(element, type_class_name(element_type))
        self.add_element(container, element)
        logger.debug("Created %s element %s", element_type.value, self.context.properties.get_id(element))
        return element

    # Snapshot

    def describe(self, node: Tag) -> ElementInfo | None:
        element_type = self.get_type(node)
        if element_type is None:
            report(PreconditionViolation("not a model element"), node, logger=logger)
            return None
        style = self.context.properties.get_style_object(node) or {}
        return ElementInfo(
            type=element_type,
            element_id=self.context.properties.get_id(node),
            link=self.get_link(node),
            class_name=self.get_class_name(node),
            pages=self.context.pages.pages_of(node),
            styles={
                name: self.to_publish_form(value) for name, value in style.items() if value
            },
            children=[self.describe(child) for child in _child_elements(node)],
        )


def _child_elements(node: Tag) -> Iterator[Tag]:
    """Nearest model nodes below ``node``."""
    for child in element_children(node):
        if classifier.is_element(child):
            yield child
        else:
            yield from _child_elements(child)
