"""Snapshot model of a model node."""

from __future__ import annotations

from pydantic import BaseModel, Field

from pagemodel.constants import ElementType


class ElementInfo(BaseModel):
    """What an author sees of a model node.

    Attributes:
        type: Kind of element.
        element_id: Generated id, None for nodes not registered yet.
        link: Link target, None when the element is not a link.
        class_name: Author classes, reserved ones filtered out.
        pages: Pages the element is shown on; empty means every page.
        styles: Style declarations in publish form.
        children: Model nodes nested directly or indirectly in this one.
    """

    type: ElementType
    element_id: str | None = None
    link: str | None = None
    class_name: str = ""
    pages: list[str] = Field(default_factory=list)
    styles: dict[str, str] = Field(default_factory=dict)
    children: list["ElementInfo"] = Field(default_factory=list)
