"""pagemodel: element model of a visual page editor."""

from pagemodel.constants import DomDirection, ElementType
from pagemodel.context import EditorContext
from pagemodel.element import ElementModel
from pagemodel.exceptions import (
    FetchError,
    LoadFailure,
    PageModelError,
    ParseError,
    PreconditionViolation,
    StructuralInconsistency,
)
from pagemodel.image_loader import Failed, HttpImageFetcher, Loaded
from pagemodel.sanitize import to_authoring_form, to_publish_form
from pagemodel.schemas import ElementInfo
from pagemodel.stage import create_context

__all__ = [
    "DomDirection",
    "EditorContext",
    "ElementInfo",
    "ElementModel",
    "ElementType",
    "Failed",
    "FetchError",
    "HttpImageFetcher",
    "LoadFailure",
    "Loaded",
    "PageModelError",
    "ParseError",
    "PreconditionViolation",
    "StructuralInconsistency",
    "create_context",
    "to_authoring_form",
    "to_publish_form",
]
