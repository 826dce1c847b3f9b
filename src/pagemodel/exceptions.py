"""Custom exceptions for pagemodel."""

from __future__ import annotations

import logging

from bs4.element import Tag

from pagemodel.html_utils import describe_node


class PageModelError(Exception):
    """Base exception for pagemodel operations."""


class PreconditionViolation(PageModelError):
    """Operation called on a node it does not apply to."""


class StructuralInconsistency(PageModelError):
    """Model node markup does not match what its type requires."""


class FetchError(PageModelError):
    """Error during content fetching."""


class LoadFailure(FetchError):
    """Transport reported a failure while loading an image."""


class ParseError(PageModelError):
    """Error during document parsing."""


def report(
    error: PageModelError, node: Tag | None = None, *, logger: logging.Logger
) -> str:
    """Log ``error`` against the offending node and return its message.

    Precondition and structural problems are reported rather than raised:
    public operations call this and return without mutating the tree.
    """
    message = str(error)
    if node is None:
        logger.error("%s: %s", type(error).__name__, message)
    else:
        logger.error("%s: %s %s", type(error).__name__, message, describe_node(node))
    return message
