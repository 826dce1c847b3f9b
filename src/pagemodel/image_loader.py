"""Asynchronous loading of the image shown by an image element.

``ImageLoadController.set_image_url`` marks the element as loading, drops
the image it showed, and returns an asyncio task. The task resolves to
:class:`Loaded` once the new image tag is attached, or :class:`Failed`.

Each call gets its own token. A newer call on the same element does not
cancel an older one, but when the older one completes it is no longer the
element's current load and its result is discarded without touching the
tree or calling back.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Protocol, Union

import httpx
from bs4.element import Tag

from pagemodel.classifier import get_type
from pagemodel.constants import (
    ELEMENT_CONTENT_CLASS_NAME,
    LOADING_ELEMENT_CLASS_NAME,
    ElementType,
)
from pagemodel.context import EditorContext
from pagemodel.exceptions import FetchError, LoadFailure, PreconditionViolation, report
from pagemodel.html_utils import add_class, new_tag, remove_class
from pagemodel.http_utils import fetch_image_bytes

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "An error occurred while loading the image."
NOT_AN_IMAGE_MESSAGE = "The element is not an image."
SUPERSEDED_MESSAGE = "The image load was superseded by a newer one."

LoadedCallback = Callable[[Tag, Tag], None]
ErrorCallback = Callable[[Tag, str], None]


@dataclass(frozen=True)
class Loaded:
    """The image was fetched and attached to the element."""

    element: Tag
    image: Tag


@dataclass(frozen=True)
class Failed:
    """The image could not be loaded, or the load was superseded."""

    element: Tag
    reason: str


LoadResult = Union[Loaded, Failed]


class ImageFetcher(Protocol):
    """Transport used to load images."""

    async def fetch(self, url: str) -> Tag:
        """Load the image at ``url`` and return an ``img`` tag for it.

        Raises:
            FetchError: If the image cannot be loaded.
        """
        ...


class HttpImageFetcher:
    """Fetch images over HTTP with :func:`fetch_image_bytes`.

    ``data:image/...`` URLs are accepted without a request.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._client = client

    async def fetch(self, url: str) -> Tag:
        if not url.startswith("data:image/"):
            content = await fetch_image_bytes(url, client=self._client)
            if not content:
                raise LoadFailure(f"Empty image at {url}")
        return new_tag("img", {"src": url})


class ImageLoadController:
    """Replace the image of image elements, one asynchronous load at a time."""

    def __init__(
        self, context: EditorContext, fetcher: ImageFetcher | None = None
    ) -> None:
        self._context = context
        self._fetcher = fetcher or HttpImageFetcher()
        # id(element) -> (element, token of the load the element waits for)
        self._current: dict[int, tuple[Tag, object]] = {}
        # strong references to running loads, dropped when they finish
        self._tasks: set[asyncio.Task[LoadResult]] = set()

    def is_loading(self, element: Tag) -> bool:
        return id(element) in self._current

    def set_image_url(
        self,
        element: Tag,
        url: str,
        on_loaded: LoadedCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> asyncio.Task[LoadResult] | None:
        """Start loading ``url`` into an image element.

        Must be called from a running event loop; otherwise ``RuntimeError``
        is raised and the element is left untouched. Returns None, after
        calling ``on_error``, when ``element`` is not an image element.
        The returned task may be ignored: the controller keeps it alive.
        """
        if get_type(element) is not ElementType.IMAGE:
            message = report(PreconditionViolation(NOT_AN_IMAGE_MESSAGE), element, logger=logger)
            if on_error:
                on_error(element, message)
            return None

        loop = asyncio.get_running_loop()
        add_class(element, LOADING_ELEMENT_CLASS_NAME)
        for image in element.find_all("img", class_=ELEMENT_CONTENT_CLASS_NAME):
            image.extract()

        token = object()
        self._current[id(element)] = (element, token)
        task = loop.create_task(self._load(element, url, token, on_loaded, on_error))
        self._tasks.add(task)
        task.add_done_callback(self._forget_task)
        return task

    async def drain(self) -> None:
        """Wait until no image load is running."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def _load(
        self,
        element: Tag,
        url: str,
        token: object,
        on_loaded: LoadedCallback | None,
        on_error: ErrorCallback | None,
    ) -> LoadResult:
        try:
            image = await self._fetcher.fetch(url)
        except asyncio.CancelledError:
            self._release(element, token)
            raise
        except FetchError as exc:
            if not self._release(element, token):
                return Failed(element, SUPERSEDED_MESSAGE)
            return self._fail(element, url, str(exc) or LOAD_ERROR_MESSAGE, on_error)
        except Exception:
            if not self._release(element, token):
                return Failed(element, SUPERSEDED_MESSAGE)
            logger.exception("Unexpected error while loading image %s", url)
            return self._fail(element, url, LOAD_ERROR_MESSAGE, on_error)

        if not self._release(element, token):
            logger.debug("Discarding stale image load of %s", url)
            return Failed(element, SUPERSEDED_MESSAGE)

        add_class(image, ELEMENT_CONTENT_CLASS_NAME)
        # the loader may tag images with its own id
        image.attrs.pop("id", None)
        element.append(image)
        remove_class(element, LOADING_ELEMENT_CLASS_NAME)
        logger.debug("Loaded image %s", url)
        if on_loaded:
            on_loaded(element, image)
        self._context.redraw()
        return Loaded(element, image)

    def _fail(
        self,
        element: Tag,
        url: str,
        message: str,
        on_error: ErrorCallback | None,
    ) -> Failed:
        remove_class(element, LOADING_ELEMENT_CLASS_NAME)
        logger.warning("Could not load image %s: %s", url, message)
        if on_error:
            on_error(element, message)
        return Failed(element, message)

    def _release(self, element: Tag, token: object) -> bool:
        """Forget the load if it is still the element's current one."""
        entry = self._current.get(id(element))
        if entry is None or entry[1] is not token:
            return False
        del self._current[id(element)]
        return True

    def _forget_task(self, task: asyncio.Task[LoadResult]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Image load callback failed", exc_info=error)
