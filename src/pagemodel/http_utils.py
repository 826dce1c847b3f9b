"""Image download over HTTP with retries on transient failures."""

from __future__ import annotations

import asyncio
from typing import Final

import httpx

from pagemodel.config import (
    PAGEMODEL_FETCH_BACKOFF_S,
    PAGEMODEL_FETCH_MAX_RETRIES,
    PAGEMODEL_FETCH_TIMEOUT_S,
    PAGEMODEL_USER_AGENT,
)
from pagemodel.exceptions import LoadFailure

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})
IMAGE_CONTENT_TYPE_PREFIX: Final[str] = "image/"

_MAX_REDIRECTS: Final[int] = 5


async def fetch_image_bytes(
    url: str, *, client: httpx.AsyncClient | None = None
) -> bytes:
    """Download the image at ``url``.

    Args:
        url: Absolute URL of the image.
        client: Shared client; a short-lived one is opened when omitted.

    Returns:
        The response body.

    Raises:
        LoadFailure: On 404, on a response that is not an image, or when
            every attempt failed.
    """
    if client is not None:
        return await _download(client, url)

    async with httpx.AsyncClient(
        timeout=httpx.Timeout(PAGEMODEL_FETCH_TIMEOUT_S),
        headers={"User-Agent": PAGEMODEL_USER_AGENT},
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    ) as own_client:
        return await _download(own_client, url)


async def _download(client: httpx.AsyncClient, url: str) -> bytes:
    last_error: Exception | None = None
    for attempt in range(PAGEMODEL_FETCH_MAX_RETRIES + 1):
        if attempt:
            await asyncio.sleep(PAGEMODEL_FETCH_BACKOFF_S * (2 ** (attempt - 1)))
        try:
            response = await client.get(url)
        except httpx.RequestError as exc:
            last_error = exc
            continue

        if response.status_code == 404:
            raise LoadFailure(f"Image not found at {url}")
        if response.status_code in RETRY_STATUS_CODES:
            last_error = LoadFailure(f"HTTP {response.status_code} from {url}")
            continue
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise LoadFailure(f"HTTP {response.status_code} from {url}") from exc
        _check_image_type(response, url)
        return response.content

    raise LoadFailure(f"Failed to fetch {url}: {last_error}")


def _check_image_type(response: httpx.Response, url: str) -> None:
    content_type = response.headers.get("content-type", "")
    if not content_type.lower().startswith(IMAGE_CONTENT_TYPE_PREFIX):
        raise LoadFailure(
            f"Unexpected content type {content_type or 'none'!r} from {url}"
        )
