"""URL rewriting helpers for HTML fragments and CSS values."""

from __future__ import annotations

import posixpath
import re
import time
from typing import Callable
from urllib.parse import urljoin, urlsplit, urlunsplit

from pagemodel.constants import CACHE_CONTROL_PARAM_NAME

# src="..." / href='...', but not data-*-href attributes
_ATTR_URL_RE = re.compile(r"""(?<![\w-])(src|href)(\s*=\s*)(["'])(.*?)\3""", re.IGNORECASE)
_CSS_URL_RE = re.compile(r"""url\((\s*)(["']?)(.*?)\2(\s*)\)""", re.IGNORECASE)
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")
_CACHE_CONTROL_RE = re.compile(
    r"([?&])" + re.escape(CACHE_CONTROL_PARAM_NAME) + r"=\d*(&?)"
)
_URL_KEYWORD_RE = re.compile(r"""^\s*url\(\s*(["']?)(.*?)\1\s*\)\s*$""", re.IGNORECASE)


def is_relative_url(url: str) -> bool:
    """Whether ``url`` is relative to the document's own folder.

    Root-relative paths, fragments, query-only references and anything with
    a scheme (``http:``, ``data:``, ``mailto:``...) are not.
    """
    if not url or url.startswith(("#", "/", "?", "{{")):
        return False
    return not _SCHEME_RE.match(url)


def to_absolute_url(url: str, base_url: str) -> str:
    if not is_relative_url(url):
        return url
    return urljoin(base_url, url)


def to_relative_url(url: str, base_url: str) -> str:
    """Express ``url`` relative to the folder of ``base_url``.

    URLs on another origin are returned unchanged.
    """
    target = urlsplit(url)
    base = urlsplit(base_url)
    if not target.scheme or (target.scheme, target.netloc) != (base.scheme, base.netloc):
        return url

    base_dir = base.path.rsplit("/", 1)[0] + "/" if base.path else "/"
    target_path = target.path or "/"
    relative = posixpath.relpath(target_path, base_dir)
    if relative == ".":
        relative = "./"
    elif target_path.endswith("/"):
        relative += "/"
    return urlunsplit(("", "", relative, target.query, target.fragment))


def directory_depth(base_url: str) -> int:
    """Number of folders between the site root and the document."""
    path = urlsplit(base_url).path
    return len([part for part in path.rsplit("/", 1)[0].split("/") if part])


def relative_to_absolute(text: str, base_url: str) -> str:
    """Rewrite relative URLs in attributes and CSS ``url()`` to absolute."""
    return _rewrite_urls(text, lambda url: to_absolute_url(url, base_url))


def absolute_to_relative(text: str, base_url: str) -> str:
    """Rewrite same-origin absolute URLs in attributes and CSS ``url()`` to relative."""
    return _rewrite_urls(text, lambda url: to_relative_url(url, base_url))


def normalize_static_paths(text: str, base_url: str, static_path: str) -> str:
    """Replace over-long ``../`` runs pointing at the shared assets folder.

    ``../../../static/x.js`` under a document one folder deep cannot be
    resolved relatively, so it becomes ``//host/static/x.js``.
    """
    depth = directory_depth(base_url)
    host = urlsplit(base_url).netloc
    pattern = re.compile(r"((?:\.\./)+)" + re.escape(static_path))

    def _replace(match: re.Match[str]) -> str:
        if len(match.group(1)) // 3 <= depth:
            return match.group(0)
        return f"//{host}/{static_path}"

    return pattern.sub(_replace, text)


def add_url_keyword(url: str) -> str:
    """Wrap a URL for use as a CSS value, e.g. ``url('img.png')``."""
    return f"url('{url}')"


def remove_url_keyword(value: str) -> str:
    match = _URL_KEYWORD_RE.match(value)
    if match:
        return match.group(2)
    return value


def add_cache_control(url: str) -> str:
    """Append a timestamp parameter so a changed image is not served from cache."""
    url = remove_cache_control(url)
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{CACHE_CONTROL_PARAM_NAME}={int(time.time() * 1000)}"


def remove_cache_control(text: str) -> str:
    def _replace(match: re.Match[str]) -> str:
        if match.group(1) == "?":
            return "?" if match.group(2) else ""
        return match.group(2)

    return _CACHE_CONTROL_RE.sub(_replace, text)


def _rewrite_urls(text: str, convert: Callable[[str], str]) -> str:
    def _attr(match: re.Match[str]) -> str:
        name, equals, quote, url = match.groups()
        return f"{name}{equals}{quote}{convert(url)}{quote}"

    def _css(match: re.Match[str]) -> str:
        lead, quote, url, trail = match.groups()
        return f"url({lead}{quote}{convert(url)}{quote}{trail})"

    text = _ATTR_URL_RE.sub(_attr, text)
    return _CSS_URL_RE.sub(_css, text)
