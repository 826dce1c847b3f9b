"""Convert embedded HTML between its authoring and publish forms.

Authoring form is what lives in the editor: author scripts cannot run and
URLs are absolute so they resolve regardless of where the editor is served.
Publish form is what gets saved: scripts run and URLs are relative to the
document.
"""

from __future__ import annotations

import re
from typing import Final

from pagemodel.config import PAGEMODEL_STATIC_PATH
from pagemodel.constants import SCRIPT_CLASS_NAME
from pagemodel.urls import (
    absolute_to_relative,
    normalize_static_paths,
    relative_to_absolute,
    remove_cache_control,
)

SCRIPT_TYPE: Final[str] = "text/javascript"
DISABLED_SCRIPT_TYPE: Final[str] = "text/notjavascript"
# Set on author scripts that had no type attribute, removed again on publish
UNTYPED_SCRIPT_TYPE: Final[str] = f"{DISABLED_SCRIPT_TYPE};untyped"

_SCRIPT_OPEN_RE = re.compile(r"<script\b[^>]*>", re.IGNORECASE)
_AUTHOR_SCRIPT_RE = re.compile(
    r"""(?<![\w-])class\s*=\s*(["'])(?:[^"']*\s)?""" + re.escape(SCRIPT_CLASS_NAME) + r"""(?:\s[^"']*)?\1""",
    re.IGNORECASE,
)
_TYPE_ATTR_RE = re.compile(r"""(?<![\w-])type\s*=\s*(["'])(.*?)\1""", re.IGNORECASE)
_UNTYPED_ATTR: Final[str] = f' type="{UNTYPED_SCRIPT_TYPE}"'


def to_authoring_form(raw_html: str, base_url: str | None = None) -> str:
    """Prepare HTML for the editor.

    Author scripts (``<script class="silex-script">``) get a non-executable
    type. When ``base_url`` is known, relative URLs become absolute.
    """
    html = _SCRIPT_OPEN_RE.sub(_disable_script, raw_html)
    if base_url:
        html = relative_to_absolute(html, base_url)
    return html


def to_publish_form(
    html: str,
    base_url: str | None = None,
    *,
    static_path: str = PAGEMODEL_STATIC_PATH,
) -> str:
    """Undo :func:`to_authoring_form` and drop cache-control parameters."""
    raw_html = _SCRIPT_OPEN_RE.sub(_enable_script, html)
    raw_html = remove_cache_control(raw_html)
    if base_url:
        raw_html = absolute_to_relative(raw_html, base_url)
        raw_html = normalize_static_paths(raw_html, base_url, static_path)
    return raw_html


def _disable_script(match: re.Match[str]) -> str:
    tag = match.group(0)
    if not _AUTHOR_SCRIPT_RE.search(tag):
        return tag
    type_match = _TYPE_ATTR_RE.search(tag)
    if type_match is None:
        return tag[: len("<script")] + _UNTYPED_ATTR + tag[len("<script") :]
    original = type_match.group(2)
    if original.strip().lower() != SCRIPT_TYPE:
        return tag
    # spellings other than the canonical one ride along after the marker
    disabled = DISABLED_SCRIPT_TYPE if original == SCRIPT_TYPE else f"{DISABLED_SCRIPT_TYPE};{original}"
    quote = type_match.group(1)
    return tag[: type_match.start()] + f"type={quote}{disabled}{quote}" + tag[type_match.end() :]


def _enable_script(match: re.Match[str]) -> str:
    tag = match.group(0)
    if tag.startswith(_UNTYPED_ATTR, len("<script")):
        return tag[: len("<script")] + tag[len("<script") + len(_UNTYPED_ATTR) :]
    type_match = _TYPE_ATTR_RE.search(tag)
    if type_match is None:
        return tag
    disabled = type_match.group(2)
    if disabled == DISABLED_SCRIPT_TYPE:
        enabled = SCRIPT_TYPE
    elif disabled.startswith(f"{DISABLED_SCRIPT_TYPE};") and disabled != UNTYPED_SCRIPT_TYPE:
        enabled = disabled[len(DISABLED_SCRIPT_TYPE) + 1 :]
    else:
        return tag
    quote = type_match.group(1)
    return tag[: type_match.start()] + f"type={quote}{enabled}{quote}" + tag[type_match.end() :]
