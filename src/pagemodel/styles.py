"""CSS declaration helpers."""

from __future__ import annotations

import re

_UPPER_RE = re.compile(r"([A-Z])")


def to_selector_case(name: str) -> str:
    """Convert a camel case style name to its CSS form.

    ``backgroundColor`` becomes ``background-color``; names already in CSS
    form are returned unchanged.
    """
    return _UPPER_RE.sub(lambda match: "-" + match.group(1).lower(), name)


def style_to_string(style: dict[str, str] | None) -> str:
    """Serialize a style map as CSS declarations, skipping cleared values."""
    if not style:
        return ""
    return "".join(
        f"{to_selector_case(name)}: {value}; " for name, value in style.items() if value
    ).strip()


def string_to_style(css: str) -> dict[str, str]:
    """Parse CSS declarations such as an inline ``style`` attribute."""
    style: dict[str, str] = {}
    for declaration in _split_declarations(css):
        name, sep, value = declaration.partition(":")
        if not sep:
            continue
        name = name.strip().lower()
        value = value.strip()
        if name:
            style[name] = value
    return style


def _split_declarations(css: str) -> list[str]:
    # Semicolons inside url(...) or quotes do not end a declaration
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    quote = ""
    for char in css:
        if quote:
            if char == quote:
                quote = ""
        elif char in "\"'":
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif char == ";" and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]
