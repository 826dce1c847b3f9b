"""Inspect the model elements of a stage document, or print its publish form."""

from __future__ import annotations

import argparse
import logging
from collections import Counter
from pathlib import Path
from typing import Iterator

import httpx

from pagemodel.element import ElementModel
from pagemodel.exceptions import ParseError
from pagemodel.html_utils import parse_document
from pagemodel.sanitize import to_publish_form
from pagemodel.schemas import ElementInfo
from pagemodel.stage import create_context


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="pagemodel", description=__doc__)
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug messages")
    subparsers = parser.add_subparsers(dest="command", required=True)

    inspect_parser = subparsers.add_parser("inspect", help="List model elements")
    _add_source_arguments(inspect_parser)
    inspect_parser.add_argument("--pages", nargs="*", default=[], help="Page names used by the document")
    inspect_parser.add_argument("--json", action="store_true", help="Print elements as JSON")

    publish_parser = subparsers.add_parser("publish", help="Print the publish form of a document")
    _add_source_arguments(publish_parser)
    publish_parser.add_argument("--base-url", help="Absolute URL of the document")

    args = parser.parse_args(argv)
    if not args.url and not args.file:
        parser.error("Provide --url or --file")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    html = load_html(url=args.url, file_path=args.file)
    if args.command == "publish":
        print(to_publish_form(html, args.base_url or args.url))
        return 0

    elements = collect_elements(html, page_names=args.pages)
    if args.json:
        for info in elements:
            print(info.model_dump_json())
        return 0

    counts = Counter(_walk_types(elements))
    print("Types:")
    for name, count in counts.most_common():
        print(f"{name}: {count}")
    print("\nElements:")
    for info in elements:
        _print_tree(info, depth=0)
    return 0


def load_html(*, url: str | None, file_path: str | None) -> str:
    if url:
        response = httpx.get(url, follow_redirects=True, timeout=15.0)
        response.raise_for_status()
        return response.text

    path = Path(file_path or "")
    if not path.is_file():
        raise FileNotFoundError(f"HTML file not found: {path}")
    return path.read_text(encoding="utf-8")


def collect_elements(html: str, *, page_names: list[str] | None = None) -> list[ElementInfo]:
    """Describe the top level model elements of a document."""
    document = parse_document(html)
    if document.body is None:
        raise ParseError("document has no body")
    model = ElementModel(create_context(document, page_names=page_names or []))
    root = model.context.body.root_node()
    top_level = [
        node
        for node in model.iter_elements(root)
        if not any(model.get_type(parent) is not None for parent in node.parents)
    ]
    return [info for info in map(model.describe, top_level) if info is not None]


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--url", help="URL to fetch")
    parser.add_argument("--file", help="Local HTML file path")


def _walk_types(elements: list[ElementInfo]) -> Iterator[str]:
    for info in elements:
        yield info.type.value
        yield from _walk_types(info.children)


def _print_tree(info: ElementInfo, *, depth: int) -> None:
    parts = [info.type.value, info.element_id or "-"]
    if info.class_name:
        parts.append(f"class={info.class_name!r}")
    if info.pages:
        parts.append(f"pages={','.join(info.pages)}")
    if info.link:
        parts.append(f"link={info.link}")
    print("    " * depth + "  ".join(parts))
    for child in info.children:
        _print_tree(child, depth=depth + 1)


if __name__ == "__main__":
    raise SystemExit(main())
