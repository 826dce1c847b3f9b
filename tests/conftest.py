"""Test setup for pagemodel."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from bs4 import BeautifulSoup  # noqa: E402

from pagemodel.element import ElementModel  # noqa: E402
from pagemodel.html_utils import parse_document  # noqa: E402
from pagemodel.stage import create_context  # noqa: E402

BASE_URL = "http://example.com/sites/demo/index.html"


@pytest.fixture
def stage_html() -> str:
    """A saved page with a background container and two pages."""
    return """
    <html>
      <head><title>Demo</title></head>
      <body>
        <div class="background editable-style container-element" data-silex-type="container"
             data-silex-id="silex-id-1-bg">
          <div class="editable-style text-element page1" data-silex-type="text"
               data-silex-id="silex-id-1-a">
            <div class="silex-element-content normal">Hello</div>
          </div>
        </div>
      </body>
    </html>
    """


@pytest.fixture
def document(stage_html: str) -> BeautifulSoup:
    return parse_document(stage_html)


@pytest.fixture
def model(document: BeautifulSoup) -> ElementModel:
    """Element model on the stage document, page1 active, known base URL."""
    context = create_context(
        document,
        base_url=BASE_URL,
        page_names=["page1", "page2"],
        active_page="page1",
    )
    return ElementModel(context)
