"""Tests for ElementModel operations on a parsed stage."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest
from bs4.element import Tag

from pagemodel.constants import (
    EDITABLE_CLASS_NAME,
    ELEMENT_CONTENT_CLASS_NAME,
    ID_ATTR,
    JUST_ADDED_CLASS_NAME,
    ElementType,
)
from pagemodel.element import ElementModel
from pagemodel.html_utils import get_classes, has_class, parse_document
from pagemodel.stage import create_context


def _text_element(model: ElementModel) -> Tag:
    return model.context.body.root_node().find(attrs={ID_ATTR: "silex-id-1-a"})


def _background(model: ElementModel) -> Tag:
    return model.context.body.root_node().find(class_="background")


class TestCreateElement:
    @pytest.mark.parametrize("element_type", list(ElementType))
    def test_common_markup(self, model: ElementModel, element_type: ElementType) -> None:
        element = model.create_element(element_type)

        assert model.get_type(element) is element_type
        assert element.parent is _background(model)
        classes = get_classes(element)
        assert EDITABLE_CLASS_NAME in classes
        assert f"{element_type.value}-element" in classes
        assert JUST_ADDED_CLASS_NAME in classes
        assert element[ID_ATTR] in classes
        assert model.context.body.is_editable(element)

    def test_default_style(self, model: ElementModel) -> None:
        element = model.create_element(ElementType.TEXT)

        assert model.context.properties.get_style_object(element) == {
            "height": "100px",
            "width": "100px",
            "top": "100px",
            "left": "100px",
        }

    @pytest.mark.parametrize("element_type", [ElementType.CONTAINER, ElementType.HTML])
    def test_background_color(self, model: ElementModel, element_type: ElementType) -> None:
        element = model.create_element(element_type)
        assert model.get_style(element, "backgroundColor") == "#FFFFFF"

    def test_text_content(self, model: ElementModel) -> None:
        element = model.create_element("text")
        content = model.get_content_node(element)

        assert content is not element
        assert get_classes(content) == [ELEMENT_CONTENT_CLASS_NAME, "normal"]
        assert content.get_text() == "New text box"

    def test_html_content(self, model: ElementModel) -> None:
        element = model.create_element("html")
        assert model.get_inner_html(element) == "<p>New HTML box</p>"

    def test_image_waits_for_content(self, model: ElementModel) -> None:
        element = model.create_element("image")
        assert element.contents == []
        assert model.get_content_node(element) is element

    def test_container_is_empty(self, model: ElementModel) -> None:
        element = model.create_element("container")
        assert element.contents == []

    def test_offset_follows_scroll(self, model: ElementModel) -> None:
        model.context.viewport.x = 20
        model.context.viewport.y = 350

        element = model.create_element("container")

        assert model.get_style(element, "left") == "120px"
        assert model.get_style(element, "top") == "450px"

    def test_ids_are_unique(self, model: ElementModel) -> None:
        first = model.create_element("text")
        second = model.create_element("text")
        assert first[ID_ATTR] != second[ID_ATTR]

    def test_without_background_container(self) -> None:
        document = parse_document("<html><body><p>intro</p></body></html>")
        model = ElementModel(create_context(document))

        element = model.create_element("container")

        assert element.parent is document.body
        assert document.body.contents[-1] is element

    def test_unknown_type(self, model: ElementModel, caplog: pytest.LogCaptureFixture) -> None:
        before = str(model.context.body.root_node())
        with caplog.at_level(logging.ERROR):
            assert model.create_element("video") is None
        assert "unknown element type 'video'" in caplog.text
        assert str(model.context.body.root_node()) == before


class TestStyles:
    def test_same_value_writes_once(self, model: ElementModel) -> None:
        node = _text_element(model)
        store = model.context.properties
        store.set_style = MagicMock(wraps=store.set_style)

        model.set_style(node, "backgroundColor", "red")
        model.set_style(node, "background-color", "red")

        assert store.set_style.call_count == 1
        assert model.get_style(node, "background-color") == "red"

    def test_clears_just_added_even_without_change(self, model: ElementModel) -> None:
        node = _text_element(model)
        model.set_style(node, "color", "red")
        node["class"] = get_classes(node) + [JUST_ADDED_CLASS_NAME]

        model.set_style(node, "color", "red")

        assert not has_class(node, JUST_ADDED_CLASS_NAME)

    def test_none_stores_empty_marker(self, model: ElementModel) -> None:
        node = _text_element(model)
        model.set_style(node, "color", "red")

        model.set_style(node, "color", None)

        assert model.context.properties.get_style_object(node)["color"] == ""
        assert model.get_style(node, "color") is None

    def test_missing_property(self, model: ElementModel) -> None:
        assert model.get_style(_text_element(model), "color") is None

    def test_urls_are_stored_absolute_and_read_relative(self, model: ElementModel) -> None:
        node = _text_element(model)

        model.set_style(node, "background-image", "url('img/a.png')")

        stored = model.context.properties.get_style_object(node)["background-image"]
        assert stored == "url('http://example.com/sites/demo/img/a.png')"
        assert model.get_style(node, "background-image") == "url('img/a.png')"

    def test_computed_includes_inline_style(self, model: ElementModel) -> None:
        node = _text_element(model)
        node["style"] = "color: blue; width: 10px"
        model.set_style(node, "width", "50px")

        assert model.get_style(node, "color") is None
        assert model.get_style(node, "color", computed=True) == "blue"
        assert model.get_style(node, "width", computed=True) == "50px"

    def test_get_all_styles(self, model: ElementModel) -> None:
        node = _text_element(model)
        model.set_style(node, "width", "50px")
        model.set_style(node, "backgroundImage", "url('img/a.png')")
        model.set_style(node, "color", None)

        assert model.get_all_styles(node) == "width: 50px; background-image: url('img/a.png');"

    def test_set_background_image(self, model: ElementModel) -> None:
        node = _text_element(model)
        model.context.body.set_selection([node])
        model.context.body.set_selection = MagicMock(wraps=model.context.body.set_selection)

        model.set_background_image(node, "img/bg.png")

        assert model.get_style(node, "background-image") == "url('img/bg.png')"
        model.context.body.set_selection.assert_called_once_with([node])

    def test_clear_background_image(self, model: ElementModel) -> None:
        node = _text_element(model)
        model.set_background_image(node, "img/bg.png")
        model.context.body.set_selection = MagicMock(wraps=model.context.body.set_selection)

        model.set_background_image(node, None)

        assert model.get_style(node, "background-image") is None
        model.context.body.set_selection.assert_called_once()


class TestAttributes:
    def test_set_and_remove(self, model: ElementModel) -> None:
        node = _text_element(model)

        model.set_attribute(node, "title", "<b>raw</b>")
        assert node["title"] == "<b>raw</b>"

        model.set_attribute(node, "title", None)
        assert "title" not in node.attrs

    def test_remove_missing_attribute(self, model: ElementModel) -> None:
        node = _text_element(model)
        model.set_attribute(node, "alt")
        assert "alt" not in node.attrs

    def test_apply_to_content(self, model: ElementModel) -> None:
        node = _text_element(model)

        model.set_attribute(node, "lang", "fr", apply_to_content=True)

        assert "lang" not in node.attrs
        assert model.get_content_node(node)["lang"] == "fr"

    def test_class_names(self, model: ElementModel) -> None:
        node = _text_element(model)

        model.set_class_name(node, "hero wide")

        assert model.get_class_name(node) == "hero wide"
        assert {"editable-style", "text-element", "page1"} <= set(get_classes(node))

        model.set_class_name(node)
        assert model.get_class_name(node) == ""


class TestInnerHtml:
    def test_get(self, model: ElementModel) -> None:
        assert model.get_inner_html(_text_element(model)) == "Hello"

    def test_set_makes_urls_absolute(self, model: ElementModel) -> None:
        node = _text_element(model)

        model.set_inner_html(node, '<a href="about.html">About</a>')

        content = model.get_content_node(node)
        assert content.a["href"] == "http://example.com/sites/demo/about.html"
        assert model.get_inner_html(node) == '<a href="about.html">About</a>'

    def test_set_disables_author_scripts(self, model: ElementModel) -> None:
        node = model.create_element("html")

        model.set_inner_html(node, '<script class="silex-script" type="text/javascript">go()</script>')

        script = model.get_content_node(node).script
        assert script["type"] == "text/notjavascript"
        assert 'type="text/javascript"' in model.get_inner_html(node)

    def test_editable_flag_restored(self, model: ElementModel) -> None:
        node = _text_element(model)
        body = model.context.body
        body.set_editable(node, True)
        body.set_editable = MagicMock(wraps=body.set_editable)

        model.set_inner_html(node, "Bye")

        assert [call.args[1] for call in body.set_editable.call_args_list] == [False, True]
        assert body.is_editable(node)

    def test_image_has_no_html(self, model: ElementModel, caplog: pytest.LogCaptureFixture) -> None:
        node = model.create_element("image")
        with caplog.at_level(logging.ERROR):
            model.set_inner_html(node, "<p>x</p>")
        assert "PreconditionViolation" in caplog.text
        assert node.contents == []


class TestImageUrl:
    def test_reads_src(self, model: ElementModel) -> None:
        node = model.create_element("image")
        node.append(parse_document('<img class="silex-element-content" src="http://x/a.png">').img)
        assert model.get_image_url(node) == "http://x/a.png"

    def test_not_an_image(self, model: ElementModel, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR):
            assert model.get_image_url(_text_element(model)) == ""
        assert "The element is not an image." in caplog.text

    def test_image_not_loaded(self, model: ElementModel, caplog: pytest.LogCaptureFixture) -> None:
        node = model.create_element("image")
        with caplog.at_level(logging.ERROR):
            assert model.get_image_url(node) == ""
        assert "StructuralInconsistency" in caplog.text


class TestLifecycle:
    def test_add_element(self, model: ElementModel) -> None:
        node = parse_document('<div data-silex-type="container"></div>').div.extract()
        container = _background(model)

        model.add_element(container, node)

        assert container.contents[-1] is node
        assert has_class(node, JUST_ADDED_CLASS_NAME)

    def test_remove_element(self, model: ElementModel) -> None:
        node = model.create_element("text")

        assert model.remove_element(node)

        assert node.parent is None
        assert all(found is not node for found in model.iter_elements())

    def test_remove_body_is_refused(self, model: ElementModel, caplog: pytest.LogCaptureFixture) -> None:
        body = model.context.body.root_node()
        before = str(body)
        with caplog.at_level(logging.ERROR):
            assert not model.remove_element(body)
        assert "not in the stage element" in caplog.text
        assert str(body) == before

    def test_remove_detached_node(self, model: ElementModel, caplog: pytest.LogCaptureFixture) -> None:
        other = parse_document('<div data-silex-type="text"></div>').div
        with caplog.at_level(logging.ERROR):
            assert not model.remove_element(other)
        assert other.parent is not None
        assert "PreconditionViolation" in caplog.text

    def test_iter_elements(self, model: ElementModel) -> None:
        created = model.create_element("image")
        found = list(model.iter_elements())
        assert [model.get_type(node) for node in found] == [
            ElementType.CONTAINER,
            ElementType.TEXT,
            ElementType.IMAGE,
        ]
        assert found[-1] is created


class TestDescribe:
    def test_tree(self, model: ElementModel) -> None:
        model.set_style(_text_element(model), "width", "50px")
        model.set_link(_text_element(model), "#!page-contact")

        info = model.describe(_background(model))

        assert info.type is ElementType.CONTAINER
        assert info.element_id == "silex-id-1-bg"
        assert info.pages == []
        [child] = info.children
        assert child.type is ElementType.TEXT
        assert child.element_id == "silex-id-1-a"
        assert child.pages == ["page1"]
        assert child.link == "#!page-contact"
        assert child.styles == {"width": "50px"}
        assert child.class_name == ""

    def test_plain_markup(self, model: ElementModel, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR):
            assert model.describe(model.context.body.root_node()) is None
        assert "not a model element" in caplog.text


class TestCodec:
    def test_uses_location_base_url(self, model: ElementModel) -> None:
        assert model.to_authoring_form('<img src="a.png">') == (
            '<img src="http://example.com/sites/demo/a.png">'
        )
        assert model.to_publish_form('<img src="http://example.com/sites/demo/a.png">') == (
            '<img src="a.png">'
        )
