from __future__ import annotations

import logging

import pytest

from pdfsmith.core.exceptions import MalformedMarkupError
from pdfsmith.core.nodes import Repeated, Single
from pdfsmith.core.parser import parse_markup


MARKUP = """
  <document size="A4">
    <page>
      <text
        color="red"
        fontSize="20"
        align="center"
      >
        Title
      </text>
      <text color="black" fontSize="12">Paragraph</text>
    </page>
  </document>
"""


def test_parse_builds_attributed_tree() -> None:
    root = parse_markup(MARKUP)

    assert root.name == "document"
    assert root.attributes == {"size": "A4"}
    assert root.text == ""
    (page_field,) = root.children
    assert isinstance(page_field, Single)
    page = page_field.element
    assert page.name == "page"
    (text_field,) = page.children
    assert isinstance(text_field, Repeated)
    title, paragraph = text_field.elements
    assert title.text == "Title"
    assert title.attributes == {"color": "red", "fontSize": "20", "align": "center"}
    assert paragraph.text == "Paragraph"


def test_empty_elements_carry_empty_text() -> None:
    root = parse_markup("<document><page/><text></text></document>")

    assert [child.text for child in root.iter_children()] == ["", ""]
    assert all(child.attributes == {} for child in root.iter_children())


def test_text_only_includes_direct_segments() -> None:
    root = parse_markup("<document><text>Hello <wrap>inner</wrap> world</text></document>")

    (text,) = root.iter_children()
    assert text.text == "Hello  world"
    (wrap,) = text.iter_children()
    assert wrap.text == "inner"


def test_reserved_attribute_key_is_dropped(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="pdfsmith.core.parser"):
        root = parse_markup("<document><attrs/><page/></document>")

    assert [child.name for child in root.iter_children()] == ["page"]
    assert any("reserved" in record.message for record in caplog.records)


def test_comments_are_ignored() -> None:
    root = parse_markup("<document><!-- note --><page/></document>")

    assert [child.name for child in root.iter_children()] == ["page"]


def test_grouped_sibling_order() -> None:
    markup = "<document><text>a</text><page/><text>b</text></document>"

    document_order = parse_markup(markup)
    grouped = parse_markup(markup, sibling_order="grouped")

    assert [field.name for field in document_order.children] == ["text", "page", "text"]
    assert [field.name for field in grouped.children] == ["text", "page"]


def test_bytes_input_is_accepted() -> None:
    root = parse_markup(b"<?xml version='1.0' encoding='utf-8'?><document><page/></document>")

    assert [child.name for child in root.iter_children()] == ["page"]


def test_str_input_ignores_declared_encoding() -> None:
    declared = '<?xml version="1.0" encoding="ISO-8859-1"?><document><text>caf\u00e9</text></document>'

    (text,) = parse_markup(declared).iter_children()

    assert text.text == "caf\u00e9"


def test_bytes_input_follows_declared_encoding() -> None:
    declared = '<?xml version="1.0" encoding="ISO-8859-1"?><document><text>caf\u00e9</text></document>'

    (text,) = parse_markup(declared.encode("iso-8859-1")).iter_children()

    assert text.text == "caf\u00e9"


@pytest.mark.parametrize(
    "markup",
    [
        "<document><page></document>",
        "<document>",
        "not markup at all",
    ],
)
def test_malformed_markup_raises(markup: str) -> None:
    with pytest.raises(MalformedMarkupError, match="not well-formed"):
        parse_markup(markup)


def test_empty_markup_raises() -> None:
    with pytest.raises(MalformedMarkupError, match="empty"):
        parse_markup("   \n ")


def test_root_must_be_document() -> None:
    with pytest.raises(MalformedMarkupError, match="Expected a <document> root"):
        parse_markup("<page/>")
