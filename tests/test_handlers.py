from __future__ import annotations

from typing import Any

import pytest

from pdfsmith.core.exceptions import InvalidAttributeError
from pdfsmith.core.registry import TagData
from pdfsmith.handlers.basic import add_page, draw_text, positive_number


class FakeSession:
    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    def add_page(self) -> None:
        self.calls.append(("add_page", None))

    def set_font(self, name: str) -> None:
        self.calls.append(("set_font", name))

    def set_font_size(self, size: float) -> None:
        self.calls.append(("set_font_size", size))

    def set_fill_color(self, value: str) -> None:
        self.calls.append(("set_fill_color", value))

    def draw_text(self, text: str, **options: Any) -> None:
        self.calls.append(("draw_text", (text, options)))


def _tag(name: str = "text", text: str = "", **attributes: str) -> TagData:
    return TagData(name=name, attributes=attributes, text=text)


def test_page_handler_adds_page() -> None:
    session = FakeSession()
    add_page(session, _tag("page"))  # type: ignore[arg-type]

    assert session.calls == [("add_page", None)]


def test_text_handler_applies_state_before_drawing() -> None:
    session = FakeSession()
    tag = _tag(
        text="Title",
        font="Times-Bold",
        fontSize="20",
        color="red",
        align="Center",
        width="200",
    )

    draw_text(session, tag)  # type: ignore[arg-type]

    assert session.calls == [
        ("set_font", "Times-Bold"),
        ("set_font_size", 20.0),
        ("set_fill_color", "red"),
        ("draw_text", ("Title", {"width": 200.0, "align": "center"})),
    ]


def test_text_handler_without_attributes_only_draws() -> None:
    session = FakeSession()
    draw_text(session, _tag(text="Paragraph"))  # type: ignore[arg-type]

    assert session.calls == [("draw_text", ("Paragraph", {}))]


def test_empty_attributes_count_as_absent() -> None:
    session = FakeSession()
    draw_text(session, _tag(text="x", fontSize="", color="", font=""))  # type: ignore[arg-type]

    assert session.calls == [("draw_text", ("x", {}))]


def test_unknown_alignment_is_passed_through() -> None:
    session = FakeSession()
    draw_text(session, _tag(text="x", align="diagonal"))  # type: ignore[arg-type]

    assert session.calls == [("draw_text", ("x", {"align": "diagonal"}))]


@pytest.mark.parametrize("raw", ["abc", "0", "-3", "nan", "inf"])
def test_invalid_font_size_is_rejected(raw: str) -> None:
    session = FakeSession()

    with pytest.raises(InvalidAttributeError) as excinfo:
        draw_text(session, _tag(text="x", fontSize=raw))  # type: ignore[arg-type]

    assert excinfo.value.tag == "text"
    assert excinfo.value.attribute == "fontSize"
    assert excinfo.value.value == raw
    assert "a positive number" in str(excinfo.value)
    assert session.calls == []


def test_positive_number_parses_padded_values() -> None:
    assert positive_number(_tag(width=" 12.5 "), "width") == 12.5
    assert positive_number(_tag(), "width") is None
