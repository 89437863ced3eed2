from __future__ import annotations

import io
from pathlib import Path

import pypdf
import pytest

from pdfsmith.adapters.fpdf_session import FpdfSession
from pdfsmith.core.config import RenderConfig
from pdfsmith.core.driver import render
from pdfsmith.core.exceptions import (
    FontNotFoundError,
    NoPageError,
    SessionStateError,
    UnsupportedColorError,
    UnsupportedOptionError,
)
from pdfsmith.core.session import DocumentOptions


def test_session_starts_with_configured_font() -> None:
    session = FpdfSession(DocumentOptions(font="Courier-Bold", font_size=9))

    assert session.document.font_family == "courier"
    assert session.document.font_style == "B"
    assert session.document.font_size_pt == 9
    assert session.page_count == 0


def test_page_geometry_follows_options() -> None:
    assert FpdfSession(DocumentOptions(size="letter", layout="landscape")).document.w == pytest.approx(792)
    custom = FpdfSession(DocumentOptions(size=(200.0, 300.0))).document
    assert custom.w == pytest.approx(200)
    assert custom.h == pytest.approx(300)


def test_unknown_page_size_is_rejected() -> None:
    with pytest.raises(UnsupportedOptionError, match="page size"):
        FpdfSession(DocumentOptions(size="napkin"))


def test_add_page_counts_pages() -> None:
    session = FpdfSession()
    session.add_page()
    session.add_page()

    assert session.page_count == 2
    assert session.document.page_no() == 2


def test_draw_text_requires_a_page() -> None:
    with pytest.raises(NoPageError):
        FpdfSession().draw_text("orphan")


def test_draw_text_rejects_unknown_alignment() -> None:
    session = FpdfSession()
    session.add_page()

    with pytest.raises(UnsupportedOptionError, match="diagonal"):
        session.draw_text("x", align="diagonal")


def test_draw_text_advances_to_next_line() -> None:
    session = FpdfSession(DocumentOptions(margin=50))
    session.add_page()
    session.set_font_size(20)
    start = session.document.get_y()

    session.draw_text("Title", align="center")

    assert session.document.get_y() == pytest.approx(start + 24)
    assert session.document.get_x() == pytest.approx(50)


def test_font_selection() -> None:
    session = FpdfSession()
    session.set_font("Times-Italic")

    assert session.document.font_family == "times"
    assert session.document.font_style == "I"
    with pytest.raises(FontNotFoundError, match="Comic"):
        session.set_font("Comic")


def test_registered_font_must_exist(tmp_path: Path) -> None:
    session = FpdfSession(fonts={"Brand": tmp_path / "missing.ttf"})

    with pytest.raises(FontNotFoundError, match="Brand"):
        session.set_font("Brand")


def test_colour_validation() -> None:
    session = FpdfSession()
    session.set_fill_color("#336699")
    session.set_fill_color("Navy")

    with pytest.raises(UnsupportedColorError):
        session.set_fill_color("rgb(1, 2, 3)")


def test_abandoned_session_rejects_mutations() -> None:
    session = FpdfSession()
    session.abandon()

    with pytest.raises(SessionStateError, match="abandoned"):
        session.add_page()


def test_metadata_is_written() -> None:
    pdf = render(
        '<document title="Report" author="Ada" subject="Numbers"><page><text>x</text></page></document>'
    )
    metadata = pypdf.PdfReader(io.BytesIO(pdf)).metadata

    assert metadata is not None
    assert metadata.title == "Report"
    assert metadata.author == "Ada"
    assert metadata.subject == "Numbers"


def test_empty_document_keeps_metadata() -> None:
    pdf = render('<document title="Empty"/>')
    reader = pypdf.PdfReader(io.BytesIO(pdf))

    assert len(reader.pages) == 0
    assert reader.metadata is not None
    assert reader.metadata.title == "Empty"


def test_page_size_from_document_attribute() -> None:
    pdf = render('<document size="A4"><page/></document>', config=RenderConfig(page_size="letter"))
    box = pypdf.PdfReader(io.BytesIO(pdf)).pages[0].mediabox

    assert float(box.width) == pytest.approx(595.28, abs=0.01)
    assert float(box.height) == pytest.approx(841.89, abs=0.01)
