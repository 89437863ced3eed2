from __future__ import annotations

from pathlib import Path

import pytest

from pdfsmith.adapters.colors import parse_color
from pdfsmith.adapters.fonts import font_file, standard_font
from pdfsmith.core.exceptions import UnsupportedColorError


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("red", (255, 0, 0)),
        (" Black ", (0, 0, 0)),
        ("#0f0", (0, 255, 0)),
        ("#1A2b3C", (26, 43, 60)),
        ("darkorange", (255, 140, 0)),
        ("SteelBlue", (70, 130, 180)),
        ("rebeccapurple", (102, 51, 153)),
    ],
)
def test_parse_color(value: str, expected: tuple[int, int, int]) -> None:
    assert parse_color(value) == expected


@pytest.mark.parametrize("value", ["", "reddish", "#12", "#gggggg", "rgb(0,0,0)"])
def test_parse_color_rejects_unknown_syntax(value: str) -> None:
    with pytest.raises(UnsupportedColorError, match="Unsupported colour|empty"):
        parse_color(value)


def test_standard_font_names_are_case_insensitive() -> None:
    assert standard_font("Helvetica-BoldOblique") == ("helvetica", "BI")
    assert standard_font("times-roman") == ("times", "")
    assert standard_font("Garamond") is None


def test_font_file_prefers_registered_names(tmp_path: Path) -> None:
    registered = tmp_path / "brand.ttf"
    registered.write_bytes(b"not really a font")
    direct = tmp_path / "Direct.OTF"
    direct.write_bytes(b"")

    assert font_file("brand", {"Brand": registered}) == registered
    assert font_file("Brand", {"Brand": tmp_path / "gone.ttf"}) is None
    assert font_file(str(direct), {}) == direct
    assert font_file(str(tmp_path / "notes.txt"), {}) is None
