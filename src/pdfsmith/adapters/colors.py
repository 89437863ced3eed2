"""Colour parsing for the PDF session."""

from __future__ import annotations

from fpdf.html import color_as_decimal

from pdfsmith.core.exceptions import UnsupportedColorError


def parse_color(value: str) -> tuple[int, int, int]:
    """Return the RGB triple for a CSS colour name or ``#rgb``/``#rrggbb`` value.

    Names and hex digits are resolved by fpdf2's HTML colour table, so any
    colour its HTML renderer accepts is accepted here.
    """
    try:
        rgb = color_as_decimal(value.strip().lower())
    except (TypeError, ValueError) as exc:
        raise UnsupportedColorError(
            f"Unsupported colour {value!r}: use a CSS colour name, #rgb or #rrggbb."
        ) from exc
    if rgb is None:
        raise UnsupportedColorError("Colour value is empty.")
    return (round(rgb.r * 255), round(rgb.g * 255), round(rgb.b * 255))


__all__ = ["parse_color"]
