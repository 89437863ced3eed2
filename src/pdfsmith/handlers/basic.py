"""Built-in handlers for the ``page`` and ``text`` tags."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from pdfsmith.core.exceptions import InvalidAttributeError
from pdfsmith.core.registry import TagData, handles


if TYPE_CHECKING:  # pragma: no cover - typing only
    from pdfsmith.core.session import DocumentSession


TEXT_ALIGNMENTS = frozenset({"left", "center", "right", "justify"})


def positive_number(tag: TagData, attribute: str) -> float | None:
    """Return ``attribute`` parsed as a positive number, ``None`` when absent."""
    raw = tag.attributes.get(attribute)
    if not raw:
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        raise InvalidAttributeError(tag.name, attribute, raw, "a positive number") from None
    if not math.isfinite(value) or value <= 0:
        raise InvalidAttributeError(tag.name, attribute, raw, "a positive number")
    return value


@handles("page", name="add_page")
def add_page(session: DocumentSession, tag: TagData) -> None:
    """Start a new page."""
    session.add_page()


@handles("text", name="draw_text")
def draw_text(session: DocumentSession, tag: TagData) -> None:
    """Apply font and colour attributes, then draw the element text."""
    attributes = tag.attributes

    font = attributes.get("font")
    if font:
        session.set_font(font)

    font_size = positive_number(tag, "fontSize")
    if font_size is not None:
        session.set_font_size(font_size)

    color = attributes.get("color")
    if color:
        session.set_fill_color(color)

    options: dict[str, Any] = {}
    width = positive_number(tag, "width")
    if width is not None:
        options["width"] = width
    align = attributes.get("align")
    if align:
        # Unknown values are left for the session to accept or reject.
        normalised = align.strip().lower()
        options["align"] = normalised if normalised in TEXT_ALIGNMENTS else align

    session.draw_text(tag.text or "", **options)


__all__ = ["TEXT_ALIGNMENTS", "add_page", "draw_text", "positive_number"]
