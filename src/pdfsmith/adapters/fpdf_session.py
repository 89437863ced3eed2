"""Document session producing PDF output with fpdf2."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
import io
import logging
from pathlib import Path
import re

from fpdf import FPDF
from fpdf.enums import Align, XPos, YPos
from fpdf.errors import FPDFException
import pypdf

from pdfsmith.core.config import RenderConfig
from pdfsmith.core.exceptions import (
    DocumentBuilderError,
    FontNotFoundError,
    NoPageError,
    UnsupportedOptionError,
)
from pdfsmith.core.session import DocumentOptions, EventedSession

from .colors import parse_color
from .fonts import font_file, font_key, standard_font


logger = logging.getLogger(__name__)

LINE_HEIGHT_RATIO = 1.2

_ALIGNMENTS = {
    "left": Align.L,
    "center": Align.C,
    "right": Align.R,
    "justify": Align.J,
}
_FAMILY_RE = re.compile(r"[^a-z0-9]+")


class FpdfSession(EventedSession):
    """Session drawing onto an :class:`fpdf.FPDF` document measured in points."""

    def __init__(
        self,
        options: DocumentOptions | None = None,
        *,
        fonts: Mapping[str, Path] | None = None,
        creation_date: datetime | None = None,
    ) -> None:
        self.options = options or DocumentOptions()
        super().__init__(chunk_size=self.options.chunk_size)
        self._fonts = dict(fonts or {})
        self._embedded: dict[str, str] = {}
        self._pages = 0

        try:
            pdf = FPDF(orientation=self.options.layout, unit="pt", format=self.options.size)
        except FPDFException as exc:
            raise UnsupportedOptionError(f"Unsupported page size {self.options.size!r}.") from exc
        margin = self.options.margin
        pdf.set_margins(margin, margin, margin)
        pdf.set_auto_page_break(auto=True, margin=margin)
        pdf.set_creator("pdfsmith")
        if self.options.title:
            pdf.set_title(self.options.title)
        if self.options.author:
            pdf.set_author(self.options.author)
        if self.options.subject:
            pdf.set_subject(self.options.subject)
        if self.options.keywords:
            pdf.set_keywords(self.options.keywords)
        if creation_date is not None:
            pdf.set_creation_date(creation_date)
        self._creation_date = creation_date
        self._pdf = pdf

        self._apply_font(self.options.font)
        pdf.set_font_size(self.options.font_size)

    @classmethod
    def from_options(cls, options: DocumentOptions, config: RenderConfig) -> FpdfSession:
        return cls(options, fonts=config.fonts, creation_date=config.creation_date)

    @property
    def page_count(self) -> int:
        return self._pages

    @property
    def document(self) -> FPDF:
        return self._pdf

    def add_page(self) -> None:
        self._require_building("add a page")
        self._pdf.add_page()
        self._pages += 1

    def set_font(self, name: str) -> None:
        self._require_building("set the font")
        self._apply_font(name)

    def set_font_size(self, size: float) -> None:
        self._require_building("set the font size")
        self._pdf.set_font_size(size)

    def set_fill_color(self, value: str) -> None:
        self._require_building("set the fill colour")
        red, green, blue = parse_color(value)
        self._pdf.set_text_color(red, green, blue)
        self._pdf.set_fill_color(red, green, blue)

    def draw_text(self, text: str, *, width: float | None = None, align: str | None = None) -> None:
        self._require_building("draw text")
        if self._pages == 0:
            raise NoPageError("Cannot draw text before a page has been added.")
        alignment = Align.L
        if align is not None:
            alignment = _ALIGNMENTS.get(align)
            if alignment is None:
                raise UnsupportedOptionError(
                    f"Unsupported text alignment {align!r}: expected one of {', '.join(_ALIGNMENTS)}."
                )
        line_height = self._pdf.font_size * LINE_HEIGHT_RATIO
        try:
            self._pdf.multi_cell(
                width or 0,
                line_height,
                text,
                align=alignment,
                new_x=XPos.LMARGIN,
                new_y=YPos.NEXT,
            )
        except FPDFException as exc:
            raise DocumentBuilderError(f"Unable to draw text: {exc}") from exc

    def _apply_font(self, name: str) -> None:
        resolved = standard_font(name)
        if resolved is None:
            family = self._embed_font(name)
            resolved = (family, "")
        family, style = resolved
        try:
            self._pdf.set_font(family, style)
        except FPDFException as exc:
            raise FontNotFoundError(name) from exc

    def _embed_font(self, name: str) -> str:
        key = font_key(name)
        family = self._embedded.get(key)
        if family is not None:
            return family

        path = font_file(name, self._fonts)
        if path is None:
            raise FontNotFoundError(name)
        family = _FAMILY_RE.sub("-", path.stem.lower()).strip("-") or f"font{len(self._embedded)}"
        try:
            self._pdf.add_font(family, "", fname=str(path))
        except (FPDFException, OSError, RuntimeError) as exc:
            raise FontNotFoundError(name) from exc
        logger.debug("Embedded font %s from %s", family, path)
        self._embedded[key] = family
        return family

    def _encode(self) -> bytes:
        if self._pages == 0:
            return self._encode_empty()
        return bytes(self._pdf.output())

    def _encode_empty(self) -> bytes:
        # fpdf always emits at least one page, so a document without pages
        # is written by pypdf instead.
        writer = pypdf.PdfWriter()
        metadata = {"/Creator": "pdfsmith"}
        for key, value in (
            ("/Title", self.options.title),
            ("/Author", self.options.author),
            ("/Subject", self.options.subject),
            ("/Keywords", self.options.keywords),
        ):
            if value:
                metadata[key] = value
        if self._creation_date is not None:
            metadata["/CreationDate"] = self._creation_date.strftime("D:%Y%m%d%H%M%S")
        writer.add_metadata(metadata)
        buffer = io.BytesIO()
        writer.write(buffer)
        return buffer.getvalue()


__all__ = ["LINE_HEIGHT_RATIO", "FpdfSession"]
