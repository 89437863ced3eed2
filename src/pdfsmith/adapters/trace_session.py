"""Deterministic session recording builder calls instead of drawing them.

The encoded output is a JSON document listing every call and the text runs
drawn on each page. It backs the ``pdfsmith trace`` command and lets tests
inspect what a render asked the builder to do without parsing a PDF.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
import json
from pathlib import Path
from typing import Any

from pdfsmith.core.config import RenderConfig
from pdfsmith.core.exceptions import FontNotFoundError, NoPageError, UnsupportedOptionError
from pdfsmith.core.session import DocumentOptions, EventedSession

from .colors import parse_color
from .fonts import font_file, standard_font


TRACE_ALIGNMENTS = ("left", "center", "right", "justify")


@dataclass(frozen=True, slots=True)
class BuilderCall:
    """One operation requested from the session."""

    operation: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class TextRun:
    """Text drawn on a page together with the state it was drawn with."""

    text: str
    font: str
    font_size: float
    color: str
    width: float | None = None
    align: str | None = None


class TraceSession(EventedSession):
    """Session that records operations and encodes them as JSON."""

    def __init__(
        self, options: DocumentOptions | None = None, *, fonts: Mapping[str, Path] | None = None
    ) -> None:
        self.options = options or DocumentOptions()
        super().__init__(chunk_size=self.options.chunk_size)
        self._fonts = dict(fonts or {})
        self.calls: list[BuilderCall] = []
        self.pages: list[list[TextRun]] = []
        self.font = self.options.font
        self.font_size = self.options.font_size
        self.color = "black"

    @classmethod
    def from_options(cls, options: DocumentOptions, config: RenderConfig) -> TraceSession:
        return cls(options, fonts=config.fonts)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def text_runs(self) -> list[TextRun]:
        return [run for page in self.pages for run in page]

    def operations(self) -> list[str]:
        return [call.operation for call in self.calls]

    def add_page(self) -> None:
        self._require_building("add a page")
        self.calls.append(BuilderCall("add_page"))
        self.pages.append([])

    def set_font(self, name: str) -> None:
        self._require_building("set the font")
        if standard_font(name) is None and font_file(name, self._fonts) is None:
            raise FontNotFoundError(name)
        self.calls.append(BuilderCall("set_font", {"name": name}))
        self.font = name

    def set_font_size(self, size: float) -> None:
        self._require_building("set the font size")
        self.calls.append(BuilderCall("set_font_size", {"size": size}))
        self.font_size = size

    def set_fill_color(self, value: str) -> None:
        self._require_building("set the fill colour")
        parse_color(value)
        self.calls.append(BuilderCall("set_fill_color", {"value": value}))
        self.color = value

    def draw_text(self, text: str, *, width: float | None = None, align: str | None = None) -> None:
        self._require_building("draw text")
        if not self.pages:
            raise NoPageError("Cannot draw text before a page has been added.")
        if align is not None and align not in TRACE_ALIGNMENTS:
            raise UnsupportedOptionError(f"Unsupported text alignment {align!r}.")
        arguments: dict[str, Any] = {"text": text}
        if width is not None:
            arguments["width"] = width
        if align is not None:
            arguments["align"] = align
        self.calls.append(BuilderCall("draw_text", arguments))
        self.pages[-1].append(
            TextRun(
                text=text,
                font=self.font,
                font_size=self.font_size,
                color=self.color,
                width=width,
                align=align,
            )
        )

    def _encode(self) -> bytes:
        payload = {
            "options": asdict(self.options),
            "calls": [asdict(call) for call in self.calls],
            "pages": [[asdict(run) for run in page] for page in self.pages],
        }
        return json.dumps(payload, sort_keys=True, ensure_ascii=False).encode("utf-8")


__all__ = ["TRACE_ALIGNMENTS", "BuilderCall", "TextRun", "TraceSession"]
