"""Document session protocol and the event plumbing shared by backends.

A session owns all builder state for one render. It accepts mutations while
``BUILDING``; :meth:`EventedSession.finalize` moves it to ``FINALIZING`` and
schedules output production on the running event loop. Encoded bytes are then
delivered through ``data`` events, one chunk per loop iteration, followed by a
single ``end`` event that marks the session ``COMPLETE``. Encoding failures
are reported through an ``error`` event instead.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
import logging
import math
import re
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .exceptions import InvalidAttributeError, SessionStateError


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .config import RenderConfig


logger = logging.getLogger(__name__)

SESSION_EVENTS = ("data", "end", "error")

_CUSTOM_SIZE_RE = re.compile(
    r"^\s*(?P<width>\d+(?:\.\d+)?)\s*[x×]\s*(?P<height>\d+(?:\.\d+)?)\s*$", re.IGNORECASE
)


class RenderState(Enum):
    """Lifecycle of a document session."""

    BUILDING = "building"
    FINALIZING = "finalizing"
    COMPLETE = "complete"


@runtime_checkable
class DocumentSession(Protocol):
    """Operations the interpreter and handlers rely on."""

    state: RenderState

    @property
    def page_count(self) -> int: ...

    def add_page(self) -> None: ...

    def set_font(self, name: str) -> None: ...

    def set_font_size(self, size: float) -> None: ...

    def set_fill_color(self, value: str) -> None: ...

    def draw_text(self, text: str, *, width: float | None = None, align: str | None = None) -> None: ...

    def finalize(self) -> None: ...

    def abandon(self) -> None: ...

    def on(self, event: str, callback: Callable[..., Any]) -> DocumentSession: ...


@dataclass(slots=True)
class DocumentOptions:
    """Document-level settings resolved from the root element."""

    size: str | tuple[float, float] = "letter"
    layout: str = "portrait"
    margin: float = 72.0
    font: str = "Helvetica"
    font_size: float = 12.0
    title: str | None = None
    author: str | None = None
    subject: str | None = None
    keywords: str | None = None
    chunk_size: int = 16384

    @classmethod
    def from_attributes(
        cls, attributes: Mapping[str, str], config: RenderConfig | None = None
    ) -> DocumentOptions:
        """Merge ``<document>`` attributes over the configured defaults."""
        if config is None:
            from .config import RenderConfig

            config = RenderConfig()

        options = cls(
            size=config.page_size,
            layout=config.layout,
            margin=config.margin,
            font=config.font,
            font_size=config.font_size,
            chunk_size=config.chunk_size,
        )
        for key, raw in attributes.items():
            value = raw.strip()
            if key == "size":
                options.size = _coerce_size(value)
            elif key == "layout":
                lowered = value.lower()
                if lowered not in {"portrait", "landscape"}:
                    raise InvalidAttributeError("document", key, raw, "'portrait' or 'landscape'")
                options.layout = lowered
            elif key == "margin":
                options.margin = _coerce_margin(raw)
            elif key in {"title", "author", "subject", "keywords"}:
                setattr(options, key, value or None)
            else:
                logger.debug("Ignoring unsupported document attribute '%s'", key)
        return options


def _coerce_size(raw: str) -> str | tuple[float, float]:
    match = _CUSTOM_SIZE_RE.match(raw)
    if match:
        width = float(match.group("width"))
        height = float(match.group("height"))
        if width <= 0 or height <= 0:
            raise InvalidAttributeError("document", "size", raw, "a positive WIDTHxHEIGHT in points")
        return (width, height)
    if not raw:
        raise InvalidAttributeError("document", "size", raw, "a page format name or WIDTHxHEIGHT")
    return raw


def _coerce_margin(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise InvalidAttributeError("document", "margin", raw, "a non-negative number") from None
    if value < 0 or not math.isfinite(value):
        raise InvalidAttributeError("document", "margin", raw, "a non-negative number")
    return value


class EventedSession:
    """Base class implementing state guards and asynchronous output delivery.

    Subclasses implement the builder operations and :meth:`_encode`.
    """

    def __init__(self, *, chunk_size: int = 16384) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.state = RenderState.BUILDING
        self.chunk_size = chunk_size
        self._listeners: dict[str, list[Callable[..., Any]]] = {event: [] for event in SESSION_EVENTS}
        self._abandoned = False

    @property
    def abandoned(self) -> bool:
        return self._abandoned

    def on(self, event: str, callback: Callable[..., Any]) -> EventedSession:
        """Subscribe ``callback`` to ``data``, ``end`` or ``error`` events."""
        if event not in self._listeners:
            raise ValueError(f"Unknown session event '{event}'.")
        self._listeners[event].append(callback)
        return self

    def _require_building(self, operation: str) -> None:
        if self._abandoned:
            raise SessionStateError(f"Cannot {operation}: the session was abandoned.")
        if self.state is not RenderState.BUILDING:
            raise SessionStateError(f"Cannot {operation}: the session is {self.state.value}.")

    def finalize(self) -> None:
        """Stop accepting mutations and schedule output production."""
        self._require_building("finalize")
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            raise SessionStateError("finalize() must be called from a running event loop.") from exc
        self.state = RenderState.FINALIZING
        loop.call_soon(self._flush, loop)

    def abandon(self) -> None:
        """Drop the session without delivering any further events."""
        if self.state is RenderState.COMPLETE:
            return
        self._abandoned = True
        self._listeners = {event: [] for event in SESSION_EVENTS}

    def _encode(self) -> bytes:
        raise NotImplementedError

    def _flush(self, loop: asyncio.AbstractEventLoop) -> None:
        if self._abandoned:
            return
        try:
            payload = self._encode()
        except Exception as exc:
            logger.debug("Session encoding failed", exc_info=True)
            self._emit("error", exc)
            return
        size = self.chunk_size
        chunks = deque(payload[offset : offset + size] for offset in range(0, len(payload), size))
        self._deliver(loop, chunks)

    def _deliver(self, loop: asyncio.AbstractEventLoop, chunks: deque[bytes]) -> None:
        if self._abandoned:
            return
        if chunks:
            self._emit("data", chunks.popleft())
            loop.call_soon(self._deliver, loop, chunks)
            return
        self.state = RenderState.COMPLETE
        self._emit("end")

    def _emit(self, event: str, *args: Any) -> None:
        for callback in list(self._listeners[event]):
            callback(*args)


__all__ = [
    "SESSION_EVENTS",
    "DocumentOptions",
    "DocumentSession",
    "EventedSession",
    "RenderState",
]
