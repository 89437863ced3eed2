"""Diagnostic abstractions shared across the rendering pipeline.

The parser, the registry loader and the render driver report through a
:class:`DiagnosticEmitter`. Library callers get a :class:`LoggingEmitter` bound
to the reporting module's logger; the CLI substitutes its rich-backed emitter.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface warnings, errors, and structured events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module."""

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        if exc is None:
            self._logger.warning(message)
        elif self.debug_enabled:
            self._logger.warning(message, exc_info=exc)
        else:
            # Keep the cause on one line unless tracebacks were asked for.
            self._logger.warning("%s: %s", message, exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self._logger.error(message, exc_info=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.info(message)
            return
        self._logger.debug("diagnostic event %s: %s", name, dict(payload))


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for selected diagnostic events."""
    data = dict(payload)

    if name == "render_start":
        backend = data.get("backend") or "<unknown>"
        fields = data.get("fields", 0)
        return f"Rendering document with {fields} top-level field(s) using the {backend} backend"

    if name == "render_complete":
        size = data.get("bytes", 0)
        pages = data.get("pages")
        suffix = f", {pages} page(s)" if pages is not None else ""
        return f"Rendered {size} bytes{suffix}"

    return None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "format_event_message",
]
