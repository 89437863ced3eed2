"""Diagnostic emitter bridging the core pipeline with CLI rendering utilities."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pdfsmith.core.diagnostics import DiagnosticEmitter, format_event_message

from .state import CLIState, emit_error, emit_warning, get_cli_state, render_message


class CliEmitter(DiagnosticEmitter):
    """Report pipeline diagnostics on the rich CLI consoles.

    Warnings and errors are printed as they happen. Events are kept on the CLI
    state so a command can summarise them once the render returns; from ``-v``
    upwards they are echoed as info lines too.
    """

    def __init__(self, state: CLIState | None = None) -> None:
        self.state = state or get_cli_state()

    @property
    def debug_enabled(self) -> bool:  # type: ignore[override]
        return self.state.show_tracebacks

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.state.record_event("warning", {"message": message})
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        data = dict(payload)
        self.state.record_event(name, data)
        if self.state.verbosity < 1:
            return
        message = format_event_message(name, data)
        if message:
            render_message("info", message)


__all__ = ["CliEmitter"]
