"""Public CLI exports for pdfsmith."""

from __future__ import annotations

from .app import app, main
from .commands import render, tags, trace
from .state import debug_enabled, emit_error, emit_warning, get_cli_state


__all__ = [
    "app",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "main",
    "render",
    "tags",
    "trace",
]
