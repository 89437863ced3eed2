"""Command implementations for the pdfsmith CLI."""

from __future__ import annotations

from .render import render, tags, trace


__all__ = ["render", "tags", "trace"]
