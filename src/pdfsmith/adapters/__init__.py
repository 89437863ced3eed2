"""Document session backends."""

from __future__ import annotations

from .fpdf_session import FpdfSession
from .trace_session import BuilderCall, TextRun, TraceSession


__all__ = ["BuilderCall", "FpdfSession", "TextRun", "TraceSession"]
