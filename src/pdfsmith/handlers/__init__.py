"""Handler modules translating markup tags into session calls."""

from __future__ import annotations

from . import basic


__all__ = ["basic"]
