"""Primary public API for pdfsmith."""

from __future__ import annotations

from pdfsmith.core.completion import CompletionChannel, OutputCollector
from pdfsmith.core.config import RenderConfig, load_config
from pdfsmith.core.driver import MarkupRenderer, render, render_async
from pdfsmith.core.exceptions import (
    CompletionError,
    ConfigurationError,
    DocumentBuilderError,
    FontNotFoundError,
    HandlerRegistrationError,
    InvalidAttributeError,
    MalformedMarkupError,
    NoPageError,
    PdfsmithError,
    RenderTimeoutError,
    SessionStateError,
    UnsupportedColorError,
    UnsupportedOptionError,
)
from pdfsmith.core.interpreter import TreeInterpreter
from pdfsmith.core.nodes import Element, Repeated, Single
from pdfsmith.core.parser import parse_markup
from pdfsmith.core.registry import HandlerRegistry, TagData, build_default_registry, handles
from pdfsmith.core.session import DocumentOptions, DocumentSession, RenderState
from pdfsmith.version import get_version


__version__ = get_version()

__all__ = [
    "CompletionChannel",
    "CompletionError",
    "ConfigurationError",
    "DocumentBuilderError",
    "DocumentOptions",
    "DocumentSession",
    "Element",
    "FontNotFoundError",
    "HandlerRegistrationError",
    "HandlerRegistry",
    "InvalidAttributeError",
    "MalformedMarkupError",
    "MarkupRenderer",
    "NoPageError",
    "OutputCollector",
    "PdfsmithError",
    "RenderConfig",
    "RenderState",
    "RenderTimeoutError",
    "Repeated",
    "SessionStateError",
    "Single",
    "TagData",
    "TreeInterpreter",
    "UnsupportedColorError",
    "UnsupportedOptionError",
    "__version__",
    "build_default_registry",
    "handles",
    "load_config",
    "parse_markup",
    "render",
    "render_async",
]
