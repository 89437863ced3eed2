"""Core primitives of the markup interpreter."""

from __future__ import annotations

from .completion import CompletionChannel, OutputCollector
from .config import RenderConfig, build_config, load_config
from .driver import MarkupRenderer, render, render_async
from .interpreter import TreeInterpreter
from .nodes import ATTRIBUTES_KEY, ChildField, Element, Repeated, Single
from .parser import parse_markup
from .registry import HandlerRegistry, TagData, build_default_registry, handles
from .session import DocumentOptions, DocumentSession, EventedSession, RenderState


__all__ = [
    "ATTRIBUTES_KEY",
    "ChildField",
    "CompletionChannel",
    "DocumentOptions",
    "DocumentSession",
    "Element",
    "EventedSession",
    "HandlerRegistry",
    "MarkupRenderer",
    "OutputCollector",
    "RenderConfig",
    "RenderState",
    "Repeated",
    "Single",
    "TagData",
    "TreeInterpreter",
    "build_config",
    "build_default_registry",
    "handles",
    "load_config",
    "parse_markup",
    "render",
    "render_async",
]
