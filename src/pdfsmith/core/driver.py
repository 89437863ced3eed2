"""Render driver orchestrating parse, interpretation, and output assembly."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
import logging

from .completion import CompletionChannel, OutputCollector
from .config import RenderConfig
from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .interpreter import TreeInterpreter
from .nodes import Element
from .parser import parse_markup
from .registry import HandlerRegistry, build_default_registry
from .session import DocumentOptions, DocumentSession


logger = logging.getLogger(__name__)

SessionFactory = Callable[[DocumentOptions, RenderConfig], DocumentSession]


def resolve_session_factory(backend: str) -> SessionFactory:
    """Return the session factory registered for ``backend``."""
    if backend == "fpdf":
        from pdfsmith.adapters.fpdf_session import FpdfSession

        return FpdfSession.from_options
    if backend == "trace":
        from pdfsmith.adapters.trace_session import TraceSession

        return TraceSession.from_options
    raise ValueError(f"Unknown session backend '{backend}'.")


class MarkupRenderer:
    """Render markup documents into encoded bytes.

    One renderer may serve any number of renders, sequentially or
    concurrently: each render gets its own session, and the handler registry
    is frozen on construction.
    """

    def __init__(
        self,
        config: RenderConfig | None = None,
        registry: HandlerRegistry | None = None,
        session_factory: SessionFactory | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.config = config if config is not None else RenderConfig()
        self.emitter = emitter if emitter is not None else LoggingEmitter(logger_obj=logger)
        if registry is None:
            registry = build_default_registry(emitter=self.emitter)
        self.registry = registry.freeze()
        self.interpreter = TreeInterpreter(self.registry)
        self.session_factory = session_factory or resolve_session_factory(self.config.backend)

    def parse(self, markup: str | bytes) -> Element:
        """Parse markup using the configured sibling ordering."""
        return parse_markup(markup, sibling_order=self.config.sibling_order, emitter=self.emitter)

    def open_session(self, root: Element) -> DocumentSession:
        """Create a fresh session from the root element's attributes."""
        options = DocumentOptions.from_attributes(root.attributes, self.config)
        return self.session_factory(options, self.config)

    async def render_async(self, markup: str | bytes) -> bytes:
        """Render markup text, suspending only while the output is assembled."""
        return await self.render_tree_async(self.parse(markup))

    async def render_tree_async(self, root: Element) -> bytes:
        """Render an already parsed tree."""
        session = self.open_session(root)
        channel = CompletionChannel()
        OutputCollector(session, channel)
        self.emitter.event(
            "render_start", {"backend": self.config.backend, "fields": len(root.children)}
        )

        try:
            self.interpreter.interpret(session, root.children)
            session.finalize()
        except BaseException:
            session.abandon()
            channel.close()
            raise

        try:
            payload = await channel.wait(self.config.timeout)
        except BaseException:
            logger.debug("Abandoning session after an interrupted completion wait")
            session.abandon()
            channel.close()
            raise

        self.emitter.event("render_complete", {"bytes": len(payload), "pages": session.page_count})
        return payload

    def render(self, markup: str | bytes) -> bytes:
        """Render markup text from synchronous code."""
        return asyncio.run(self.render_async(markup))


async def render_async(
    markup: str | bytes,
    *,
    config: RenderConfig | None = None,
    registry: HandlerRegistry | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> bytes:
    """Render markup into PDF bytes from within a running event loop."""
    renderer = MarkupRenderer(config=config, registry=registry, emitter=emitter)
    return await renderer.render_async(markup)


def render(
    markup: str | bytes,
    *,
    config: RenderConfig | None = None,
    registry: HandlerRegistry | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> bytes:
    """Render markup into PDF bytes."""
    renderer = MarkupRenderer(config=config, registry=registry, emitter=emitter)
    return renderer.render(markup)


__all__ = [
    "MarkupRenderer",
    "SessionFactory",
    "render",
    "render_async",
    "resolve_session_factory",
]
