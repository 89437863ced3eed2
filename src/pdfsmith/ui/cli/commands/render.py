"""Implementation of the ``render``, ``trace`` and ``tags`` commands."""

from __future__ import annotations

import asyncio
import json
from typing import NoReturn

import typer

from pdfsmith.core.driver import MarkupRenderer
from pdfsmith.core.exceptions import PdfsmithError, exception_messages
from pdfsmith.core.registry import build_default_registry

from .._options import (
    BackendOption,
    ConfigOption,
    DebugOption,
    DumpTreeOption,
    InputPathArgument,
    OutputPathOption,
    SiblingOrderOption,
    TimeoutOption,
    VerboseOption,
)
from ..diagnostics import CliEmitter
from ..presenter import present_handlers, present_render_summary, present_trace
from ..state import configure_logging, set_cli_state
from ..utils import default_output_path, read_markup, resolve_config, write_output_file


_SUFFIXES = {"fpdf": ".pdf", "trace": ".json"}


def _fail(emitter: CliEmitter, exc: Exception) -> NoReturn:
    if emitter.debug_enabled:
        raise exc
    messages = exception_messages(exc)
    emitter.error(messages[0] if messages else type(exc).__name__, exc)
    raise typer.Exit(code=1) from exc


def _start(verbose: int, debug: bool) -> CliEmitter:
    state = set_cli_state(verbosity=verbose, debug=debug)
    configure_logging(state)
    return CliEmitter(state)


def render(
    input_path: InputPathArgument,
    output: OutputPathOption = None,
    config_path: ConfigOption = None,
    backend: BackendOption = None,
    timeout: TimeoutOption = None,
    sibling_order: SiblingOrderOption = None,
    dump_tree: DumpTreeOption = False,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Render a markup document into a PDF file."""
    emitter = _start(verbose, debug)
    try:
        config = resolve_config(
            config_path, backend=backend, timeout=timeout, sibling_order=sibling_order
        )
        renderer = MarkupRenderer(config=config, emitter=emitter)
        root = renderer.parse(read_markup(input_path))
        if dump_tree:
            typer.echo(json.dumps({root.name: root.to_dict()}, indent=2, ensure_ascii=False))
        payload = asyncio.run(renderer.render_tree_async(root))
    except PdfsmithError as exc:
        _fail(emitter, exc)

    target = output or default_output_path(input_path, root, _SUFFIXES[config.backend])
    write_output_file(target, payload)
    completed = emitter.state.consume_events("render_complete")
    pages = completed[-1].get("pages") if completed else None
    present_render_summary(emitter.state, target, len(payload), pages)


def trace(
    input_path: InputPathArgument,
    output: OutputPathOption = None,
    config_path: ConfigOption = None,
    sibling_order: SiblingOrderOption = None,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """List the builder calls a document would produce, without writing a PDF."""
    emitter = _start(verbose, debug)
    try:
        config = resolve_config(config_path, backend="trace", sibling_order=sibling_order)
        renderer = MarkupRenderer(config=config, emitter=emitter)
        payload = renderer.render(read_markup(input_path))
    except PdfsmithError as exc:
        _fail(emitter, exc)

    if output is not None:
        write_output_file(output, payload)
    present_trace(emitter.state, json.loads(payload)["calls"])


def tags(verbose: VerboseOption = 0, debug: DebugOption = False) -> None:
    """List the tags with a registered handler."""
    emitter = _start(verbose, debug)
    try:
        registry = build_default_registry(emitter=emitter)
    except PdfsmithError as exc:
        _fail(emitter, exc)
    present_handlers(emitter.state, registry.describe())


__all__ = ["render", "tags", "trace"]
