"""Rich-aware presenters for CLI output and diagnostics."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table
import typer

from .state import CLIState


def _get_console(state: CLIState) -> Console | None:
    """Return the stdout console when attached to a terminal.

    Plain ``typer.echo`` output is used otherwise so piped output stays easy
    to grep.
    """
    console = state.console
    if console.is_terminal:
        return console
    return None


def _build_table(*, title: str | None, columns: Sequence[str]) -> Table:
    """Create a Rich table with the house style."""
    table = Table(title=title or None, box=box.SQUARE, show_edge=True, header_style="bold cyan")
    for column in columns:
        table.add_column(column)
    return table


def present_handlers(state: CLIState, entries: Sequence[Mapping[str, Any]]) -> None:
    """Render the handlers known to a registry."""
    console = _get_console(state)
    if console is not None:
        table = _build_table(title="Registered Handlers", columns=["Tag", "Handler", "Module", "Summary"])
        for entry in entries:
            table.add_row(
                str(entry.get("tag", "")),
                str(entry.get("name", "")),
                str(entry.get("module", "")),
                str(entry.get("summary", "")),
            )
        console.print(table)
        return

    typer.echo("Registered Handlers:")
    for entry in entries:
        summary = entry.get("summary") or ""
        suffix = f" - {summary}" if summary else ""
        typer.echo(f"  - <{entry.get('tag', '')}>: {entry.get('name', '')}{suffix}")


def present_trace(state: CLIState, calls: Sequence[Mapping[str, Any]]) -> None:
    """Render the builder calls recorded by a trace render."""
    console = _get_console(state)
    if console is not None:
        table = _build_table(title="Builder Calls", columns=["#", "Operation", "Arguments"])
        for index, call in enumerate(calls, start=1):
            table.add_row(str(index), str(call.get("operation", "")), _format_arguments(call))
        console.print(table)
        return

    typer.echo("Builder Calls:")
    for index, call in enumerate(calls, start=1):
        arguments = _format_arguments(call)
        typer.echo(f"  {index}. {call.get('operation', '')}({arguments})")


def present_render_summary(state: CLIState, output: Path, size: int, pages: int | None) -> None:
    """Report where the rendered document was written."""
    pages_hint = f", {pages} page(s)" if pages is not None else ""
    message = f"Wrote {output} ({size} bytes{pages_hint})"
    console = _get_console(state)
    if console is not None:
        console.print(f"[green]{message}[/green]")
        return
    typer.echo(message)


def _format_arguments(call: Mapping[str, Any]) -> str:
    arguments = call.get("arguments") or {}
    return ", ".join(f"{key}={value!r}" for key, value in arguments.items())


__all__ = ["present_handlers", "present_render_summary", "present_trace"]
