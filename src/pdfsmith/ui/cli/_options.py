"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
RENDERING_PANEL = "Rendering"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

InputPathArgument = Annotated[
    Path,
    typer.Argument(
        metavar="INPUT",
        help="Markup document to render. Use '-' to read from stdin.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        allow_dash=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML file holding renderer settings (top level or under 'pdfsmith:').",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

OutputPathOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Output file. Defaults to the slugified document title or the input name.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

BackendOption = Annotated[
    str | None,
    typer.Option(
        "--backend",
        help="Session backend: 'fpdf' writes PDF, 'trace' writes the builder call log.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

TimeoutOption = Annotated[
    float | None,
    typer.Option(
        "--timeout",
        help="Seconds to wait for the document output once the tree is interpreted.",
        min=0.001,
        rich_help_panel=RENDERING_PANEL,
    ),
]

SiblingOrderOption = Annotated[
    str | None,
    typer.Option(
        "--sibling-order",
        help="'document' keeps markup order across tags, 'grouped' groups same-name siblings.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

DumpTreeOption = Annotated[
    bool,
    typer.Option(
        "--dump-tree",
        help="Print the parsed element tree as JSON before rendering.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]


__all__ = [
    "DIAGNOSTICS_PANEL",
    "INPUTS_PANEL",
    "OUTPUT_PANEL",
    "RENDERING_PANEL",
    "BackendOption",
    "ConfigOption",
    "DebugOption",
    "DumpTreeOption",
    "InputPathArgument",
    "OutputPathOption",
    "SiblingOrderOption",
    "TimeoutOption",
    "VerboseOption",
]
