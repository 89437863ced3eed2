"""Filesystem helpers used by the CLI commands."""

from __future__ import annotations

from pathlib import Path
import sys

from slugify import slugify
import typer

from pdfsmith.core.config import RenderConfig, build_config, load_config
from pdfsmith.core.nodes import Element


STDIN_MARKER = Path("-")


def read_markup(path: Path) -> str:
    """Return the markup text from ``path`` or stdin when the path is ``-``."""
    if path == STDIN_MARKER:
        payload = sys.stdin.read()
        if not payload.strip():
            raise typer.BadParameter("No markup received on stdin.")
        return payload
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:  # pragma: no cover - filesystem errors
        raise typer.BadParameter(f"Unable to read '{path}': {exc}") from exc


def resolve_config(config_path: Path | None, **overrides: object) -> RenderConfig:
    """Load the configuration file when provided and apply CLI overrides."""
    config = load_config(config_path) if config_path is not None else build_config(None)
    return config.with_overrides(**overrides)


def default_output_path(source: Path, root: Element, suffix: str = ".pdf") -> Path:
    """Derive an output path from the document title or the input file name."""
    base_dir = Path.cwd() if source == STDIN_MARKER else source.parent
    title = root.attributes.get("title", "").strip()
    if title:
        stem = slugify(title, separator="-")
        if stem:
            return base_dir / f"{stem}{suffix}"
    if source == STDIN_MARKER:
        return base_dir / f"document{suffix}"
    return source.with_suffix(suffix)


def write_output_file(target: Path, content: bytes) -> None:
    """Persist rendered bytes to disk, creating parent directories as needed."""
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
    except OSError as exc:  # pragma: no cover - filesystem errors
        raise OSError(f"Failed to write output to '{target}': {exc}") from exc


__all__ = [
    "STDIN_MARKER",
    "default_output_path",
    "read_markup",
    "resolve_config",
    "write_output_file",
]
