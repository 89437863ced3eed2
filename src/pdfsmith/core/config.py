"""Configuration model used by the renderer.

RenderConfig

`page_size` (`str`)
: Default page format (`letter`, `A4`, ...) applied when the `<document>`
  element does not declare a `size` attribute.

`layout` (`str`)
: Default page orientation, `portrait` or `landscape`.

`margin` (`float`)
: Page margin in points applied on every side.

`font` (`str`)
: Font selected before the first handler runs.

`font_size` (`float`)
: Font size in points selected before the first handler runs.

`fonts` (`dict[str, Path]`)
: Extra TrueType/OpenType fonts keyed by the name used in `font` attributes.

`chunk_size` (`int`)
: Size of the byte chunks a session delivers while producing its output.

`timeout` (`float | None`)
: Seconds to wait for the session output once finalized; `None` waits forever.

`sibling_order` (`str`)
: `document` dispatches siblings in markup order across all tag names;
  `grouped` dispatches all same-name siblings at their first occurrence.

`creation_date` (`datetime | None`)
: Fixed creation timestamp written into the PDF metadata. Setting it makes
  repeated renders byte-identical.

`backend` (`str`)
: Session implementation, `fpdf` for real PDF output or `trace` for a JSON
  record of the builder calls.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from .exceptions import ConfigurationError


CONFIG_SECTION = "pdfsmith"


class RenderConfig(BaseModel):
    """Settings shared by every render performed by a renderer."""

    model_config = ConfigDict(extra="forbid")

    page_size: str = "letter"
    layout: Literal["portrait", "landscape"] = "portrait"
    margin: float = Field(default=72.0, ge=0)
    font: str = "Helvetica"
    font_size: float = Field(default=12.0, gt=0)
    fonts: dict[str, Path] = Field(default_factory=dict)
    chunk_size: int = Field(default=16384, gt=0)
    timeout: float | None = Field(default=None, gt=0)
    sibling_order: Literal["document", "grouped"] = "document"
    creation_date: datetime | None = None
    backend: Literal["fpdf", "trace"] = "fpdf"

    @field_validator("page_size", "font")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped

    def with_overrides(self, **overrides: Any) -> RenderConfig:
        """Return a validated copy with the non-``None`` overrides applied."""
        payload = self.model_dump()
        payload.update({key: value for key, value in overrides.items() if value is not None})
        return build_config(payload)


def build_config(payload: dict[str, Any] | None) -> RenderConfig:
    """Validate a raw mapping into a :class:`RenderConfig`."""
    try:
        return RenderConfig.model_validate(payload or {})
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid pdfsmith configuration: {exc}") from exc


def load_config(path: Path | str) -> RenderConfig:
    """Load configuration from a YAML file.

    The file may either hold the settings at its top level or nest them under
    a ``pdfsmith:`` key, so the section can live in a shared project file.
    Relative font paths resolve against the file's directory.
    """
    config_path = Path(path)
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Unable to read configuration file '{config_path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Configuration file '{config_path}' is not valid YAML: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Configuration file '{config_path}' must contain a mapping.")
    section = raw.get(CONFIG_SECTION, raw)
    if not isinstance(section, dict):
        raise ConfigurationError(f"The '{CONFIG_SECTION}' section must be a mapping.")

    config = build_config(section)
    base_dir = config_path.parent
    resolved = {
        name: font_path if font_path.is_absolute() else (base_dir / font_path)
        for name, font_path in config.fonts.items()
    }
    return config.model_copy(update={"fonts": resolved})


__all__ = ["CONFIG_SECTION", "RenderConfig", "build_config", "load_config"]
