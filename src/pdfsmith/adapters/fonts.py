"""Font name resolution shared by the session backends."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path


# Standard 14 PDF font names mapped to an fpdf family and style.
STANDARD_FONTS: dict[str, tuple[str, str]] = {
    "helvetica": ("helvetica", ""),
    "helvetica-bold": ("helvetica", "B"),
    "helvetica-oblique": ("helvetica", "I"),
    "helvetica-boldoblique": ("helvetica", "BI"),
    "times": ("times", ""),
    "times-roman": ("times", ""),
    "times-bold": ("times", "B"),
    "times-italic": ("times", "I"),
    "times-bolditalic": ("times", "BI"),
    "courier": ("courier", ""),
    "courier-bold": ("courier", "B"),
    "courier-oblique": ("courier", "I"),
    "courier-boldoblique": ("courier", "BI"),
    "symbol": ("symbol", ""),
    "zapfdingbats": ("zapfdingbats", ""),
}

FONT_FILE_SUFFIXES = frozenset({".ttf", ".otf"})


def font_key(name: str) -> str:
    return name.strip().lower()


def standard_font(name: str) -> tuple[str, str] | None:
    """Return the fpdf family/style pair for a standard font name."""
    return STANDARD_FONTS.get(font_key(name))


def font_file(name: str, registered: Mapping[str, Path]) -> Path | None:
    """Locate the font file behind a configured name or a direct path."""
    key = font_key(name)
    for candidate_name, candidate_path in registered.items():
        if font_key(candidate_name) == key:
            return Path(candidate_path) if Path(candidate_path).is_file() else None

    direct = Path(name.strip())
    if direct.suffix.lower() in FONT_FILE_SUFFIXES and direct.is_file():
        return direct
    return None


__all__ = ["FONT_FILE_SUFFIXES", "STANDARD_FONTS", "font_file", "font_key", "standard_font"]
