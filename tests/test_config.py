from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from pdfsmith.core.config import RenderConfig, build_config, load_config
from pdfsmith.core.exceptions import ConfigurationError


def test_defaults() -> None:
    config = RenderConfig()

    assert config.page_size == "letter"
    assert config.layout == "portrait"
    assert config.margin == 72
    assert config.font == "Helvetica"
    assert config.font_size == 12
    assert config.timeout is None
    assert config.sibling_order == "document"
    assert config.backend == "fpdf"


@pytest.mark.parametrize(
    "payload",
    [
        {"margin": -1},
        {"font_size": 0},
        {"timeout": 0},
        {"chunk_size": 0},
        {"backend": "svg"},
        {"sibling_order": "random"},
        {"font": "   "},
        {"unknown": True},
    ],
)
def test_build_config_rejects_invalid_values(payload: dict[str, object]) -> None:
    with pytest.raises(ConfigurationError, match="Invalid pdfsmith configuration"):
        build_config(payload)


def test_with_overrides_ignores_none() -> None:
    config = RenderConfig(font="Courier").with_overrides(backend="trace", timeout=None)

    assert config.backend == "trace"
    assert config.font == "Courier"
    assert config.timeout is None


def test_load_config_reads_top_level_settings(tmp_path: Path) -> None:
    path = tmp_path / "render.yml"
    path.write_text(
        "page_size: A4\nmargin: 36\ncreation_date: \"2024-01-02T03:04:05Z\"\n", encoding="utf-8"
    )

    config = load_config(path)

    assert config.page_size == "A4"
    assert config.margin == 36
    assert config.creation_date == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_load_config_reads_section_and_resolves_fonts(tmp_path: Path) -> None:
    path = tmp_path / "project.yml"
    path.write_text(
        "other_tool:\n  key: value\npdfsmith:\n  fonts:\n    Brand: fonts/brand.ttf\n    Abs: /opt/abs.ttf\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.fonts == {"Brand": tmp_path / "fonts" / "brand.ttf", "Abs": Path("/opt/abs.ttf")}


def test_load_config_accepts_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == RenderConfig()


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("- just\n- a list\n", "must contain a mapping"),
        ("pdfsmith: [1, 2]\n", "must be a mapping"),
        ("pdfsmith: {margin: [\n", "not valid YAML"),
    ],
)
def test_load_config_rejects_bad_files(tmp_path: Path, content: str, message: str) -> None:
    path = tmp_path / "bad.yml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError, match=message):
        load_config(path)


def test_load_config_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Unable to read"):
        load_config(tmp_path / "absent.yml")
