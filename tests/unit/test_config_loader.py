"""Unit tests for YAML/environment configuration loader behavior."""

from __future__ import annotations

from pathlib import Path

import pytest

from novelprint.config import ConfigLoader, NovelprintConfig, PrintLayout


def test_config_loader_from_yaml_loads_valid_config_and_normalizes_values(
    tmp_path: Path,
) -> None:
    """YAML loader should parse valid payloads and normalize typed/blank values."""

    config_path = tmp_path / "novelprint.yml"
    config_path.write_text(
        """
input_path: " episodes/episode-01.md "
output_dir: " printed "
canonicalize_line_endings: " no "
layout:
  font_size_px: 16
  line_height: "1.9"
  page_padding_mm: 15
  page_top_padding_mm: 40
extra:
  series: " คุณหนูกับคนขับรถ "
""".strip(),
        encoding="utf-8",
    )

    config = ConfigLoader.from_yaml(config_path)

    assert config.input_path == Path("episodes/episode-01.md")
    assert config.output_dir == Path("printed")
    assert config.canonicalize_line_endings is False
    assert config.layout == PrintLayout(
        font_size_px=16, line_height=1.9, page_padding_mm=15, page_top_padding_mm=40
    )
    assert config.extra == {"series": "คุณหนูกับคนขับรถ"}


def test_config_loader_from_yaml_applies_defaults(tmp_path: Path) -> None:
    """Only `input_path` is required; everything else falls back to defaults."""

    config_path = tmp_path / "novelprint.yml"
    config_path.write_text("input_path: episode.md\n", encoding="utf-8")

    config = ConfigLoader.from_yaml(config_path)

    assert config.output_dir == Path("out")
    assert config.layout == PrintLayout()
    assert config.canonicalize_line_endings is True
    assert config.extra == {}


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ("output_dir: out\n", "is missing required key(s): input_path"),
        ("input_path: a.md\ntheme: dark\n", "includes unsupported key(s): theme"),
        ("input_path: a.md\nlayout: big\n", "field `layout` must be a mapping/object"),
        ("input_path: a.md\nlayout:\n  margin: 3\n", "unsupported key(s): margin"),
        ("input_path: a.md\nlayout:\n  font_size_px: huge\n", "`font_size_px` must be a number"),
        ("input_path: a.md\nlayout:\n  line_height: 3\n", "`line_height` must be between"),
        ("input_path: a.md\ncanonicalize_line_endings: maybe\n", "must be a boolean value"),
        ("input_path: a.md\nextra: [1, 2]\n", "field `extra` must be a mapping/object"),
        ("- just\n- a list\n", "must contain a top-level mapping/object"),
    ],
)
def test_config_loader_from_yaml_rejects_invalid_payloads(
    tmp_path: Path, payload: str, message: str
) -> None:
    """Invalid YAML payloads should raise `ValueError` with an actionable message."""

    config_path = tmp_path / "novelprint.yml"
    config_path.write_text(payload, encoding="utf-8")

    with pytest.raises(ValueError) as exc_info:
        ConfigLoader.from_yaml(config_path)

    assert message in str(exc_info.value)


def test_config_loader_from_env_reads_layout_values() -> None:
    """Environment loader should read paths, layout numbers, and booleans."""

    config = ConfigLoader.from_env(
        {
            "NOVELPRINT_INPUT_PATH": " episode.md ",
            "NOVELPRINT_OUTPUT_DIR": "printed",
            "NOVELPRINT_FONT_SIZE_PX": "22",
            "NOVELPRINT_LINE_HEIGHT": "2",
            "NOVELPRINT_PAGE_PADDING_MM": "",
            "NOVELPRINT_CANONICALIZE_LINE_ENDINGS": "off",
        }
    )

    assert config.input_path == Path("episode.md")
    assert config.output_dir == Path("printed")
    assert config.layout.font_size_px == 22
    assert config.layout.line_height == 2
    assert config.layout.page_padding_mm == 20
    assert config.canonicalize_line_endings is False


def test_config_loader_from_env_requires_input_path() -> None:
    """Environment loader should fail without an input path."""

    with pytest.raises(ValueError, match="NOVELPRINT_INPUT_PATH"):
        ConfigLoader.from_env({})


def test_config_loader_from_env_rejects_invalid_numbers() -> None:
    """Non-numeric layout environment values should be rejected."""

    with pytest.raises(ValueError, match="NOVELPRINT_LINE_HEIGHT"):
        ConfigLoader.from_env(
            {"NOVELPRINT_INPUT_PATH": "a.md", "NOVELPRINT_LINE_HEIGHT": "tall"}
        )


def test_print_layout_exports_css_variables_and_metadata() -> None:
    """Layout should expose renderer variables and string metadata."""

    layout = PrintLayout(font_size_px=18, line_height=1.75, page_padding_mm=12.5)

    assert layout.as_css_variables() == {
        "--font-size": "18px",
        "--line-height": "1.75",
        "--page-padding": "12.5mm",
        "--page-top-padding": "20mm",
    }
    assert layout.as_manifest_metadata() == {
        "font_size_px": "18",
        "line_height": "1.75",
        "page_padding_mm": "12.5",
        "page_top_padding_mm": "20",
    }


def test_line_height_css_variable_keeps_configured_precision(tmp_path: Path) -> None:
    """The renderer should receive the same line height the manifest records."""

    config_path = tmp_path / "novelprint.yml"
    config_path.write_text(
        "input_path: episode.md\nlayout:\n  line_height: 1.333\n",
        encoding="utf-8",
    )

    layout = ConfigLoader.from_yaml(config_path).layout

    assert layout.as_css_variables()["--line-height"] == "1.333"
    assert layout.as_manifest_metadata()["line_height"] == "1.333"


def test_print_layout_with_overrides_ignores_none_values() -> None:
    """Overrides should replace only explicitly provided values."""

    layout = PrintLayout().with_overrides({"font_size_px": 14, "line_height": None})

    assert layout.font_size_px == 14
    assert layout.line_height == 1.75

    with pytest.raises(ValueError, match="Unknown layout field `zoom`"):
        PrintLayout().with_overrides({"zoom": 2})


@pytest.mark.parametrize(
    "layout",
    [
        PrintLayout(font_size_px=11),
        PrintLayout(line_height=2.5),
        PrintLayout(page_padding_mm=-1),
        PrintLayout(page_top_padding_mm=101),
    ],
)
def test_config_validate_rejects_out_of_range_layout(layout: PrintLayout) -> None:
    """Config validation should enforce the supported layout ranges."""

    config = NovelprintConfig(input_path=Path("a.md"), layout=layout)

    with pytest.raises(ValueError, match="must be between"):
        config.validate()
