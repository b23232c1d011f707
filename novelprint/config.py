"""Configuration model and loaders for novelprint.

Responsibilities:
- Define print layout and run configuration as typed dataclasses.
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `PrintLayout`: display settings handed to the external renderer.
- `NovelprintConfig`: normalized settings for one pagination run.
- `ConfigLoader`: static construction helpers for `NovelprintConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .parsing import (
    format_number,
    normalize_optional_string,
    parse_number,
    parse_permissive_boolean,
)


_LAYOUT_BOUNDS: dict[str, tuple[float, float]] = {
    "font_size_px": (12, 24),
    "line_height": (1.3, 2.2),
    "page_padding_mm": (0, 50),
    "page_top_padding_mm": (0, 100),
}


@dataclass(frozen=True, slots=True)
class PrintLayout:
    """Display settings for rendering and printing page fragments.

    These values never reach normalization or pagination; they are passed
    through to the renderer as manifest metadata.

    Attributes:
        font_size_px: Body font size in CSS pixels.
        line_height: Unitless line-height multiplier.
        page_padding_mm: Left, right, and bottom sheet margin in millimetres.
        page_top_padding_mm: Top sheet margin in millimetres.
    """

    font_size_px: float = 18
    line_height: float = 1.75
    page_padding_mm: float = 20
    page_top_padding_mm: float = 20

    def validate(self) -> None:
        """Validate that every layout value lies within its supported range."""

        for name, (lower, upper) in _LAYOUT_BOUNDS.items():
            value = getattr(self, name)
            if not lower <= value <= upper:
                raise ValueError(
                    f"`{name}` must be between {format_number(lower)} and "
                    f"{format_number(upper)}, got {format_number(value)}."
                )

    def as_css_variables(self) -> dict[str, str]:
        """Return custom-property values consumed by the print stylesheet."""

        return {
            "--font-size": f"{format_number(self.font_size_px)}px",
            "--line-height": format_number(self.line_height),
            "--page-padding": f"{format_number(self.page_padding_mm)}mm",
            "--page-top-padding": f"{format_number(self.page_top_padding_mm)}mm",
        }

    def as_manifest_metadata(self) -> dict[str, str]:
        """Return layout values as strings safe to persist in the run manifest."""

        return {name: format_number(getattr(self, name)) for name in _LAYOUT_BOUNDS}

    def with_overrides(self, overrides: Mapping[str, float | None]) -> PrintLayout:
        """Return a copy where every non-`None` override replaces the current value."""

        values = {name: getattr(self, name) for name in _LAYOUT_BOUNDS}
        for name, value in overrides.items():
            if name not in values:
                raise ValueError(f"Unknown layout field `{name}`.")
            if value is not None:
                values[name] = float(value)
        return PrintLayout(**values)


@dataclass(slots=True)
class NovelprintConfig:
    """Runtime configuration for one pagination run.

    Attributes:
        input_path: Path to the source markdown file.
        output_dir: Output directory for generated artifacts.
        layout: Print layout handed to the renderer.
        canonicalize_line_endings: Convert CRLF/CR to LF before other rules.
        extra: Additional metadata recorded in the manifest.
    """

    input_path: Path
    output_dir: Path = Path("out")
    layout: PrintLayout = field(default_factory=PrintLayout)
    canonicalize_line_endings: bool = True
    extra: dict[str, str] = field(default_factory=dict)

    def validate(self) -> None:
        """Validate configuration values before pipeline execution."""

        if not str(self.input_path).strip():
            raise ValueError("`input_path` must be a non-empty path.")
        self.layout.validate()


class ConfigLoader:
    """Factory methods for creating `NovelprintConfig` from external sources."""

    _REQUIRED_YAML_KEYS = frozenset({"input_path"})
    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "input_path",
            "output_dir",
            "layout",
            "canonicalize_line_endings",
            "extra",
        }
    )
    _LAYOUT_ENV_KEYS = {
        "font_size_px": "NOVELPRINT_FONT_SIZE_PX",
        "line_height": "NOVELPRINT_LINE_HEIGHT",
        "page_padding_mm": "NOVELPRINT_PAGE_PADDING_MM",
        "page_top_padding_mm": "NOVELPRINT_PAGE_TOP_PADDING_MM",
    }

    @staticmethod
    def from_yaml(path: Path) -> NovelprintConfig:
        """Create a validated config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = yaml.safe_load(path_text)
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")

        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> NovelprintConfig:
        """Create a validated config from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        input_path = normalize_optional_string(env_map.get("NOVELPRINT_INPUT_PATH"))
        if input_path is None:
            raise ValueError("Environment variable `NOVELPRINT_INPUT_PATH` is required.")
        output_dir = normalize_optional_string(env_map.get("NOVELPRINT_OUTPUT_DIR")) or "out"

        overrides: dict[str, float | None] = {}
        for field_name, env_key in ConfigLoader._LAYOUT_ENV_KEYS.items():
            raw_value = normalize_optional_string(env_map.get(env_key))
            overrides[field_name] = (
                parse_number(raw_value, env_key) if raw_value is not None else None
            )

        canonicalize = True
        if "NOVELPRINT_CANONICALIZE_LINE_ENDINGS" in env_map:
            parsed = parse_permissive_boolean(env_map["NOVELPRINT_CANONICALIZE_LINE_ENDINGS"])
            if parsed is None:
                raise ValueError(
                    "Environment variable `NOVELPRINT_CANONICALIZE_LINE_ENDINGS` must be a "
                    "boolean value (`true`/`false`, `1`/`0`, `yes`/`no`)."
                )
            canonicalize = parsed

        config = NovelprintConfig(
            input_path=Path(input_path),
            output_dir=Path(output_dir),
            layout=PrintLayout().with_overrides(overrides),
            canonicalize_line_endings=canonicalize,
        )
        config.validate()
        return config

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str
    ) -> NovelprintConfig:
        """Build a validated config from a normalized mapping payload."""

        ConfigLoader._validate_keys(
            payload,
            supported=ConfigLoader._SUPPORTED_YAML_KEYS,
            required=ConfigLoader._REQUIRED_YAML_KEYS,
            source_label=source_label,
        )

        input_path = normalize_optional_string(payload.get("input_path"))
        if input_path is None:
            raise ValueError(f"{source_label} requires non-empty `input_path`.")
        output_dir = normalize_optional_string(payload.get("output_dir")) or "out"
        layout = ConfigLoader._layout_from_mapping(payload.get("layout"), source_label)
        canonicalize = ConfigLoader._optional_boolean(
            payload, "canonicalize_line_endings", source_label, default=True
        )
        extra = ConfigLoader._optional_string_map(payload, "extra", source_label)

        config = NovelprintConfig(
            input_path=Path(input_path),
            output_dir=Path(output_dir),
            layout=layout,
            canonicalize_line_endings=canonicalize,
            extra=extra,
        )
        try:
            config.validate()
        except ValueError as exc:
            raise ValueError(f"{source_label} {exc}") from exc
        return config

    @staticmethod
    def _validate_keys(
        payload: Mapping[str, Any],
        *,
        supported: frozenset[str],
        required: frozenset[str],
        source_label: str,
    ) -> None:
        """Validate supported and required mapping keys."""

        unknown = sorted(str(key) for key in set(payload).difference(supported))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        missing = sorted(key for key in required if key not in payload)
        if missing:
            key_list = ", ".join(missing)
            raise ValueError(f"{source_label} is missing required key(s): {key_list}.")

    @staticmethod
    def _layout_from_mapping(raw: object, source_label: str) -> PrintLayout:
        """Read the optional `layout` mapping into a `PrintLayout`."""

        if raw is None:
            return PrintLayout()
        if not isinstance(raw, Mapping):
            raise ValueError(f"{source_label} field `layout` must be a mapping/object.")

        ConfigLoader._validate_keys(
            raw,
            supported=frozenset(_LAYOUT_BOUNDS),
            required=frozenset(),
            source_label=f"{source_label} field `layout`",
        )
        overrides: dict[str, float | None] = {}
        for name in _LAYOUT_BOUNDS:
            if name not in raw or raw[name] is None:
                continue
            try:
                overrides[name] = parse_number(raw[name], name)
            except ValueError as exc:
                raise ValueError(f"{source_label} field `layout`: {exc}") from exc
        return PrintLayout().with_overrides(overrides)

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, source_label: str, default: bool
    ) -> bool:
        """Read and validate a boolean field from a payload."""

        if key not in payload:
            return default

        parsed = parse_permissive_boolean(payload[key])
        if parsed is None:
            raise ValueError(
                f"{source_label} field `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed

    @staticmethod
    def _optional_string_map(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> dict[str, str]:
        """Read an optional mapping with non-empty string keys and values."""

        raw = payload.get(key)
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            raise ValueError(f"{source_label} field `{key}` must be a mapping/object.")

        normalized: dict[str, str] = {}
        for raw_key, raw_value in raw.items():
            key_value = normalize_optional_string(raw_key)
            value_value = normalize_optional_string(raw_value)
            if key_value is None:
                raise ValueError(f"{source_label} field `{key}` contains a blank key.")
            if value_value is None:
                raise ValueError(
                    f"{source_label} field `{key}` contains blank value for `{key_value}`."
                )
            normalized[key_value] = value_value
        return normalized
