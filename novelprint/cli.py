"""Command-line interface for novelprint.

Responsibilities:
- Expose user-facing commands for pagination runs and page listings.
- Convert CLI arguments into `NovelprintConfig` and execute the pipeline.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import (
    echo_layout_summary,
    echo_page_list,
    echo_source_warning,
    exit_with_command_error,
)
from .config import ConfigLoader, NovelprintConfig
from .errors import PipelineStageError
from .pipeline import PrintPipeline
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="novelprint",
    no_args_is_help=True,
    help="Split a markdown novel into print-ready pages.",
)


class RunProgressIndicator:
    """Render deterministic per-stage progress lines for pipeline commands."""

    _SPINNER_FRAMES = "|/-\\"

    def __init__(self, command_name: str) -> None:
        """Initialize progress indicator metadata for a command invocation."""

        self._command_name = command_name

    def on_stage_start(self, stage_name: str, stage_index: int, stage_total: int) -> None:
        """Print one progress line for a stage start transition."""

        spinner = self._SPINNER_FRAMES[(stage_index - 1) % len(self._SPINNER_FRAMES)]
        typer.echo(
            f"[progress] command={self._command_name} "
            f"{spinner} {stage_index}/{stage_total} stage={stage_name}"
        )


def _load_yaml_config(config_path: Path | None) -> NovelprintConfig | None:
    """Load a YAML config file when requested and map failures to stage errors."""

    if config_path is None:
        return None

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except Exception as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Failed to load config file `{config_path}`: {exc}",
            hint="Verify YAML syntax and file permissions.",
        ) from exc


def _resolve_command_config(
    config_file: Path | None,
    input_path: Path | None,
    out: Path | None,
    layout_overrides: dict[str, float | None],
    canonicalize_line_endings: bool | None,
) -> NovelprintConfig:
    """Resolve effective command config from YAML defaults and explicit CLI overrides."""

    loaded_config = _load_yaml_config(config_file)

    if loaded_config is None:
        if input_path is None:
            raise PipelineStageError(
                stage="config",
                detail="Input markdown path is required when `--config` is not provided.",
                hint="Pass `<input.md>` or use `--config <path.yaml>` with `input_path`.",
            )
        loaded_config = NovelprintConfig(input_path=input_path)

    try:
        layout = loaded_config.layout.with_overrides(layout_overrides)
    except ValueError as exc:
        raise PipelineStageError(stage="config", detail=str(exc)) from exc

    return NovelprintConfig(
        input_path=input_path if input_path is not None else loaded_config.input_path,
        output_dir=out if out is not None else loaded_config.output_dir,
        layout=layout,
        canonicalize_line_endings=(
            canonicalize_line_endings
            if canonicalize_line_endings is not None
            else loaded_config.canonicalize_line_endings
        ),
        extra=dict(loaded_config.extra),
    )


@app.command("paginate")
def paginate_command(
    input_path: Annotated[
        Path | None,
        typer.Argument(
            help="Path to source markdown. Required unless provided by `--config`.",
        ),
    ] = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Output directory (overrides config file value)."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Path to YAML config file with command defaults.",
        ),
    ] = None,
    font_size: Annotated[
        float | None,
        typer.Option("--font-size", help="Body font size in px (12-24)."),
    ] = None,
    line_height: Annotated[
        float | None,
        typer.Option("--line-height", help="Line-height multiplier (1.3-2.2)."),
    ] = None,
    page_padding: Annotated[
        float | None,
        typer.Option("--page-padding", help="Side and bottom margin in mm (0-50)."),
    ] = None,
    page_top_padding: Annotated[
        float | None,
        typer.Option("--page-top-padding", help="Top margin in mm (0-100)."),
    ] = None,
    canonicalize_line_endings: Annotated[
        bool | None,
        typer.Option(
            "--canonicalize-line-endings/--keep-line-endings",
            help="Convert CRLF/CR line endings to LF before normalization.",
        ),
    ] = None,
) -> None:
    """Normalize and paginate a markdown file, writing one file per page."""

    try:
        config = _resolve_command_config(
            config_file=config_file,
            input_path=input_path,
            out=out,
            layout_overrides={
                "font_size_px": font_size,
                "line_height": line_height,
                "page_padding_mm": page_padding,
                "page_top_padding_mm": page_top_padding,
            },
            canonicalize_line_endings=canonicalize_line_endings,
        )
        progress = RunProgressIndicator(command_name="paginate")
        pipeline = PrintPipeline(
            run_logger=RunLogger(),
            stage_progress_callback=progress.on_stage_start,
        )
        manifest = pipeline.run(config)
    except Exception as exc:
        exit_with_command_error("paginate", exc)

    echo_source_warning(manifest.extra.get("source_error"))
    typer.echo(f"Run id: {manifest.run_id}")
    typer.echo(f"Pages: {manifest.page_count}")
    echo_layout_summary(config.layout)
    typer.echo(f"Pages index: {manifest.extra.get('pages_index', '(not written)')}")
    typer.echo(f"Manifest: {manifest.extra.get('manifest_path', '(not written)')}")


@app.command("list-pages")
def list_pages_command(
    input_path: Annotated[Path, typer.Argument(help="Path to source markdown.")],
    preview_chars: Annotated[
        int,
        typer.Option("--preview-chars", min=1, help="Maximum preview length per page."),
    ] = 60,
) -> None:
    """Print one preview row per page without writing artifacts."""

    try:
        pipeline = PrintPipeline()
        document, pages = pipeline.list_pages(NovelprintConfig(input_path=input_path))
    except Exception as exc:
        exit_with_command_error("list-pages", exc)

    echo_source_warning(document.error)
    echo_page_list(pages, max_chars=preview_chars)


def main() -> None:
    """Run the novelprint CLI application."""

    app()


if __name__ == "__main__":
    main()
