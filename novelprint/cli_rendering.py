"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
page listings, layout summaries, and empty-document warnings.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .config import PrintLayout
from .errors import PipelineStageError
from .models.datatypes import Page


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, PipelineStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_source_warning(error: str | None) -> None:
    """Print a warning when the source fell back to an empty document."""

    if not error:
        return
    typer.secho(f"Warning: {error}", fg=typer.colors.YELLOW, err=True)
    typer.secho("Continuing with an empty document.", fg=typer.colors.YELLOW, err=True)


def echo_layout_summary(layout: PrintLayout) -> None:
    """Print the print layout handed to the renderer."""

    values = layout.as_manifest_metadata()
    typer.echo(
        "Layout: "
        f"font {values['font_size_px']}px, "
        f"line height {layout.line_height:.2f}, "
        f"margins {values['page_padding_mm']}mm (top {values['page_top_padding_mm']}mm)"
    )


def page_preview(page: Page, max_chars: int) -> str:
    """Return the first non-blank line of a page, shortened to `max_chars`."""

    first_line = next((line.strip() for line in page.text.splitlines() if line.strip()), "")
    if len(first_line) <= max_chars:
        return first_line
    return first_line[: max(max_chars - 3, 0)].rstrip() + "..."


def echo_page_list(pages: list[Page], max_chars: int = 60) -> None:
    """Print compact deterministic page label/preview rows."""

    typer.echo(f"Pages: {len(pages)}")
    for page in pages:
        typer.echo(f"{page.number}/{page.total}. {page_preview(page, max_chars)}")
