"""CLI error-handling tests for concise diagnostics."""

from pathlib import Path

from pytest import MonkeyPatch
from typer.testing import CliRunner

from novelprint.cli import app
from novelprint.errors import PipelineStageError


def test_paginate_command_reports_stage_error_with_hint(
    monkeypatch: MonkeyPatch, tmp_path: Path
) -> None:
    """Paginate should print stage-aware diagnostics and fail with exit code 1."""

    def _failing_run(*_: object, **__: object) -> None:
        """Raise a stage-specific error to simulate pipeline failure."""

        raise PipelineStageError(
            stage="write",
            detail="Failed to write page artifacts under `out/run-1`: Read-only file system",
            hint="Verify the output directory is writable.",
        )

    monkeypatch.setattr("novelprint.cli.PrintPipeline.run", _failing_run)
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["paginate", str(tmp_path / "episode.md"), "--out", str(tmp_path / "out")],
    )

    assert result.exit_code == 1
    assert "paginate failed at stage `write`" in result.output
    assert "Hint: Verify the output directory is writable." in result.output


def test_list_pages_command_reports_non_stage_error(monkeypatch: MonkeyPatch) -> None:
    """List-pages should still report non-stage exceptions with exit code 1."""

    def _failing_list(*_: object, **__: object) -> None:
        """Raise a generic error to verify fallback CLI diagnostics."""

        raise RuntimeError("unexpected listing error")

    monkeypatch.setattr("novelprint.cli.PrintPipeline.list_pages", _failing_list)
    runner = CliRunner()

    result = runner.invoke(app, ["list-pages", "episode.md"])

    assert result.exit_code == 1
    assert "list-pages failed: unexpected listing error" in result.output


def test_paginate_command_reports_missing_config_file() -> None:
    """Paginate should fail with stage-aware diagnostics when `--config` path is missing."""

    runner = CliRunner()
    result = runner.invoke(app, ["paginate", "--config", "missing-novelprint.yaml"])

    assert result.exit_code == 1
    assert "paginate failed at stage `config`" in result.output
    assert "Config file not found: `missing-novelprint.yaml`." in result.output


def test_paginate_command_requires_input_without_config() -> None:
    """Paginate should explain that an input path or config file is required."""

    runner = CliRunner()
    result = runner.invoke(app, ["paginate"])

    assert result.exit_code == 1
    assert "Input markdown path is required" in result.output


def test_paginate_command_reports_invalid_config_payload(tmp_path: Path) -> None:
    """Paginate should fail fast when YAML config schema/values are invalid."""

    config_path = tmp_path / "invalid.yaml"
    config_path.write_text("output_dir: out\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(app, ["paginate", "--config", str(config_path)])

    assert result.exit_code == 1
    assert "paginate failed at stage `config`" in result.output
    assert "is missing required key(s): input_path" in result.output


def test_paginate_command_rejects_out_of_range_layout(tmp_path: Path) -> None:
    """Layout options outside the supported range should fail at the config stage."""

    source = tmp_path / "episode.md"
    source.write_text("text", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(
        app, ["paginate", str(source), "--out", str(tmp_path / "out"), "--font-size", "40"]
    )

    assert result.exit_code == 1
    assert "paginate failed at stage `config`" in result.output
    assert "`font_size_px` must be between 12 and 24, got 40." in result.output
