"""Domain exceptions raised by the pagination pipeline and rendered by the CLI."""

from __future__ import annotations


class PipelineStageError(RuntimeError):
    """Raised when one pipeline stage (`config`, `read`, `write`, ...) cannot finish.

    Attributes:
        stage: Name of the failing stage, shown as ``failed at stage `<name>```.
        detail: Human-readable failure description.
        hint: Optional remediation printed below the detail.
    """

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Store the failing stage alongside its detail and optional hint."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint
