"""Core datatypes shared across novelprint modules.

Responsibilities:
- Represent immutable records exchanged between pipeline stages.
- Provide explicit typing for artifact serialization.

Key types:
- `SourceDocument`, `Page`, and `PrintManifest`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class SourceDocument:
    """Markdown source acquired from a user-supplied file.

    Attributes:
        path: Path the text was read from.
        text: Decoded file content, or an empty string when acquisition failed.
        error: Human-readable reason the document fell back to empty, if any.
    """

    path: Path
    text: str
    error: str | None = None

    @property
    def is_empty(self) -> bool:
        """Return whether the document carries no text."""

        return not self.text


@dataclass(frozen=True, slots=True)
class Page:
    """One printable page fragment with its positional number.

    Attributes:
        number: 1-based page number within the surviving page sequence.
        total: Number of pages in the sequence.
        text: Markdown fragment handed to the renderer verbatim.
    """

    number: int
    total: int
    text: str

    @property
    def label(self) -> str:
        """Return the `N / total` label printed at the foot of each sheet."""

        return f"{self.number} / {self.total}"


@dataclass(frozen=True, slots=True)
class PrintManifest:
    """Immutable summary of one pagination run.

    Attributes:
        run_id: Deterministic identifier derived from source text and layout.
        source_path: Path of the source markdown file.
        page_count: Number of page fragments produced.
        page_paths: Artifact paths of the written page fragments, in page order.
        layout: Print layout values handed to the external renderer.
        extra: Additional artifact paths and run metadata.
    """

    run_id: str
    source_path: Path
    page_count: int
    page_paths: tuple[Path, ...] = field(default_factory=tuple)
    layout: dict[str, str] = field(default_factory=dict)
    extra: dict[str, str] = field(default_factory=dict)
