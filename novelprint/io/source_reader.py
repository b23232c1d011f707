"""Markdown source acquisition.

Responsibilities:
- Read one user-selected file into a single string for the pipeline.
- Turn unreadable or non-text files into an empty document instead of an error.
"""

from __future__ import annotations

from pathlib import Path

from ..models.datatypes import SourceDocument


class SourceReader:
    """Read markdown source files as UTF-8 text."""

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize with the text encoding used to decode source files."""

        self.encoding = encoding

    def read(self, path: Path) -> SourceDocument:
        """Read `path` into a `SourceDocument`.

        Line endings are preserved exactly as stored; the normalizer decides
        how to canonicalize them. Missing, unreadable, or undecodable files
        produce an empty document carrying the failure reason in `error`.
        """

        if not path.exists():
            return SourceDocument(path=path, text="", error=f"Source file not found: `{path}`.")
        if not path.is_file():
            return SourceDocument(path=path, text="", error=f"Source path is not a file: `{path}`.")

        try:
            raw = path.read_bytes()
        except OSError as exc:
            return SourceDocument(
                path=path,
                text="",
                error=f"Failed to read source file `{path}`: {exc.strerror or exc}.",
            )

        try:
            text = raw.decode(self.encoding)
        except UnicodeDecodeError:
            return SourceDocument(
                path=path,
                text="",
                error=f"Source file `{path}` is not valid {self.encoding} text.",
            )

        if "\x00" in text:
            return SourceDocument(
                path=path,
                text="",
                error=f"Source file `{path}` looks like binary content.",
            )
        return SourceDocument(path=path, text=text)
