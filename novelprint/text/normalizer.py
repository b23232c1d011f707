"""Markdown normalization rules.

Responsibilities:
- Remove encoding artifacts and structural noise from raw markdown source.
- Keep every rule deterministic and idempotent so normalized text is stable.
"""

from __future__ import annotations

import re
from typing import Protocol


CHAPTER_HEADING_TOKEN = "**ตอนที่"
"""Bold chapter prefix ("Chapter" in Thai) used by episode tables of contents."""

_INVISIBLE_MARKS = ("\ufeff", "\u200b")
_RULE_CHARACTERS = frozenset("-*_")


class NormalizerRule(Protocol):
    """Protocol for markdown normalization rules."""

    def apply(self, text: str) -> str:
        """Apply a single normalization transformation."""


class CanonicalizeLineEndings:
    """Convert CRLF and lone CR line endings to a single newline."""

    def apply(self, text: str) -> str:
        """Apply line-ending canonicalization."""

        return text.replace("\r\n", "\n").replace("\r", "\n")


class StripInvisibleMarks:
    """Remove byte-order marks and zero-width spaces anywhere in the text."""

    def apply(self, text: str) -> str:
        """Apply invisible-mark cleanup rule."""

        for mark in _INVISIBLE_MARKS:
            text = text.replace(mark, "")
        return text


class StripHorizontalRules:
    """Blank out lines that consist only of a thematic break (`---`, `***`, `___`).

    The line itself is kept as an empty line so surrounding paragraphs stay
    separated. Lines mixing rule characters or carrying other content are
    left untouched.
    """

    def apply(self, text: str) -> str:
        """Apply horizontal-rule cleanup rule."""

        lines = text.split("\n")
        return "\n".join("" if self.is_rule_line(line) else line for line in lines)

    @staticmethod
    def is_rule_line(line: str) -> bool:
        """Return whether a line is three or more copies of one rule character."""

        body = line.strip(" \t")
        if len(body) < 3:
            return False
        return body[0] in _RULE_CHARACTERS and body == body[0] * len(body)


class SeparateChapterHeadings:
    """Ensure a blank line precedes each bold chapter heading.

    Tables of contents often put `**ตอนที่ N**` lines directly under the
    previous line, which merges them into one markdown paragraph.
    """

    def __init__(self, token: str = CHAPTER_HEADING_TOKEN) -> None:
        """Initialize with the heading prefix that needs a preceding blank line."""

        self.token = token
        self._pattern = re.compile(r"(?<!\n)\n(?=" + re.escape(token) + ")")

    def apply(self, text: str) -> str:
        """Turn a single newline before the heading token into a blank line."""

        return self._pattern.sub("\n\n", text)


class MarkdownNormalizer:
    """Apply a sequence of deterministic normalization rules."""

    def __init__(
        self,
        rules: list[NormalizerRule] | None = None,
        *,
        canonicalize_line_endings: bool = True,
    ) -> None:
        """Initialize with custom rules or the default rule sequence."""

        if rules is None:
            rules = [
                StripInvisibleMarks(),
                StripHorizontalRules(),
                SeparateChapterHeadings(),
            ]
            if canonicalize_line_endings:
                rules.insert(0, CanonicalizeLineEndings())
        self.rules = rules

    def normalize(self, source: str) -> str:
        """Apply all configured rules in order."""

        current = source
        for rule in self.rules:
            current = rule.apply(current)
        return current


_DEFAULT_NORMALIZER = MarkdownNormalizer()


def normalize(source: str) -> str:
    """Normalize raw markdown source into canonical markdown text."""

    return _DEFAULT_NORMALIZER.normalize(source)
