"""Text normalization and pagination components.

This package holds the pure, deterministic core: normalize raw markdown, then
split it into page fragments on embedded page-break markers.
"""

from .normalizer import (
    CanonicalizeLineEndings,
    MarkdownNormalizer,
    SeparateChapterHeadings,
    StripHorizontalRules,
    StripInvisibleMarks,
    normalize,
)
from .paginator import PageBreakMatcher, Paginator, is_blank_page, paginate

__all__ = [
    "MarkdownNormalizer",
    "Paginator",
    "PageBreakMatcher",
    "CanonicalizeLineEndings",
    "StripInvisibleMarks",
    "StripHorizontalRules",
    "SeparateChapterHeadings",
    "is_blank_page",
    "normalize",
    "paginate",
]
