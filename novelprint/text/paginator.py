"""Page splitting on embedded page-break markers.

Responsibilities:
- Locate empty `<div style="page-break-after: always"></div>` markers.
- Split canonical markdown into trimmed page fragments in document order.
- Drop pages that hold nothing but whitespace or `&nbsp;` entities.
"""

from __future__ import annotations

from dataclasses import dataclass
import re


NBSP_ENTITY = "&nbsp;"

_DIV_ELEMENT_RE = re.compile(r"<div\s[^<>]*></div>", re.IGNORECASE)
_ATTRIBUTE_RE = re.compile(
    r"""\s(?P<name>[\w:-]+)\s*=\s*(?:"(?P<double>[^"]*)"|'(?P<single>[^']*)')"""
)
_ALWAYS_VALUE_RE = re.compile(r"always(?:\s*!\s*important)?", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class MarkerSpan:
    """Character span of one page-break marker inside a document."""

    start: int
    end: int


class PageBreakMatcher:
    """Recognize empty div elements that force a page break after them."""

    def find_markers(self, text: str) -> list[MarkerSpan]:
        """Return spans of all page-break markers in left-to-right order."""

        return [
            MarkerSpan(start=match.start(), end=match.end())
            for match in _DIV_ELEMENT_RE.finditer(text)
            if self.is_marker(match.group(0))
        ]

    def is_marker(self, element: str) -> bool:
        """Return whether an empty div element carries `page-break-after: always`."""

        style = self.style_value(element)
        if style is None:
            return False
        return any(
            self._is_page_break_declaration(declaration)
            for declaration in style.split(";")
        )

    def style_value(self, element: str) -> str | None:
        """Extract the raw `style` attribute value from an opening div tag."""

        opening_tag = element[len("<div") : element.index(">")]
        for match in _ATTRIBUTE_RE.finditer(opening_tag):
            if match.group("name").lower() != "style":
                continue
            value = match.group("double")
            return value if value is not None else match.group("single")
        return None

    def _is_page_break_declaration(self, declaration: str) -> bool:
        """Return whether one CSS declaration is `page-break-after: always`."""

        name, separator, value = declaration.partition(":")
        if not separator:
            return False
        if name.strip().lower() != "page-break-after":
            return False
        return _ALWAYS_VALUE_RE.fullmatch(value.strip()) is not None


def is_blank_page(segment: str) -> bool:
    """Return whether a segment has no content besides whitespace and `&nbsp;`."""

    stripped = _WHITESPACE_RE.sub("", segment).replace(NBSP_ENTITY, "")
    return not stripped


class Paginator:
    """Split canonical markdown into printable page fragments."""

    def __init__(self, matcher: PageBreakMatcher | None = None) -> None:
        """Initialize with a custom marker matcher or the default one."""

        self.matcher = matcher or PageBreakMatcher()

    def split_segments(self, text: str) -> list[str]:
        """Split text at every marker, discarding the markers themselves."""

        segments: list[str] = []
        cursor = 0
        for marker in self.matcher.find_markers(text):
            segments.append(text[cursor : marker.start])
            cursor = marker.end
        segments.append(text[cursor:])
        return segments

    def paginate(self, text: str) -> list[str]:
        """Return trimmed, non-blank page fragments in document order."""

        pages: list[str] = []
        for segment in self.split_segments(text):
            page = segment.strip()
            if is_blank_page(page):
                continue
            pages.append(page)
        return pages


_DEFAULT_PAGINATOR = Paginator()


def paginate(text: str) -> list[str]:
    """Split canonical markdown into an ordered list of page fragments."""

    return _DEFAULT_PAGINATOR.paginate(text)
