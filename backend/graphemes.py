"""Split text into user-perceived characters for avatar initials."""
from __future__ import annotations

from itertools import islice
from typing import List, Optional, Protocol

import regex


UNICODE_MODE = "unicode"
CODEPOINT_MODE = "codepoint"

_GRAPHEME_PATTERN = regex.compile(r"\X")


class GraphemeExtractor(Protocol):
    def segments(self, text: str, limit: Optional[int] = None) -> List[str]: ...


class UnicodeGraphemeExtractor:
    """Extended grapheme clusters (UAX #29) using ``regex``'s ``\\X``."""

    def segments(self, text: str, limit: Optional[int] = None) -> List[str]:
        matches = _GRAPHEME_PATTERN.finditer(text or "")
        return [match.group() for match in islice(matches, limit)]


class CodepointGraphemeExtractor:
    """One unit per code point.

    Known limitation: flags, ZWJ emoji sequences and base + combining mark
    sequences are split into their individual code points.
    """

    def segments(self, text: str, limit: Optional[int] = None) -> List[str]:
        return list(islice(text or "", limit))


_EXTRACTORS = {
    UNICODE_MODE: UnicodeGraphemeExtractor(),
    CODEPOINT_MODE: CodepointGraphemeExtractor(),
}


def get_extractor(mode: Optional[str] = None) -> GraphemeExtractor:
    """Return the extractor registered for ``mode`` (``unicode`` by default)."""
    key = (mode or UNICODE_MODE).strip().lower()
    try:
        return _EXTRACTORS[key]
    except KeyError:
        raise ValueError(f"Unknown grapheme mode: {mode!r}") from None


def first_graphemes(text: str, count: int, extractor: Optional[GraphemeExtractor] = None) -> str:
    if count <= 0:
        return ""
    extractor = extractor or get_extractor()
    return "".join(extractor.segments(text, count))


def grapheme_count(text: str, extractor: Optional[GraphemeExtractor] = None) -> int:
    extractor = extractor or get_extractor()
    return len(extractor.segments(text))


__all__ = [
    "CODEPOINT_MODE",
    "CodepointGraphemeExtractor",
    "GraphemeExtractor",
    "UNICODE_MODE",
    "UnicodeGraphemeExtractor",
    "first_graphemes",
    "get_extractor",
    "grapheme_count",
]
