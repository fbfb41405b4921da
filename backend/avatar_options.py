"""Turn a request path and query string into avatar options."""
from __future__ import annotations

import logging
import re
import urllib.parse
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from avatar_settings import AvatarSettings, clamp_size
from graphemes import GraphemeExtractor, first_graphemes, get_extractor
from punycode_decoder import decode_if_needed


logger = logging.getLogger(__name__)

ROOT_PATH = "/"
SIZE_PARAM = "s"
SHAPE_PARAM = "shape"

# Digits past the 18th only make the value larger, and it is clamped anyway.
_LEADING_INT = re.compile(r"\s*([+-]?)0*(\d{1,18})", re.ASCII)
# Code points XML 1.0 does not allow in character data.
_XML_ILLEGAL = re.compile(r"[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


class Shape(str, Enum):
    SQUARE = "square"
    CIRCLE = "circle"
    ROUNDED = "rounded"


@dataclass(frozen=True)
class AvatarSpec:
    size: int
    text: str
    shape: Shape
    color1: str
    color2: str


@dataclass(frozen=True)
class AvatarOptions:
    size: int
    text: str
    shape: Shape
    is_root_path: bool = False

    def to_spec(self, color1: str, color2: str) -> AvatarSpec:
        return AvatarSpec(
            size=self.size,
            text=self.text,
            shape=self.shape,
            color1=color1,
            color2=color2,
        )


def parse_size(raw: Optional[str], default: int) -> int:
    """Parse ``s`` leniently (``"80px"`` -> 80) and clamp it to [1, 1000]."""
    match = _LEADING_INT.match(raw or "")
    value = int(match.group(1) + match.group(2)) if match else default
    return clamp_size(value)


def parse_shape(raw: Optional[str]) -> Shape:
    if raw == Shape.CIRCLE.value:
        return Shape.CIRCLE
    if raw == Shape.ROUNDED.value:
        return Shape.ROUNDED
    return Shape.SQUARE


def resolve_text(
    path: str,
    settings: AvatarSettings,
    extractor: Optional[GraphemeExtractor] = None,
) -> str:
    """Extract the avatar text from ``path`` or fall back to the default."""
    if not path.startswith(settings.base_path):
        return settings.default_text

    raw_text = path[len(settings.base_path):]
    unquoted = urllib.parse.unquote(raw_text)
    unicode_text = _XML_ILLEGAL.sub("", decode_if_needed(unquoted))
    text = first_graphemes(unicode_text, settings.max_graphemes, extractor)
    return text or settings.default_text


def parse_avatar_options(
    path: str,
    query_params: Optional[Mapping[str, str]] = None,
    settings: Optional[AvatarSettings] = None,
    extractor: Optional[GraphemeExtractor] = None,
) -> AvatarOptions:
    settings = settings or AvatarSettings()
    extractor = extractor or get_extractor(settings.grapheme_mode)
    query_params = query_params or {}
    path = path or ""

    options = AvatarOptions(
        size=parse_size(query_params.get(SIZE_PARAM), settings.default_size),
        text=resolve_text(path, settings, extractor),
        shape=parse_shape(query_params.get(SHAPE_PARAM)),
        is_root_path=path == ROOT_PATH,
    )
    logger.debug("Parsed avatar options %s from path %r", options, path)
    return options


__all__ = [
    "AvatarOptions",
    "AvatarSpec",
    "Shape",
    "parse_avatar_options",
    "parse_shape",
    "parse_size",
    "resolve_text",
]
