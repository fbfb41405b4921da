"""Render an :class:`AvatarSpec` as a standalone SVG document."""
from __future__ import annotations

from typing import Optional

from avatar_options import AvatarSpec, Shape
from avatar_settings import DEFAULT_FONT_SIZE_RATIO
from graphemes import GraphemeExtractor, grapheme_count


XML_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}

SHAPE_STYLES = {
    Shape.CIRCLE: 'style="border-radius: 50%;"',
    Shape.ROUNDED: 'style="border-radius: 10px;"',
}

SVG_TEMPLATE = """<?xml version="1.0" standalone="no"?>
<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" "http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">
<svg {shape_style}width="{size}" height="{size}" viewBox="0 0 {size} {size}" version="1.1" xmlns="http://www.w3.org/2000/svg">
  <g>
    <defs>
      <linearGradient id="avatar" x1="0" y1="0" x2="1" y2="1">
        <stop offset="0%" stop-color="{color1}"/>
        <stop offset="100%" stop-color="{color2}"/>
      </linearGradient>
    </defs>
    <rect fill="url(#avatar)" x="0" y="0" width="{size}" height="{size}"/>
    <text x="50%" y="50%" alignment-baseline="central" dominant-baseline="central" text-anchor="middle" fill="#fff" font-family="sans-serif" font-size="{font_size}">{text}</text>
  </g>
</svg>"""


def escape_xml(text: str) -> str:
    return "".join(XML_ENTITIES.get(char, char) for char in text)


def shape_style(shape: Shape) -> str:
    """Return the ``style`` attribute for ``shape``; squares get none."""
    return SHAPE_STYLES.get(shape, "")


def calculate_font_size(
    size: int,
    text: str,
    ratio: float = DEFAULT_FONT_SIZE_RATIO,
    extractor: Optional[GraphemeExtractor] = None,
) -> float:
    return size * ratio / max(grapheme_count(text, extractor), 1)


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def render_svg(
    spec: AvatarSpec,
    font_size_ratio: float = DEFAULT_FONT_SIZE_RATIO,
    extractor: Optional[GraphemeExtractor] = None,
) -> str:
    style = shape_style(spec.shape)
    font_size = calculate_font_size(spec.size, spec.text, font_size_ratio, extractor)
    return SVG_TEMPLATE.format(
        shape_style=f"{style} " if style else "",
        size=spec.size,
        color1=escape_xml(spec.color1),
        color2=escape_xml(spec.color2),
        font_size=_format_number(font_size),
        text=escape_xml(spec.text),
    )


__all__ = ["calculate_font_size", "escape_xml", "render_svg", "shape_style"]
