"""Handler that renders an SVG avatar for any GET request."""

from __future__ import annotations

import random
from typing import Any, Dict, Optional

from avatar_options import AvatarOptions, Shape, parse_avatar_options
from avatar_colors import RandomSource, gradient_colors
from avatar_settings import AvatarSettings
from graphemes import get_extractor
from request_parser import RequestParser
from svg_renderer import render_svg


SVG_CONTENT_TYPE = "image/svg+xml; charset=utf-8"
NO_CACHE = "no-cache"


class AvatarHandler:
    def __init__(self, logger, settings: AvatarSettings, rng: Optional[RandomSource] = None) -> None:
        self._logger = logger
        self._settings = settings
        self._rng = rng or random.SystemRandom()
        self._extractor = get_extractor(settings.grapheme_mode)

    def handle(self, event: Dict[str, Any]) -> Dict[str, Any]:
        parser = RequestParser(event)
        try:
            options = parse_avatar_options(
                parser.path,
                parser.query_params,
                settings=self._settings,
                extractor=self._extractor,
            )
        except Exception:
            self._logger.exception("Failed to parse avatar options for %s; using defaults", parser.path)
            options = self._default_options(parser.path)

        color1, color2 = gradient_colors(self._rng)
        svg = render_svg(
            options.to_spec(color1, color2),
            font_size_ratio=self._settings.font_size_ratio,
            extractor=self._extractor,
        )

        # The root path shows a fresh random avatar on every request.
        return self._svg_response(svg, should_cache=not options.is_root_path)

    # Internal helpers ---------------------------------------------------

    def _default_options(self, path: str) -> AvatarOptions:
        return AvatarOptions(
            size=self._settings.default_size,
            text=self._settings.default_text,
            shape=Shape.SQUARE,
            is_root_path=path == "/",
        )

    def _svg_response(self, svg: str, should_cache: bool) -> Dict[str, Any]:
        return {
            "statusCode": 200,
            "headers": {
                "Content-Type": SVG_CONTENT_TYPE,
                "Cache-Control": self._settings.long_term_cache_control if should_cache else NO_CACHE,
            },
            "body": svg,
        }


def create_avatar_handler(logger, settings: AvatarSettings, rng: Optional[RandomSource] = None):
    handler = AvatarHandler(logger=logger, settings=settings, rng=rng)
    return handler.handle
