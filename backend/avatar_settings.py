import logging
import math
import os
from dataclasses import dataclass

from graphemes import CODEPOINT_MODE, UNICODE_MODE


logger = logging.getLogger(__name__)

MIN_SIZE = 1
MAX_SIZE = 1000

DEFAULT_BASE_PATH = "/avatar/"
DEFAULT_TEXT = "A"
DEFAULT_SIZE = 60
DEFAULT_MAX_GRAPHEMES = 2
DEFAULT_FONT_SIZE_RATIO = 0.9
DEFAULT_CACHE_MAX_AGE = 31536000  # one year
GRAPHEME_MODES = (UNICODE_MODE, CODEPOINT_MODE)


@dataclass(frozen=True)
class AvatarSettings:
    base_path: str = DEFAULT_BASE_PATH
    default_text: str = DEFAULT_TEXT
    default_size: int = DEFAULT_SIZE
    max_graphemes: int = DEFAULT_MAX_GRAPHEMES
    font_size_ratio: float = DEFAULT_FONT_SIZE_RATIO
    cache_max_age: int = DEFAULT_CACHE_MAX_AGE
    grapheme_mode: str = UNICODE_MODE

    @property
    def long_term_cache_control(self) -> str:
        return f"public, max-age={self.cache_max_age}, immutable"


def clamp_size(value: int) -> int:
    return max(MIN_SIZE, min(value, MAX_SIZE))


def _env_int(key: str, fallback: int, minimum: int | None = None) -> int:
    raw = os.environ.get(key)
    if raw is None or not raw.strip():
        return fallback
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning("Invalid integer '%s' for %s. Falling back to %s.", raw, key, fallback)
        return fallback
    if minimum is not None and value < minimum:
        logger.warning("Value %s for %s is below %s. Falling back to %s.", value, key, minimum, fallback)
        return fallback
    return value


def _env_float(key: str, fallback: float) -> float:
    raw = os.environ.get(key)
    if raw is None or not raw.strip():
        return fallback
    try:
        value = float(raw.strip())
    except ValueError:
        logger.warning("Invalid number '%s' for %s. Falling back to %s.", raw, key, fallback)
        return fallback
    if not math.isfinite(value) or value <= 0:
        logger.warning("Value %s for %s must be a positive finite number. Falling back to %s.", value, key, fallback)
        return fallback
    return value


def _normalize_base_path(value: str | None) -> str:
    if not value or not value.strip():
        return DEFAULT_BASE_PATH
    candidate = value.strip()
    if not candidate.startswith('/'):
        candidate = '/' + candidate
    if not candidate.endswith('/'):
        candidate += '/'
    return candidate


def load_avatar_settings() -> AvatarSettings:
    base_path = _normalize_base_path(os.environ.get('AVATAR_BASE_PATH'))

    default_text = os.environ.get('AVATAR_DEFAULT_TEXT', '').strip() or DEFAULT_TEXT

    default_size = _env_int('AVATAR_DEFAULT_SIZE', DEFAULT_SIZE)
    clamped = clamp_size(default_size)
    if clamped != default_size:
        logger.warning("Default size %s clamped to %s", default_size, clamped)

    grapheme_mode = os.environ.get('AVATAR_GRAPHEME_MODE', UNICODE_MODE).strip().lower()
    if grapheme_mode not in GRAPHEME_MODES:
        logger.warning(
            "Unrecognized grapheme mode '%s'. Falling back to '%s'.",
            grapheme_mode,
            UNICODE_MODE,
        )
        grapheme_mode = UNICODE_MODE

    settings = AvatarSettings(
        base_path=base_path,
        default_text=default_text,
        default_size=clamped,
        max_graphemes=_env_int('AVATAR_MAX_GRAPHEMES', DEFAULT_MAX_GRAPHEMES, minimum=1),
        font_size_ratio=_env_float('AVATAR_FONT_SIZE_RATIO', DEFAULT_FONT_SIZE_RATIO),
        cache_max_age=_env_int('AVATAR_CACHE_MAX_AGE', DEFAULT_CACHE_MAX_AGE, minimum=0),
        grapheme_mode=grapheme_mode,
    )
    logger.info("Using avatar settings %s", settings)
    return settings
