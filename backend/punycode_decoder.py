"""Bootstring (RFC 3492) decoding for ``xn--`` labels in avatar paths."""
from __future__ import annotations

import logging
from typing import List


logger = logging.getLogger(__name__)

BASE = 36
T_MIN = 1
T_MAX = 26
SKEW = 38
DAMP = 700
INITIAL_BIAS = 72
INITIAL_N = 128
DELIMITER = "-"
PREFIX = "xn--"

MAX_CODE_POINT = 0x10FFFF
MAX_INT = 0x7FFFFFFF
_SURROGATES = range(0xD800, 0xE000)


class DecodeError(ValueError):
    """Raised when a label is not valid Punycode."""


def _digit_value(char: str) -> int:
    code = ord(char)
    if 0x30 <= code <= 0x39:
        return code - 0x30 + 26
    if 0x41 <= code <= 0x5A:
        return code - 0x41
    if 0x61 <= code <= 0x7A:
        return code - 0x61
    raise DecodeError(f"invalid digit {char!r}")


def _adapt(delta: int, num_points: int, first_time: bool) -> int:
    delta = delta // DAMP if first_time else delta // 2
    delta += delta // num_points

    k = 0
    threshold = ((BASE - T_MIN) * T_MAX) // 2
    while delta > threshold:
        delta //= BASE - T_MIN
        k += BASE

    return k + ((BASE - T_MIN + 1) * delta) // (delta + SKEW)


def decode(label: str) -> str:
    """Decode a Punycode label (without the ``xn--`` prefix) to Unicode.

    Raises :class:`DecodeError` on a non-ASCII basic code point, an invalid
    base-36 digit, a truncated integer, or a result outside the Unicode
    scalar range.
    """
    output: List[str] = []
    i = 0
    n = INITIAL_N
    bias = INITIAL_BIAS

    basic_end = label.rfind(DELIMITER)
    if basic_end > 0:
        for char in label[:basic_end]:
            if ord(char) >= 0x80:
                raise DecodeError("non-ASCII character in basic portion")
            output.append(char)
    index = basic_end + 1 if basic_end >= 0 else 0

    while index < len(label):
        old_i = i
        w = 1
        k = BASE
        while True:
            if index >= len(label):
                raise DecodeError("unexpected end of input")
            digit = _digit_value(label[index])
            index += 1
            i += digit * w
            if i > MAX_INT:
                raise DecodeError("integer overflow")

            if k <= bias:
                t = T_MIN
            elif k >= bias + T_MAX:
                t = T_MAX
            else:
                t = k - bias

            if digit < t:
                break
            w *= BASE - t
            k += BASE

        num_points = len(output) + 1
        bias = _adapt(i - old_i, num_points, old_i == 0)
        n += i // num_points
        i %= num_points

        if n > MAX_CODE_POINT or n in _SURROGATES:
            raise DecodeError(f"code point {n:#x} out of range")
        output.insert(i, chr(n))
        i += 1

    return "".join(output)


def is_punycode(text: str) -> bool:
    return text.lower().startswith(PREFIX)


def decode_if_needed(text: str) -> str:
    """Decode ``text`` when it carries the ``xn--`` prefix.

    Malformed labels are not an error for callers: the original text is
    returned so the avatar shows the raw label instead.
    """
    if not is_punycode(text):
        return text

    try:
        return decode(text[len(PREFIX):])
    except DecodeError as exc:
        logger.warning("Punycode decoding failed for %r: %s", text, exc)
        return text


__all__ = ["DecodeError", "decode", "decode_if_needed", "is_punycode"]
