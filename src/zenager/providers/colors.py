"""Label color helpers shared by the provider adapters."""

from __future__ import annotations

import math
import re

from zenager.providers.exceptions import ParseError

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def _string_hash(text: str) -> int:
    """32-bit ``hash * 31 + code`` over UTF-16 code units."""
    raw = text.encode("utf-16-le")
    hash_value = 0
    for i in range(0, len(raw), 2):
        code = raw[i] | (raw[i + 1] << 8)
        hash_value = code + (_to_int32(_to_int32(hash_value) << 5) - hash_value)
    return _to_int32(hash_value)


def _hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    h = hue / 360
    s = saturation / 100
    lum = lightness / 100

    c = (1 - abs(2 * lum - 1)) * s
    x = c * (1 - abs((h * 6) % 2 - 1))
    m = lum - c / 2

    if h < 1 / 6:
        r, g, b = c, x, 0.0
    elif h < 2 / 6:
        r, g, b = x, c, 0.0
    elif h < 3 / 6:
        r, g, b = 0.0, c, x
    elif h < 4 / 6:
        r, g, b = 0.0, x, c
    elif h < 5 / 6:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    def channel(value: float) -> str:
        clamped = max(0.0, min(1.0, value + m))
        return f"{math.floor(clamped * 255 + 0.5):02x}"

    return channel(r) + channel(g) + channel(b)


def color_from_text(text: str) -> str:
    """Derive a stable label color from the label text.

    The same text always yields the same six-digit hex color, so labels that
    arrive without a color render identically on every sync.
    """
    hash_value = _string_hash(text)
    hue = (hash_value & 0xFF) % 360
    saturation = 60 + ((hash_value >> 8) & 0x3F)
    lightness = 40 + ((hash_value >> 16) & 0x1F)
    return _hsl_to_hex(hue, saturation, lightness)


def normalize_color(value: object) -> str:
    """Normalize a provider color ('#D73A4A', 'd73a4a', '#abc') to six lowercase hex digits.

    Raises:
        ParseError: If the value is not a hex color.
    """
    if not isinstance(value, str):
        raise ParseError(f"Label color must be a string, got {type(value).__name__}")
    match = _HEX_COLOR.match(value.strip())
    if not match:
        raise ParseError(f"Invalid label color: {value!r}")
    digits = match.group(1).lower()
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return digits
