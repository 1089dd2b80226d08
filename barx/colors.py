"""Hex color parsing for padding and label colors."""

import re

from barx.errors import InvalidColorFormat

RGBA = tuple[int, int, int, int]

_HEX_COLOR = re.compile(r"#[0-9A-Fa-f]{6}")


def parse_hex_color(value: str) -> RGBA:
    """Parse ``#RRGGBB`` into a fully opaque RGBA tuple.

    Raises:
        InvalidColorFormat: missing ``#``, wrong length or non-hex digits.
    """
    if not isinstance(value, str) or not _HEX_COLOR.fullmatch(value):
        raise InvalidColorFormat(f"expected '#RRGGBB', got {value!r}")
    rgb = int(value[1:], 16)
    return (rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF, 255
