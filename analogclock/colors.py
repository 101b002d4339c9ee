# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Color string parsing (CSS-style names and hex values) into pygame colors."""

import re
from functools import lru_cache

import pygame

_SHORT_HEX_RE = re.compile(r"^#([0-9a-fA-F])([0-9a-fA-F])([0-9a-fA-F])([0-9a-fA-F])?$")
_RGB_RE = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*([\d.]+)\s*)?\)$"
)


@lru_cache(maxsize=128)
def parse_color(value: str) -> pygame.Color:
    """
    Parse a color string.

    Accepts color names ("Silver", "dark slate gray"), "#rgb", "#rgba",
    "#rrggbb", "#rrggbbaa" and "rgb()/rgba()" notation.

    Raises:
        ValueError: If the string is not a recognised color.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid color: {value!r}")

    text = value.strip()
    short = _SHORT_HEX_RE.match(text)
    if short:
        text = "#" + "".join(c * 2 for c in short.groups() if c)

    rgb = _RGB_RE.match(text.lower())
    if rgb:
        r, g, b, a = rgb.groups()
        channels = [int(r), int(g), int(b)]
        if any(c > 255 for c in channels):
            raise ValueError(f"Invalid color: {value!r}")
        alpha = 255 if a is None else max(0, min(255, round(float(a) * 255)))
        return pygame.Color(*channels, alpha)

    if not text.startswith("#"):
        text = text.replace(" ", "").lower()
    return pygame.Color(text)
