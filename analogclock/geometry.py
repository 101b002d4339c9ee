# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Hand angles and hand shapes in the clock's local coordinate space."""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

Point = Tuple[float, float]


class HandStyle(IntEnum):
    """Hand shapes. Unknown style ids are drawn as a diamond."""
    DIAMOND = 1
    BATON = 3


@dataclass(frozen=True)
class HandSpec:
    """A hand to draw, with length and width as fractions of the radius."""
    angle_degrees: float
    length_fraction: float
    width_fraction: float
    color: str
    style: int = HandStyle.DIAMOND


@dataclass(frozen=True)
class HandShape:
    """Device-space outline of a hand, origin at the clock center, +y down."""
    points: List[Point]
    closed: bool
    stroke_width: int
    hub_radius: float


def angle_from_time(hour: int, minute: int, second: float, unit: str) -> float:
    """
    Angle of a hand in degrees, clockwise from 12 o'clock.

    Args:
        hour: Hour of day (0-23).
        minute: Minute (0-59).
        second: Second (0-59).
        unit: Which hand: "hour", "minute" or "second".

    Returns:
        Angle in degrees, in [0, 360) for valid inputs.
    """
    if unit == "hour":
        return (hour % 12 + minute / 60) * 30
    if unit == "minute":
        return (minute + second / 60) * 6
    if unit == "second":
        return second * 6
    raise ValueError(f"Unknown hand unit: {unit}")


def _rotate(x: float, y: float, angle: float) -> Point:
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    return (x * cos_a - y * sin_a, x * sin_a + y * cos_a)


def hand_polygon(angle_degrees: float, length: float, width: float, style: int) -> HandShape:
    """
    Build the outline of a hand.

    Args:
        angle_degrees: Clock angle (0 = 12 o'clock, clockwise).
        length: Hand length in device units.
        width: Half-width of the diamond in device units (clamped to >= 1).
        style: HandStyle id.

    Returns:
        HandShape with rotated vertices.
    """
    # Clock angles start at 12 o'clock; raster angles start at 3 o'clock
    angle = (angle_degrees - 90) * math.pi / 180
    width = width if width > 0 else 1

    if style == HandStyle.BATON:
        outline = [(1, 0), (length, 0)]
        stroke_width = 3
    else:
        outline = [(length, 0), (0, -width), (-width * 1.5, 0), (0, width)]
        stroke_width = 1

    return HandShape(
        points=[_rotate(x, y, angle) for x, y in outline],
        closed=True,
        stroke_width=stroke_width,
        hub_radius=length / 40,
    )


def hand_shape(spec: HandSpec, radius: float) -> HandShape:
    """Scale a HandSpec to a clock of the given radius."""
    return hand_polygon(
        spec.angle_degrees,
        spec.length_fraction * radius,
        spec.width_fraction * radius,
        spec.style,
    )


def point_on_circle(angle_radians: float, distance: float) -> Point:
    """Point at a raster angle (0 = 3 o'clock, clockwise with +y down)."""
    return (math.cos(angle_radians) * distance, math.sin(angle_radians) * distance)
