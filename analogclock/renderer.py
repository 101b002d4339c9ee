# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Clock renderer: layered compositing of the clock face."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Optional, Tuple

import pygame

from .colors import parse_color
from .config import ClockConfig, ClockStyle
from .dateformat import try_format
from .errors import FormatError, RenderError
from .error_display import ErrorIndicator
from .geometry import HandShape, HandSpec, angle_from_time, hand_shape, point_on_circle
from .locale_names import get_locale_names
from .sizing import DEFAULT_SIZE
from .themes import ThemeResolver
from .timesource import wall_clock_now

logger = logging.getLogger(__name__)

# Diameter to radius ratio, leaves a small margin around the face
RADIUS_DIVISOR = 2.06

TRANSPARENT = (0, 0, 0, 0)

# Hubs are drawn in a fixed neutral color, themes cannot change it
HUB_COLOR = "#777777"


@dataclass
class RenderState:
    """Size and cache state of the layered renderer."""
    size: int = DEFAULT_SIZE
    needs_full_redraw: bool = True
    cached_minute_key: Optional[str] = None
    pending_size: Optional[int] = None

    @property
    def radius(self) -> float:
        return self.size / RADIUS_DIVISOR


class ClockRenderer:
    """
    Draws the clock with two offscreen layers composited onto a visible surface.

    - Slow layer: face, ticks, digits, date/weekday/week number, digital time
      and hour hand. Repainted when the minute changes or after a resize.
    - Fast layer: minute and second hands. Repainted every tick.

    A failing tick is reported to the error indicator and never propagates,
    so the next tick always runs.
    """

    # Hand proportions (fractions of the radius)
    HOUR_HAND = (0.5, 1 / 20)
    MINUTE_HAND = (0.8, 1 / 20)
    SECOND_HAND = (0.8, 0)

    def __init__(
        self,
        config: ClockConfig,
        size: int = DEFAULT_SIZE,
        clock: Optional[Callable[[], datetime]] = None,
        error_display: Optional[ErrorIndicator] = None
    ):
        """
        Initialize the clock renderer.

        Args:
            config: Clock configuration.
            size: Initial diameter in pixels.
            clock: Returns "now"; defaults to the configured timezone's wall clock.
            error_display: Error indicator; a default one is created if None.
        """
        if not pygame.font.get_init():
            pygame.font.init()

        self.config = config
        self.state = RenderState(size=size)
        self._clock = clock
        self._resolver = ThemeResolver(config)
        self._errors = error_display or ErrorIndicator(config.error_image)
        self._font_cache: Dict[int, pygame.font.Font] = {}
        self._in_tick = False

        self.slow_redraws = 0
        self.fast_redraws = 0
        self.failed_ticks = 0

        self._allocate_surfaces()
        logger.info(f"ClockRenderer initialized: {size}px, {len(config.themes)} themes")

    # ------------------------------------------------------------------ #
    # Surfaces and sizing
    # ------------------------------------------------------------------ #

    def _allocate_surfaces(self) -> None:
        size = (self.state.size, self.state.size)
        self._slow_layer = pygame.Surface(size, pygame.SRCALPHA)
        self._fast_layer = pygame.Surface(size, pygame.SRCALPHA)
        self._surface = pygame.Surface(size, pygame.SRCALPHA)

    @property
    def surface(self) -> pygame.Surface:
        """The visible composited surface."""
        return self._surface

    @property
    def size(self) -> int:
        return self.state.size

    @property
    def radius(self) -> float:
        return self.state.radius

    def resize(self, size: int) -> None:
        """
        Schedule a new diameter.

        Surfaces are reallocated immediately when no tick is running, or at
        the start of the next tick otherwise.
        """
        if size == self.state.size and self.state.pending_size is None:
            return
        self.state.pending_size = size
        self.state.needs_full_redraw = True
        if not self._in_tick:
            self._apply_pending_resize()

    def _apply_pending_resize(self) -> None:
        pending = self.state.pending_size
        if pending is None:
            return
        self.state.pending_size = None
        if pending != self.state.size or self._surface.get_width() != pending:
            logger.debug(f"Resizing clock surfaces: {self.state.size} -> {pending}")
            self.state.size = pending
            self._allocate_surfaces()
        self.state.needs_full_redraw = True

    def get_update_interval_ms(self) -> int:
        """Tick period: 1 s, or 10 s when the second hand is hidden."""
        return 10000 if self.config.style.hide_second_hand else 1000

    # ------------------------------------------------------------------ #
    # Tick
    # ------------------------------------------------------------------ #

    def now(self) -> datetime:
        """Resolve the instant to display."""
        if self._clock is not None:
            return self._clock()
        style = self.config.style
        return wall_clock_now(style.timezone, demo=style.demo)

    def tick(self) -> bool:
        """
        Render one frame.

        Returns:
            True if the frame was drawn, False if the tick failed.
        """
        self._in_tick = True
        try:
            self._apply_pending_resize()

            now = self.now()
            style = self._resolver.resolve(now)
            minute_key = f"{now.minute:02d}"

            if self.state.needs_full_redraw or minute_key != self.state.cached_minute_key:
                self._draw_slow_layer(now, style)
                self.state.needs_full_redraw = False
                self.state.cached_minute_key = minute_key
                self.slow_redraws += 1

            self._draw_fast_layer(now, style)
            self.fast_redraws += 1

            self._composite()
            return True
        except Exception as e:
            self.failed_ticks += 1
            error = RenderError(f"Render tick failed: {e}")
            error.__cause__ = e
            self._errors.show(error, self._surface, self.state.radius)
            return False
        finally:
            self._in_tick = False

    def _composite(self) -> None:
        self._surface.fill(TRANSPARENT)
        self._surface.blit(self._slow_layer, (0, 0))
        self._surface.blit(self._fast_layer, (0, 0))

    # ------------------------------------------------------------------ #
    # Layers
    # ------------------------------------------------------------------ #

    def _draw_slow_layer(self, now: datetime, style: ClockStyle) -> None:
        layer = self._slow_layer
        radius = self.state.radius
        layer.fill(TRANSPARENT)

        self._draw_face(layer, radius, style)
        self._draw_ticks(layer, radius, style)
        if not style.hide_face_digits:
            self._draw_face_digits(layer, radius, style)
        if not style.hide_date:
            self._draw_date(layer, now, radius, style)
        if not style.hide_weekday:
            self._draw_weekday(layer, now, radius, style)
        if not style.hide_week_number:
            self._draw_week_number(layer, now, radius, style)
        if not style.hide_digital_time:
            self._draw_digital_time(layer, now, radius, style)

        self._draw_hand(layer, HandSpec(
            angle_degrees=angle_from_time(now.hour, now.minute, now.second, "hour"),
            length_fraction=self.HOUR_HAND[0],
            width_fraction=self.HOUR_HAND[1],
            color=style.color_hour_hand,
            style=style.style_hour_hand,
        ), radius, style)

    def _draw_fast_layer(self, now: datetime, style: ClockStyle) -> None:
        layer = self._fast_layer
        radius = self.state.radius
        layer.fill(TRANSPARENT)

        self._draw_hand(layer, HandSpec(
            angle_degrees=angle_from_time(now.hour, now.minute, now.second, "minute"),
            length_fraction=self.MINUTE_HAND[0],
            width_fraction=self.MINUTE_HAND[1],
            color=style.color_minute_hand,
            style=style.style_minute_hand,
        ), radius, style)

        if not style.hide_second_hand:
            self._draw_hand(layer, HandSpec(
                angle_degrees=angle_from_time(now.hour, now.minute, now.second, "second"),
                length_fraction=self.SECOND_HAND[0],
                width_fraction=self.SECOND_HAND[1],
                color=style.color_second_hand,
                style=style.style_second_hand,
            ), radius, style)

    # ------------------------------------------------------------------ #
    # Drawing helpers
    # ------------------------------------------------------------------ #

    def _to_device(self, point: Tuple[float, float]) -> Tuple[float, float]:
        center = self.state.size / 2
        return (center + point[0], center + point[1])

    def get_font(self, size: int) -> pygame.font.Font:
        """Get a cached font of the given pixel size."""
        size = max(1, size)
        if size not in self._font_cache:
            self._font_cache[size] = pygame.font.Font(None, size)
        return self._font_cache[size]

    def _draw_text(self, layer: pygame.Surface, text: str, position: Tuple[float, float],
                   font_size: int, color: str) -> None:
        """Draw text centered on a point in local coordinates."""
        text_surface = self.get_font(font_size).render(text, True, parse_color(color))
        x, y = self._to_device(position)
        layer.blit(text_surface, (round(x - text_surface.get_width() / 2),
                                  round(y - text_surface.get_height() / 2)))

    def _draw_face(self, layer: pygame.Surface, radius: float, style: ClockStyle) -> None:
        center = self._to_device((0, 0))
        pygame.draw.circle(layer, parse_color(style.color_background), center, radius)
        border_width = max(1, round(radius * 0.03))
        pygame.draw.circle(layer, parse_color(style.resolved_color("color_border")),
                           center, radius, border_width)

    def _draw_ticks(self, layer: pygame.Surface, radius: float, style: ClockStyle) -> None:
        color = parse_color(style.color_ticks)
        if not style.hide_major_ticks:
            for num in range(12):
                angle = num * math.pi / 6
                pygame.draw.line(layer, color,
                                 self._to_device(point_on_circle(angle, radius)),
                                 self._to_device(point_on_circle(angle, radius * 0.9)), 2)
        if not style.hide_minor_ticks:
            for num in range(60):
                angle = num * math.pi / 30
                pygame.draw.line(layer, color,
                                 self._to_device(point_on_circle(angle, radius)),
                                 self._to_device(point_on_circle(angle, radius * 0.95)), 1)

    def _draw_face_digits(self, layer: pygame.Surface, radius: float, style: ClockStyle) -> None:
        font_size = round(radius / 7)
        for num in range(1, 13):
            # Shift a quarter turn so 12 sits at the top
            angle = num * math.pi / 6 - math.pi / 2
            self._draw_text(layer, str(num), point_on_circle(angle, radius * 0.8),
                            font_size, style.color_face_digits)

    def _format_field(self, layer: pygame.Surface, now: datetime, mask: str,
                      default_mask: str, style: ClockStyle) -> str:
        """
        Format a text field with a custom mask, falling back to the locale default.

        A failing custom mask is reported to the error indicator.
        """
        if mask:
            result = try_format(now, mask, locale=style.locale)
            if result.ok:
                return result.text
            self._errors.show(result.error, layer, self.state.radius)

        fallback = try_format(now, default_mask, locale=style.locale)
        if not fallback.ok:
            raise FormatError(f"Locale default mask failed: {fallback.error}")
        return fallback.text

    def _draw_date(self, layer: pygame.Surface, now: datetime, radius: float, style: ClockStyle) -> None:
        names = get_locale_names(style.locale)
        text = self._format_field(layer, now, style.date_format, names.date_mask, style)
        self._draw_text(layer, text, (0, radius * 0.5), round(radius / 7),
                        style.resolved_color("color_date"))

    def _draw_weekday(self, layer: pygame.Surface, now: datetime, radius: float, style: ClockStyle) -> None:
        if style.show_timezone:
            text = style.timezone_display_name or style.timezone or now.tzname() or ""
        else:
            text = get_locale_names(style.locale).weekdays[now.weekday()]
        self._draw_text(layer, text, (0, radius * 0.3), round(radius / 7),
                        style.resolved_color("color_weekday"))

    def _draw_week_number(self, layer: pygame.Surface, now: datetime, radius: float, style: ClockStyle) -> None:
        week = now.isocalendar()[1]
        self._draw_text(layer, str(week), (radius * -0.5, 0), round(radius / 7),
                        style.resolved_color("color_week_number"))

    def _draw_digital_time(self, layer: pygame.Surface, now: datetime, radius: float, style: ClockStyle) -> None:
        names = get_locale_names(style.locale)
        text = self._format_field(layer, now, style.time_format, names.time_mask, style)
        font_size = round(radius / (5 if len(text) > 5 else 3))
        self._draw_text(layer, text, (0, radius * -0.4), font_size, style.color_digital_time)

    def _draw_hand(self, layer: pygame.Surface, spec: HandSpec, radius: float, style: ClockStyle) -> None:
        shape: HandShape = hand_shape(spec, radius)
        color = parse_color(spec.color)
        points = [self._to_device(p) for p in shape.points]

        if len(points) > 2:
            pygame.draw.polygon(layer, color, points)
            pygame.draw.aalines(layer, color, shape.closed, points)
        else:
            pygame.draw.line(layer, color, points[0], points[1], shape.stroke_width)

        # Hub goes on top of the hand
        pygame.draw.circle(layer, parse_color(HUB_COLOR), self._to_device((0, 0)),
                           max(1.0, shape.hub_radius))
