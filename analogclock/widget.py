# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
AnalogClock widget: ties configuration, sizing, rendering and the tick timer
together for a host that owns the window and the event loop.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Tuple, Union

import pygame

from . import __version__
from .config import ClockConfig, normalize_config
from .error_display import ErrorIndicator
from .renderer import ClockRenderer
from .sizing import SizingController

logger = logging.getLogger(__name__)

# Event posted by the tick timer
CLOCK_TICK = pygame.USEREVENT + 1


class TickTimer:
    """Periodic CLOCK_TICK events on the pygame event queue."""

    def __init__(self, interval_ms: int, event_type: int = CLOCK_TICK):
        self.interval_ms = interval_ms
        self.event_type = event_type
        self.running = False

    def start(self) -> None:
        pygame.time.set_timer(self.event_type, self.interval_ms)
        self.running = True
        logger.debug(f"Tick timer started: every {self.interval_ms}ms")

    def stop(self) -> None:
        if not self.running:
            return
        # An interval of 0 cancels the timer
        pygame.time.set_timer(self.event_type, 0)
        self.running = False
        logger.debug("Tick timer stopped")


class AnalogClock:
    """
    The clock widget.

    Usage:
        clock = AnalogClock()
        clock.set_config({"color_Background": "#202020", "diameter": 300})
        clock.build(viewport=lambda: (1920, 1080))
        clock.start()
        # on every CLOCK_TICK event:
        clock.tick()
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize the widget.

        Args:
            clock: Optional "now" source passed to the renderer (tests, replays).
        """
        self._raw_config: Union[Mapping[str, Any], ClockConfig, None] = None
        self._clock = clock
        self.config: Optional[ClockConfig] = None
        self.sizing: Optional[SizingController] = None
        self.renderer: Optional[ClockRenderer] = None
        self.error_display: Optional[ErrorIndicator] = None
        self.timer: Optional[TickTimer] = None
        self._viewport: Optional[Callable[[], Tuple[int, int]]] = None
        self._container: Tuple[float, float] = (0, 0)
        self._built = False

    @property
    def is_built(self) -> bool:
        return self._built

    @property
    def surface(self) -> Optional[pygame.Surface]:
        """Visible clock surface, or None before build()."""
        return self.renderer.surface if self.renderer else None

    def set_config(self, raw: Union[Mapping[str, Any], ClockConfig, None]) -> None:
        """
        Set the host configuration.

        Before build() the configuration is just stored. After build() the
        sizing controller and renderer are recreated from the new configuration,
        so a new diameter takes effect too.
        """
        self._raw_config = raw
        if not self._built:
            return

        self.config = self._normalize(raw)
        if self.sizing is not None:
            self.sizing.close()
        self.sizing = self._create_sizing()
        size = self.sizing.size or self.sizing.compute(*self._container)
        self.error_display = ErrorIndicator(self.config.error_image)
        self.error_display.load_async()
        self.renderer = ClockRenderer(self.config, size=size, clock=self._clock,
                                      error_display=self.error_display)
        logger.info("Clock configuration updated")

        if self.timer and self.timer.running:
            self.timer.stop()
            self.timer = TickTimer(self.renderer.get_update_interval_ms())
            self.timer.start()

    @staticmethod
    def _normalize(raw) -> ClockConfig:
        if isinstance(raw, ClockConfig):
            return raw
        return normalize_config(raw)

    def build(self, viewport: Optional[Callable[[], Tuple[int, int]]] = None) -> None:
        """
        Build the clock. Only the first call has an effect.

        Args:
            viewport: Returns the (width, height) of the viewport.
        """
        if self._built:
            return

        logger.info(f"AnalogClock {__version__}")
        self.config = self._normalize(self._raw_config)

        self.error_display = ErrorIndicator(self.config.error_image)
        self._viewport = viewport
        self.sizing = self._create_sizing()
        size = self.sizing.size or self.sizing.compute()

        self.renderer = ClockRenderer(self.config, size=size, clock=self._clock,
                                      error_display=self.error_display)
        self.error_display.load_async()
        self._built = True

    def _create_sizing(self) -> SizingController:
        return SizingController(self.config.diameter, on_size=self._on_size,
                                viewport=self._viewport)

    def _on_size(self, size: int) -> None:
        if self.renderer is not None:
            self.renderer.resize(size)

    def on_container_resize(self, width: float, height: float) -> None:
        """Handle a host container size change."""
        self._container = (width, height)
        if self.sizing is not None:
            self.sizing.update(width, height)

    def start(self) -> None:
        """Draw the first frame and start ticking."""
        if not self._built:
            self.build()
        if self.timer and self.timer.running:
            return

        self.tick()
        self.timer = TickTimer(self.renderer.get_update_interval_ms())
        self.timer.start()

    def stop(self) -> None:
        """Stop ticking."""
        if self.timer:
            self.timer.stop()

    def tick(self) -> bool:
        """Render one frame. Returns False if the frame failed."""
        if self.renderer is None:
            return False
        return self.renderer.tick()

    def teardown(self) -> None:
        """Stop ticking and release the sizing controller."""
        self.stop()
        if self.sizing is not None:
            self.sizing.close()
        logger.info("AnalogClock torn down")
