# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""On-surface error indicator for render failures."""

import logging
import os
import threading
import traceback
from typing import Optional

import pygame
from PIL import Image

logger = logging.getLogger(__name__)

GLYPH_COLOR = (255, 191, 0)  # Amber
GLYPH_MARK_COLOR = (0, 0, 0)


class ErrorIndicator:
    """
    Logs clock errors and overlays a small warning glyph on the face.

    The glyph is an image asset when one is configured and loaded, otherwise
    a drawn warning triangle. Showing an error never raises.
    """

    def __init__(self, image_path: Optional[str] = None):
        """
        Initialize the indicator.

        Args:
            image_path: Optional local path of the warning glyph image.
        """
        self.image_path = image_path
        self._image: Optional[pygame.Surface] = None
        self._loading = False
        self._load_failed = False
        self.error_count = 0
        self.last_error: Optional[BaseException] = None

    def load_async(self) -> None:
        """Start loading the glyph image in the background (fire-and-forget)."""
        if not self.image_path or self._image is not None or self._loading or self._load_failed:
            return

        self._loading = True

        def do_load():
            try:
                self._image = self._load_image(self.image_path)
                logger.debug(f"Loaded error glyph from {self.image_path}")
            except Exception as e:
                self._load_failed = True
                logger.warning(f"Could not load error glyph {self.image_path}: {e}")
            finally:
                self._loading = False

        thread = threading.Thread(target=do_load, daemon=True)
        thread.start()

    @staticmethod
    def _load_image(path: str) -> pygame.Surface:
        """Load an image file into a pygame surface with alpha."""
        with Image.open(os.path.expanduser(path)) as pil_image:
            if pil_image.mode != "RGBA":
                pil_image = pil_image.convert("RGBA")
            mode = pil_image.mode
            size = pil_image.size
            data = pil_image.tobytes()
        return pygame.image.frombytes(data, size, mode)

    def show(self, error: BaseException, surface: Optional[pygame.Surface], radius: float) -> None:
        """
        Report an error: log it and draw the glyph at the top-left of the face.

        Args:
            error: The error to report.
            surface: Surface to draw on (square, clock centered). May be None.
            radius: Current clock radius.
        """
        self.error_count += 1
        self.last_error = error
        try:
            logger.error(f"AnalogClock error: {error}")
            cause = error.__cause__ or error
            frames = traceback.extract_tb(cause.__traceback__) if cause.__traceback__ else []
            if frames:
                frame = frames[-1]
                logger.info(f"  at {frame.name} ({frame.filename}:{frame.lineno})")

            self.load_async()
            if surface is not None and radius > 0:
                self._draw_glyph(surface, radius)
        except Exception as e:
            logger.debug(f"Error indicator failed: {e}")

    def _draw_glyph(self, surface: pygame.Surface, radius: float) -> None:
        center_x = surface.get_width() / 2
        center_y = surface.get_height() / 2
        glyph_size = max(8, int(radius / 4))
        x = int(center_x - radius)
        y = int(center_y - radius)

        if self._image is not None:
            glyph = pygame.transform.smoothscale(self._image, (glyph_size, glyph_size))
            surface.blit(glyph, (x, y))
            return

        # Warning triangle with an exclamation mark
        pygame.draw.polygon(surface, GLYPH_COLOR, [
            (x + glyph_size // 2, y),
            (x + glyph_size, y + glyph_size),
            (x, y + glyph_size),
        ])
        bar_w = max(1, glyph_size // 8)
        bar_x = x + glyph_size // 2 - bar_w // 2
        pygame.draw.rect(surface, GLYPH_MARK_COLOR,
                         (bar_x, y + glyph_size * 3 // 8, bar_w, glyph_size * 3 // 8))
        pygame.draw.rect(surface, GLYPH_MARK_COLOR,
                         (bar_x, y + glyph_size * 13 // 16, bar_w, bar_w))
