#!/usr/bin/env python3
# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
AnalogClock - Main Application.
Opens a window and drives the clock widget from the pygame event loop.
"""

import argparse
from dataclasses import replace
import logging
import os
import signal
import sys
from pathlib import Path
from typing import Optional, Tuple

import pygame

# Initialize logging early
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)

WINDOW_MARGIN = 20
BACKGROUND = (0, 0, 0)


def setup_file_logging(log_dir: str) -> None:
    """Set up file logging in addition to console."""
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path / 'analogclock.log')
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))
    logging.getLogger().addHandler(file_handler)


def _load_config(config_path: Optional[str], demo: bool = False):
    """Load, validate and optionally force demo mode."""
    from .config import load_config, validate_config

    config = load_config(config_path)
    for error in validate_config(config):
        logger.warning(f"Config warning: {error}")
    if demo:
        config = replace(config, style=replace(config.style, demo=True))
    logger.info(f"Configuration loaded from: {config.config_path or 'defaults'}")
    return config


class ClockApp:
    """Windowed host for the clock widget."""

    def __init__(self, config_path: Optional[str] = None, demo: bool = False):
        """
        Initialize the application.

        Args:
            config_path: Path to configuration file.
            demo: Show the fixed demo time instead of the current time.
        """
        self.config_path = config_path
        self.demo = demo
        self.screen = None
        self.clock = None
        self._running = False

        # Set up signal handlers
        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

    def _signal_handler(self, signum, frame):
        """Handle shutdown signals."""
        logger.info(f"Received signal {signum}, initiating shutdown...")
        self.stop()

    def _viewport(self) -> Tuple[int, int]:
        info = pygame.display.Info()
        return (info.current_w, info.current_h)

    def _container(self) -> Tuple[int, int]:
        width, height = self.screen.get_size()
        return (max(0, width - WINDOW_MARGIN), max(0, height - WINDOW_MARGIN))

    def _init_display(self) -> None:
        pygame.display.set_caption("AnalogClock")

        initial = (self.clock.sizing.size or 0) + WINDOW_MARGIN
        if initial <= WINDOW_MARGIN:
            initial = 480
        self.screen = pygame.display.set_mode((initial, initial), pygame.RESIZABLE)
        logger.info(f"Display initialized: {initial}x{initial}")

    def present(self) -> None:
        """Draw the clock centered in the window."""
        surface = self.clock.surface
        self.screen.fill(BACKGROUND)
        if surface is not None:
            x = (self.screen.get_width() - surface.get_width()) // 2
            y = (self.screen.get_height() - surface.get_height()) // 2
            self.screen.blit(surface, (x, y))
        pygame.display.flip()

    def run(self) -> int:
        """
        Run the application.

        Returns:
            Exit code.
        """
        from .widget import AnalogClock, CLOCK_TICK

        logger.info("Starting AnalogClock...")
        try:
            config = _load_config(self.config_path, demo=self.demo)
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            return 1

        self.clock = AnalogClock()
        self.clock.set_config(config)

        pygame.init()
        self.clock.build(viewport=self._viewport)
        self._init_display()
        self.clock.on_container_resize(*self._container())
        self.clock.start()
        self.present()

        self._running = True
        try:
            while self._running:
                event = pygame.event.wait(500)
                if event.type == pygame.NOEVENT:
                    continue
                if event.type == pygame.QUIT:
                    logger.info("Window closed")
                    break
                if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    logger.info("Escape pressed")
                    break
                if event.type == CLOCK_TICK:
                    self.clock.tick()
                    self.present()
                elif event.type == pygame.VIDEORESIZE:
                    self.clock.on_container_resize(*self._container())
                    self.clock.tick()
                    self.present()
        finally:
            self._cleanup()
        return 0

    def stop(self) -> None:
        """Stop the application."""
        logger.info("Stopping AnalogClock...")
        self._running = False

    def _cleanup(self) -> None:
        """Clean up resources."""
        logger.info("Cleaning up...")
        if self.clock:
            try:
                self.clock.teardown()
            except Exception as e:
                logger.error(f"Error tearing down clock: {e}")
        pygame.quit()
        logger.info("AnalogClock stopped")


def render_snapshot(output_path: str, config_path: Optional[str] = None, demo: bool = False) -> int:
    """
    Render a single frame without a window and save it as an image.

    Returns:
        Exit code.
    """
    from .widget import AnalogClock

    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    pygame.init()
    try:
        clock = AnalogClock()
        clock.set_config(_load_config(config_path, demo=demo))
        clock.build()
        ok = clock.tick()
        pygame.image.save(clock.surface, output_path)
        logger.info(f"Saved snapshot to {output_path}")
        return 0 if ok else 1
    except Exception as e:
        logger.error(f"Failed to render snapshot: {e}")
        return 1
    finally:
        pygame.quit()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="AnalogClock - Analog clock with date and digital time",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '-c', '--config',
        help='Path to configuration file'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--version',
        action='store_true',
        help='Show version and exit'
    )

    parser.add_argument(
        '--demo',
        action='store_true',
        help='Show the fixed demo time'
    )

    parser.add_argument(
        '--snapshot',
        metavar='PATH',
        help='Render one frame to an image file and exit'
    )

    args = parser.parse_args()

    if args.version:
        from . import __version__
        print(f"AnalogClock {__version__}")
        return 0

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    log_dir = os.environ.get("ANALOGCLOCK_LOG_DIR")
    if log_dir:
        setup_file_logging(log_dir)

    if args.snapshot:
        return render_snapshot(args.snapshot, config_path=args.config, demo=args.demo)

    app = ClockApp(config_path=args.config, demo=args.demo)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
