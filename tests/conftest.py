# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""
Pytest configuration and shared fixtures for AnalogClock tests.
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Headless pygame: must be set before pygame opens any display
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


@pytest.fixture(autouse=True)
def pygame_fonts():
    """Make sure the pygame font module is ready for rendering tests."""
    import pygame
    if not pygame.font.get_init():
        pygame.font.init()
    yield


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def demo_instant():
    """The demo instant (Wednesday 2021-02-10 10:08:20) in UTC."""
    return datetime(2021, 2, 10, 10, 8, 20, tzinfo=timezone.utc)


@pytest.fixture
def stepping_clock():
    """
    Build a clock that advances by a fixed step on every call.

    Usage: clock = stepping_clock(start, seconds=1)
    """
    def factory(start: datetime, seconds: int = 1):
        state = {"now": start - timedelta(seconds=seconds)}

        def clock():
            state["now"] += timedelta(seconds=seconds)
            return state["now"]
        return clock
    return factory


@pytest.fixture
def sample_config_dict():
    """Return a representative host configuration."""
    return {
        "diameter": 300,
        "locale": "sv-SE",
        "timezone": "UTC",
        "color_Background": "#101010",
        "color_Ticks": "Silver",
        "color_HourHand": "#CCCCCC",
        "hide_WeekNumber": False,
        "style_SecondHand": "baton",
        "themes": [
            {
                "time": "22:00-06:00",
                "color_Background": "#000000",
                "color_Ticks": "#333333",
                "hide_SecondHand": True,
            },
            {
                "time": "08:00-20:00",
                "color_Background": "#F0F0F0",
                "dateFormat": "yyyy-mm-dd",
            },
        ],
    }


@pytest.fixture
def sample_config_yaml(temp_dir, sample_config_dict):
    """Create a temporary config.yaml file."""
    import yaml
    config_path = temp_dir / "config.yaml"
    with open(config_path, 'w') as f:
        yaml.dump(sample_config_dict, f)
    return config_path
