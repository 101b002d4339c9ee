# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""
Theme resolution for AnalogClock.
Folds time-windowed style overrides onto the base style for a given instant.
"""

import logging
import re
from dataclasses import replace
from datetime import datetime
from typing import Dict, Optional, Tuple

from .config import ClockConfig, ClockStyle, ThemeRule
from .errors import ThemeRuleError

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

# ASCII only: str.isdigit() also accepts characters like "²" that int() rejects
_DIGITS_RE = re.compile(r"[0-9]{1,2}")


def _parse_clock_time(text: str) -> int:
    """
    Parse "HH:MM" (or "HH") into minutes since midnight.

    "24:00" is accepted as the end of the day.
    """
    parts = [p.strip() for p in text.strip().split(":")]
    if len(parts) > 2 or not all(_DIGITS_RE.fullmatch(p) for p in parts):
        raise ThemeRuleError(f"Invalid time '{text}', expected HH:MM")

    try:
        hour = int(parts[0])
        minute = int(parts[1]) if len(parts) > 1 else 0
    except ValueError as e:
        raise ThemeRuleError(f"Invalid time '{text}', expected HH:MM") from e

    if minute > 59 or hour > 24 or (hour == 24 and minute != 0):
        raise ThemeRuleError(f"Time out of range: '{text}'")

    return hour * 60 + minute


def parse_time_window(window: str) -> Tuple[int, int]:
    """
    Parse a theme time window.

    Args:
        window: "HH:MM-HH:MM", e.g. "08:00-20:00" or "22:00-06:00".

    Returns:
        (start, end) in minutes since midnight.

    Raises:
        ThemeRuleError: If the window is malformed.
    """
    if not isinstance(window, str) or "-" not in window:
        raise ThemeRuleError(f"Invalid theme time window {window!r}, expected 'HH:MM-HH:MM'")

    start_text, _, end_text = window.partition("-")
    return _parse_clock_time(start_text), _parse_clock_time(end_text)


def window_contains(start: int, end: int, now_minutes: int) -> bool:
    """
    Check if a time of day falls in a window.
    Handles overnight windows (e.g., 22:00 to 06:00).

    Args:
        start: Window start in minutes since midnight (inclusive).
        end: Window end in minutes since midnight (exclusive).
        now_minutes: Time to check in minutes since midnight.
    """
    if end <= start:
        # Overnight window
        return now_minutes >= start or now_minutes < end
    return start <= now_minutes < end


def rule_matches(rule: ThemeRule, now: datetime) -> bool:
    """Check if a rule's window covers now. Raises ThemeRuleError if malformed."""
    start, end = parse_time_window(rule.time)
    return window_contains(start, end, now.hour * 60 + now.minute)


def apply_overrides(style: ClockStyle, rule: ThemeRule) -> ClockStyle:
    """Return a copy of style with the rule's present fields overwritten."""
    if not rule.overrides:
        return style
    return replace(style, **rule.overrides)


def resolve(config: ClockConfig, now: datetime) -> ClockStyle:
    """
    Compute the effective style for an instant.

    Starts from the base style and applies every matching rule in declaration
    order, so later rules win on the fields they set. Rules with a malformed
    window are logged and skipped.

    Args:
        config: Clock configuration.
        now: Wall-clock instant to evaluate.

    Returns:
        Effective ClockStyle.
    """
    style = config.style
    for index, rule in enumerate(config.themes):
        try:
            if rule_matches(rule, now):
                style = apply_overrides(style, rule)
        except ThemeRuleError as e:
            logger.warning(f"Skipping theme {index + 1}: {e}")
    return style


class ThemeResolver:
    """
    Resolves the effective style each tick.

    Parses every rule's window once and reports malformed rules once instead
    of on every tick.
    """

    def __init__(self, config: ClockConfig):
        """
        Initialize the resolver.

        Args:
            config: Clock configuration.
        """
        self.config = config
        self._windows: Dict[int, Optional[Tuple[int, int]]] = {}

        for index, rule in enumerate(config.themes):
            try:
                self._windows[index] = parse_time_window(rule.time)
            except ThemeRuleError as e:
                logger.warning(f"Theme {index + 1} will be ignored: {e}")
                self._windows[index] = None

        active = sum(1 for w in self._windows.values() if w is not None)
        logger.debug(f"ThemeResolver initialized with {active}/{len(config.themes)} usable themes")

    def resolve(self, now: datetime) -> ClockStyle:
        """Compute the effective style for now (see module-level resolve())."""
        style = self.config.style
        now_minutes = now.hour * 60 + now.minute
        for index, rule in enumerate(self.config.themes):
            window = self._windows.get(index)
            if window is None:
                continue
            if window_contains(window[0], window[1], now_minutes):
                style = apply_overrides(style, rule)
        return style

    def active_themes(self, now: datetime) -> list:
        """Get the indexes of the themes that match now."""
        now_minutes = now.hour * 60 + now.minute
        return [
            index for index, window in self._windows.items()
            if window is not None and window_contains(window[0], window[1], now_minutes)
        ]
