# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Exception types raised by the clock engine."""


class ClockError(Exception):
    """Base exception for the clock engine."""


class FormatError(ClockError):
    """Raised when a date mask or date value cannot be formatted."""


class ThemeRuleError(ClockError):
    """Raised when a theme rule has a malformed time window."""


class RenderError(ClockError):
    """Raised (or reported) when a render tick fails."""
