# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Timezone-aware wall-clock resolution.

The clock face shows the wall-clock time of the configured timezone, not the
host's. "Now" is re-composed from the year/month/day/hour/minute/second
fields of the instant in that zone so that DST and host/zone mismatches are
handled the same way everywhere.
"""

import logging
from datetime import datetime, timezone as dt_timezone, tzinfo
from typing import NamedTuple, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

# Fixed instant shown in demo mode (a nicely balanced 10:08:20)
DEMO_INSTANT = datetime(2021, 2, 10, 10, 8, 20)


class WallClock(NamedTuple):
    """Wall-clock fields of an instant in a timezone."""
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int


_zone_cache: dict = {}


def get_zone(name: Optional[str]) -> tzinfo:
    """
    Load a timezone by IANA name.

    Args:
        name: IANA timezone (e.g. "Europe/Stockholm"), "UTC", or None for the
              host's local zone.

    Returns:
        tzinfo object. Unknown names fall back to the host zone.
    """
    if not name:
        return _local_zone()
    if name in _zone_cache:
        return _zone_cache[name]
    try:
        zone = ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(f"Invalid timezone '{name}', using host timezone: {e}")
        zone = _local_zone()
    _zone_cache[name] = zone
    return zone


def _local_zone() -> tzinfo:
    return datetime.now().astimezone().tzinfo or dt_timezone.utc


def wall_clock_fields(instant: datetime, timezone: Optional[str] = None) -> WallClock:
    """
    Extract wall-clock fields of an instant in a timezone.

    Args:
        instant: Aware datetime (naive values are taken as host local time).
        timezone: IANA timezone name, or None for host local.

    Returns:
        WallClock tuple.
    """
    local = instant.astimezone(get_zone(timezone))
    return WallClock(local.year, local.month, local.day,
                     local.hour, local.minute, local.second)


def wall_clock_now(timezone: Optional[str] = None, demo: bool = False,
                   instant: Optional[datetime] = None) -> datetime:
    """
    Resolve "now" for the clock face.

    Args:
        timezone: IANA timezone name, or None for host local.
        demo: Return the fixed demo instant instead of the real time.
        instant: Instant to resolve (defaults to the current time).

    Returns:
        Aware datetime carrying the wall-clock fields of the zone.
    """
    zone = get_zone(timezone)
    if demo:
        return DEMO_INSTANT.replace(tzinfo=zone)

    if instant is None:
        instant = datetime.now(dt_timezone.utc)
    fields = wall_clock_fields(instant, timezone)
    return datetime(*fields, tzinfo=zone)
