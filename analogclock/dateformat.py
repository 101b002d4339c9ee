# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Token-based date/time mask formatter.

Masks are built from case-sensitive tokens (longest match wins):

    d dd ddd dddd     day of month / short and long weekday name
    m mm mmm mmmm     month / short and long month name
    yy yyyy           year
    h hh H HH         hour (12h / 24h)
    M MM              minute
    s ss              second
    l L               milliseconds (3 digits / 2 digits)
    t tt T TT         a/p, am/pm, A/P, AM/PM
    Z                 timezone abbreviation
    o                 UTC offset, always signed (+0100)
    S                 ordinal suffix of the day (st, nd, rd, th)

Text in single or double quotes is copied without the quotes. A mask starting
with "UTC:" is formatted in UTC. A mask may also be the name of an entry in
MASKS (e.g. "isoDateTime").
"""

import math
import re
from dataclasses import dataclass
from datetime import date as dt_date, datetime, timezone
from typing import Any, Optional

from .errors import FormatError
from .locale_names import FALLBACK_LOCALE, get_locale_names

MASKS = {
    "default": "ddd mmm dd yyyy HH:MM:ss",
    "shortDate": "m/d/yy",
    "mediumDate": "mmm d, yyyy",
    "longDate": "mmmm d, yyyy",
    "fullDate": "dddd, mmmm d, yyyy",
    "shortTime": "h:MM TT",
    "mediumTime": "h:MM:ss TT",
    "longTime": "h:MM:ss TT Z",
    "isoDate": "yyyy-mm-dd",
    "isoTime": "HH:MM:ss",
    "isoDateTime": "yyyy-mm-dd'T'HH:MM:ss",
    "isoUtcDateTime": "UTC:yyyy-mm-dd'T'HH:MM:ss'Z'",
}

_TOKEN_RE = re.compile(
    r"d{1,4}|m{1,4}|yy(?:yy)?|([HhMsTt])\1?|[LloSZ]"
    r"|\"[^\"]*\"|'[^']*'"
    # An unmatched quote is a FormatError, not literal text
    r"|(?P<stray>[\"'])"
)
_TZ_CLIP_RE = re.compile(r"[^-+\dA-Z]")


@dataclass(frozen=True)
class FormatResult:
    """Outcome of a formatting attempt: text on success, error otherwise."""
    text: str = ""
    error: Optional[FormatError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def ordinal_suffix(day: int) -> str:
    """Return the English ordinal suffix for a day of month."""
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def _coerce_date(value: Any) -> datetime:
    """Turn the supported date inputs into a datetime, or raise FormatError."""
    if value is None:
        return datetime.now().astimezone()
    if isinstance(value, datetime):
        return value
    if isinstance(value, dt_date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        raise FormatError(f"invalid date: {value!r}")
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise FormatError(f"invalid date: {value!r}")
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc).astimezone()
        except (OverflowError, OSError, ValueError) as e:
            raise FormatError(f"invalid date: {value!r}") from e
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise FormatError(f"invalid date: {value!r}") from e
    raise FormatError(f"invalid date: {value!r}")


def _resolve_mask(mask: Any) -> str:
    if mask is None or mask == "":
        return MASKS["default"]
    if not isinstance(mask, str):
        raise FormatError(f"mask must be a string, got {type(mask).__name__}")
    return MASKS.get(mask, mask)


def _offset_minutes(value: datetime) -> int:
    aware = value if value.tzinfo is not None else value.astimezone()
    offset = aware.utcoffset()
    return int(offset.total_seconds() // 60) if offset is not None else 0


def _zone_name(value: datetime) -> str:
    aware = value if value.tzinfo is not None else value.astimezone()
    return _TZ_CLIP_RE.sub("", aware.tzname() or "")


def format_date(date: Any = None, mask: Optional[str] = None, utc: bool = False,
                locale: str = FALLBACK_LOCALE) -> str:
    """
    Format a date with a mask.

    Args:
        date: datetime, date, epoch seconds, ISO-8601 string, or None for now.
        mask: Mask string or the name of an entry in MASKS.
        utc: Extract fields in UTC instead of the date's own zone.
        locale: Locale tag used for weekday and month names.

    Returns:
        Formatted text.

    Raises:
        FormatError: If the date is not a valid instant or the mask is malformed.
    """
    value = _coerce_date(date)
    mask = _resolve_mask(mask)

    if mask.startswith("UTC:"):
        mask = mask[4:]
        utc = True

    if utc:
        if value.tzinfo is None:
            value = value.astimezone()
        value = value.astimezone(timezone.utc)

    names = get_locale_names(locale)
    d, m, y = value.day, value.month, value.year
    H, M, s = value.hour, value.minute, value.second
    L = value.microsecond // 1000
    centis = math.floor(L / 10 + 0.5) if L > 99 else L
    o = 0 if utc else _offset_minutes(value)

    flags = {
        "d": str(d),
        "dd": f"{d:02d}",
        "ddd": names.weekdays_short[value.weekday()],
        "dddd": names.weekdays[value.weekday()],
        "m": str(m),
        "mm": f"{m:02d}",
        "mmm": names.months_short[m - 1],
        "mmmm": names.months[m - 1],
        "yy": f"{y:04d}"[2:],
        "yyyy": str(y),
        "h": str(H % 12 or 12),
        "hh": f"{H % 12 or 12:02d}",
        "H": str(H),
        "HH": f"{H:02d}",
        "M": str(M),
        "MM": f"{M:02d}",
        "s": str(s),
        "ss": f"{s:02d}",
        "l": f"{L:03d}",
        "L": f"{centis:02d}",
        "t": "a" if H < 12 else "p",
        "tt": "am" if H < 12 else "pm",
        "T": "A" if H < 12 else "P",
        "TT": "AM" if H < 12 else "PM",
        "Z": "UTC" if utc else _zone_name(value),
        "o": ("-" if o < 0 else "+") + f"{abs(o) // 60 * 100 + abs(o) % 60:04d}",
        "S": ordinal_suffix(d),
    }

    def substitute(match: re.Match) -> str:
        if match.group("stray"):
            raise FormatError(f"unterminated quoted literal in mask {mask!r}")
        token = match.group(0)
        if token in flags:
            return flags[token]
        return token[1:-1]

    return _TOKEN_RE.sub(substitute, mask)


def try_format(date: Any = None, mask: Optional[str] = None, utc: bool = False,
               locale: str = FALLBACK_LOCALE) -> FormatResult:
    """Format without raising; failures come back in FormatResult.error."""
    try:
        return FormatResult(text=format_date(date, mask, utc, locale))
    except FormatError as e:
        return FormatResult(error=e)
