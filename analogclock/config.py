"""
Configuration management for AnalogClock.
Handles loading, normalization, validation, and defaults for all settings.
"""

import os
import yaml
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

# Default paths
DEFAULT_CONFIG_PATHS = [
    "/etc/analogclock/config.yaml",
    os.path.expanduser("~/.config/analogclock/config.yaml"),
    "./config.yaml",
]

HAND_STYLE_NAMES = {"default": 1, "diamond": 1, "baton": 3}

_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0", ""}


@dataclass(frozen=True)
class ClockStyle:
    """Style fields of the clock face. Themes override any of them."""
    # Colors
    color_background: str = "#000000"
    color_border: Optional[str] = None  # None = same as background
    color_ticks: str = "Silver"
    color_face_digits: str = "Silver"
    color_digital_time: str = "red"
    color_hour_hand: str = "#CCCCCC"
    color_minute_hand: str = "#EEEEEE"
    color_second_hand: str = "Silver"
    color_text: str = "Silver"
    color_date: Optional[str] = None  # None = color_text
    color_weekday: Optional[str] = None  # None = color_text
    color_week_number: Optional[str] = None  # None = color_text

    # Visibility
    hide_minor_ticks: bool = False
    hide_major_ticks: bool = False
    hide_face_digits: bool = False
    hide_date: bool = False
    hide_weekday: bool = False
    hide_week_number: bool = True
    hide_digital_time: bool = False
    hide_second_hand: bool = False
    show_timezone: bool = False  # Timezone name instead of weekday
    demo: bool = False

    # Hands: 1 = diamond, 3 = baton
    style_hour_hand: int = 1
    style_minute_hand: int = 1
    style_second_hand: int = 3

    # Text
    locale: str = "en-US"
    timezone: Optional[str] = None  # None = host timezone
    timezone_display_name: str = ""
    date_format: str = ""  # Empty = locale default date
    time_format: str = ""  # Empty = locale default time

    def resolved_color(self, name: str) -> str:
        """Get a color field, following the fallback for unset ones."""
        value = getattr(self, name)
        if value:
            return value
        fallback = _COLOR_FALLBACKS.get(name)
        return getattr(self, fallback) if fallback else value


_COLOR_FALLBACKS = {
    "color_border": "color_background",
    "color_date": "color_text",
    "color_weekday": "color_text",
    "color_week_number": "color_text",
}


@dataclass(frozen=True)
class ThemeRule:
    """Style overrides that apply during a daily time window."""
    time: str = ""  # "HH:MM-HH:MM", may wrap past midnight
    overrides: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ClockConfig:
    """Main configuration class."""
    style: ClockStyle = field(default_factory=ClockStyle)
    themes: Tuple[ThemeRule, ...] = ()
    diameter: Any = None  # int, "400px", CSS length, "auto" or None
    error_image: Optional[str] = None  # Local path of the warning glyph

    # Runtime state (not persisted)
    config_path: Optional[str] = None


def _squash(key: str) -> str:
    """Normalize a config key: case-insensitive, ignoring '_' and '-'."""
    return str(key).replace("_", "").replace("-", "").lower()


STYLE_FIELDS: Dict[str, str] = {_squash(f.name): f.name for f in fields(ClockStyle)}
_BOOL_FIELDS = {f.name for f in fields(ClockStyle) if isinstance(f.default, bool)}
_HAND_FIELDS = {"style_hour_hand", "style_minute_hand", "style_second_hand"}
_OPTIONAL_FIELDS = {f.name for f in fields(ClockStyle) if f.default is None}


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValueError(f"expected a boolean, got {value!r}")


def _coerce_hand_style(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"expected a hand style, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text.isdigit():
            return int(text)
        if text in HAND_STYLE_NAMES:
            return HAND_STYLE_NAMES[text]
    raise ValueError(f"expected a hand style, got {value!r}")


def _coerce_value(name: str, value: Any) -> Any:
    """Coerce a raw config value for a style field, or raise ValueError."""
    if name in _BOOL_FIELDS:
        return _coerce_bool(value)
    if name in _HAND_FIELDS:
        return _coerce_hand_style(value)
    if value is None:
        if name in _OPTIONAL_FIELDS:
            return None
        raise ValueError("value is required")
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError(f"expected text, got {value!r}")
    return str(value).strip()


def normalize_style_fields(raw: Mapping[str, Any], context: str = "config") -> Dict[str, Any]:
    """
    Pick the style fields out of a raw mapping and coerce their values.

    Keys are matched case-insensitively and without underscores, so
    "color_Background", "color_background" and "colorBackground" are the
    same field. Unknown keys are ignored.

    Args:
        raw: Raw key/value mapping.
        context: Label used in log messages.

    Returns:
        Dict of style field name to coerced value (only fields present in raw).
    """
    result = {}
    for key, value in raw.items():
        name = STYLE_FIELDS.get(_squash(key))
        if name is None:
            logger.debug(f"Ignoring unknown {context} key: {key}")
            continue
        try:
            result[name] = _coerce_value(name, value)
        except ValueError as e:
            logger.warning(f"Invalid value for {context} key '{key}': {e}")
    return result


def _parse_theme(raw: Any, index: int) -> Optional[ThemeRule]:
    if not isinstance(raw, Mapping):
        logger.warning(f"Theme {index + 1} is not a mapping, skipping")
        return None

    time_window = ""
    style_keys = {}
    for key, value in raw.items():
        if _squash(key) == "time":
            time_window = "" if value is None else str(value)
        else:
            style_keys[key] = value

    return ThemeRule(
        time=time_window,
        overrides=normalize_style_fields(style_keys, context=f"theme {index + 1}"),
    )


def normalize_config(raw: Optional[Mapping[str, Any]], config_path: Optional[str] = None) -> ClockConfig:
    """
    Build a ClockConfig from a raw host configuration mapping.

    Args:
        raw: Key/value mapping (e.g. parsed YAML). None means all defaults.
        config_path: Where the mapping was loaded from, if anywhere.

    Returns:
        ClockConfig instance.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        logger.warning(f"Configuration must be a mapping, got {type(raw).__name__}; using defaults")
        raw = {}

    diameter = None
    error_image = None
    themes: List[ThemeRule] = []
    style_keys = {}

    for key, value in raw.items():
        squashed = _squash(key)
        if squashed == "diameter":
            diameter = value
        elif squashed == "errorimage":
            error_image = os.path.expanduser(str(value)) if value else None
        elif squashed == "themes":
            if not isinstance(value, list):
                logger.warning("'themes' must be a list, ignoring")
                continue
            for index, theme_data in enumerate(value):
                rule = _parse_theme(theme_data, index)
                if rule is not None:
                    themes.append(rule)
        else:
            style_keys[key] = value

    return ClockConfig(
        style=ClockStyle(**normalize_style_fields(style_keys)),
        themes=tuple(themes),
        diameter=diameter,
        error_image=error_image,
        config_path=config_path,
    )


def load_config(config_path: Optional[str] = None) -> ClockConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to config file. If None, searches default locations.

    Returns:
        ClockConfig instance with loaded or default values.
    """
    # Find config file
    if config_path:
        paths_to_try = [config_path]
    else:
        paths_to_try = DEFAULT_CONFIG_PATHS

    config_data = {}
    found_path = None

    for path in paths_to_try:
        expanded_path = os.path.expanduser(path)
        if os.path.exists(expanded_path):
            try:
                with open(expanded_path, 'r') as f:
                    config_data = yaml.safe_load(f) or {}
                found_path = expanded_path
                logger.info(f"Loaded config from {expanded_path}")
                break
            except Exception as e:
                logger.warning(f"Failed to load config from {expanded_path}: {e}")

    if not found_path:
        logger.info("No config file found, using defaults")

    return normalize_config(config_data, config_path=found_path)


def validate_config(config: ClockConfig) -> List[str]:
    """
    Validate configuration and return list of errors.

    Returns:
        List of error messages. Empty if valid.
    """
    from .colors import parse_color
    from .dateformat import try_format
    from .errors import ThemeRuleError
    from .locale_names import LOCALES
    from .sizing import parse_diameter
    from .themes import parse_time_window
    from .timesource import DEMO_INSTANT

    errors = []

    def check_style(values: Mapping[str, Any], label: str) -> None:
        for name, value in values.items():
            if name.startswith("color_") and value is not None:
                try:
                    parse_color(value)
                except ValueError:
                    errors.append(f"{label}: invalid color for {name}: {value!r}")
            elif name in _HAND_FIELDS and value not in (1, 3):
                errors.append(f"{label}: unknown hand style {value} for {name}, a diamond will be drawn")
            elif name in ("date_format", "time_format") and value:
                result = try_format(DEMO_INSTANT, value)
                if not result.ok:
                    errors.append(f"{label}: invalid {name} {value!r}: {result.error}")
            elif name == "locale" and value:
                key = value.replace("_", "-").lower()
                if key not in LOCALES and not any(k.split("-")[0] == key.split("-")[0] for k in LOCALES):
                    errors.append(f"{label}: unsupported locale {value!r}, en-US names will be used")

    check_style({f.name: getattr(config.style, f.name) for f in fields(ClockStyle)}, "config")

    try:
        parse_diameter(config.diameter)
    except ValueError as e:
        errors.append(f"config: {e}")

    for index, rule in enumerate(config.themes):
        label = f"theme {index + 1}"
        try:
            parse_time_window(rule.time)
        except ThemeRuleError as e:
            errors.append(f"{label}: {e}")
        check_style(rule.overrides, label)

    if config.error_image and not os.path.exists(config.error_image):
        errors.append(f"config: error_image not found: {config.error_image}")

    return errors
