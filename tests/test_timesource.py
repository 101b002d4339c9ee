# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Tests for wall-clock time resolution and locale name tables.
"""

import logging

from datetime import datetime, timezone


INSTANT = datetime(2024, 1, 15, 12, 0, 30, tzinfo=timezone.utc)


class TestWallClock:
    """Test timezone-aware wall-clock fields."""

    def test_fields_in_zone(self):
        """Test field extraction in named zones."""
        from analogclock.timesource import WallClock, wall_clock_fields
        assert wall_clock_fields(INSTANT, "Europe/Stockholm") == WallClock(2024, 1, 15, 13, 0, 30)
        assert wall_clock_fields(INSTANT, "America/New_York").hour == 7
        assert wall_clock_fields(INSTANT, "UTC").hour == 12

    def test_fields_cross_midnight(self):
        """Test that the date follows the zone."""
        from analogclock.timesource import wall_clock_fields
        late = datetime(2024, 1, 15, 23, 30, tzinfo=timezone.utc)
        fields = wall_clock_fields(late, "Asia/Tokyo")
        assert (fields.day, fields.hour, fields.minute) == (16, 8, 30)

    def test_now_recomposed_in_zone(self):
        """Test that now carries the zone's wall-clock fields."""
        from analogclock.timesource import wall_clock_now
        now = wall_clock_now("Europe/Stockholm", instant=INSTANT)
        assert (now.hour, now.minute, now.second) == (13, 0, 30)
        assert now.utcoffset().total_seconds() == 3600

    def test_now_defaults_to_current_time(self):
        """Test that now is close to the current time."""
        from analogclock.timesource import wall_clock_now
        now = wall_clock_now("UTC")
        delta = abs((datetime.now(timezone.utc) - now).total_seconds())
        assert delta < 5

    def test_demo_instant(self):
        """Test the fixed demo instant."""
        from analogclock.timesource import DEMO_INSTANT, wall_clock_now
        now = wall_clock_now("UTC", demo=True, instant=INSTANT)
        assert now.replace(tzinfo=None) == DEMO_INSTANT

    def test_invalid_zone_falls_back(self, caplog):
        """Test that an unknown zone logs a warning and uses the host zone."""
        from analogclock.timesource import get_zone
        with caplog.at_level(logging.WARNING):
            zone = get_zone("Mars/Olympus_Mons")
        assert zone is not None
        assert "Invalid timezone" in caplog.text

    def test_zone_cache(self):
        """Test that zones are loaded once."""
        from analogclock.timesource import get_zone
        assert get_zone("Europe/Berlin") is get_zone("Europe/Berlin")


class TestLocaleNames:
    """Test locale lookup."""

    def test_exact_tag(self):
        """Test an exact, case-insensitive match."""
        from analogclock.locale_names import get_locale_names
        assert get_locale_names("sv-se").tag == "sv-SE"
        assert get_locale_names("en_GB").tag == "en-GB"

    def test_language_fallback(self):
        """Test fallback to the language table."""
        from analogclock.locale_names import get_locale_names
        assert get_locale_names("de-AT").tag == "de-DE"
        assert get_locale_names("fr").tag == "fr-FR"

    def test_unknown_locale(self, caplog):
        """Test that unknown locales warn once and use en-US."""
        from analogclock.locale_names import get_locale_names
        with caplog.at_level(logging.WARNING):
            assert get_locale_names("zz-QQ").tag == "en-US"
            assert get_locale_names("zz-QQ").tag == "en-US"
        assert caplog.text.count("Unsupported locale") == 1

    def test_tables_are_complete(self):
        """Test that every table has 7 weekdays and 12 months, Monday first."""
        from analogclock.locale_names import LOCALES
        for names in LOCALES.values():
            assert len(names.weekdays) == 7
            assert len(names.weekdays_short) == 7
            assert len(names.months) == 12
            assert len(names.months_short) == 12
            assert names.date_mask and names.time_mask
        assert LOCALES["en-us"].weekdays[0] == "Monday"

    def test_supported_locales(self):
        """Test the supported tags list."""
        from analogclock.locale_names import supported_locales
        tags = supported_locales()
        assert "en-US" in tags
        assert "sv-SE" in tags
