# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Tests for the layered clock renderer.
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch


START = datetime(2021, 2, 10, 10, 8, 0, tzinfo=timezone.utc)


def _renderer(raw=None, size=220, clock=None, error_display=None):
    from analogclock.config import normalize_config
    from analogclock.renderer import ClockRenderer
    config = normalize_config(raw or {})
    return ClockRenderer(config, size=size, clock=clock or (lambda: START),
                         error_display=error_display or MagicMock())


def _drawn_texts(renderer):
    """Tick once and collect the texts drawn on the slow layer."""
    with patch.object(renderer, "_draw_text", wraps=renderer._draw_text) as draw_text:
        assert renderer.tick()
    return [c.args[1] for c in draw_text.call_args_list]


class TestLayerCaching:
    """Test slow/fast layer redraw counts."""

    def test_sixty_ticks_in_one_minute(self, stepping_clock):
        """Test that a minute of ticks repaints the slow layer once."""
        renderer = _renderer(clock=stepping_clock(START))
        for _ in range(60):
            assert renderer.tick()
        assert renderer.slow_redraws == 1
        assert renderer.fast_redraws == 60

    def test_minute_change_repaints_slow_layer(self, stepping_clock):
        """Test that crossing a minute repaints the slow layer."""
        renderer = _renderer(clock=stepping_clock(START.replace(second=58)))
        for _ in range(4):
            renderer.tick()
        assert renderer.slow_redraws == 2

    def test_resize_mid_minute_repaints_slow_layer(self, stepping_clock):
        """Test that a resize forces one extra slow repaint."""
        renderer = _renderer(clock=stepping_clock(START))
        for _ in range(30):
            renderer.tick()
        renderer.resize(300)
        for _ in range(29):
            renderer.tick()

        assert renderer.slow_redraws == 2
        assert renderer.surface.get_size() == (300, 300)
        assert renderer.radius == pytest.approx(300 / 2.06)

    def test_same_size_resize_is_noop(self):
        """Test that resizing to the current size does not repaint."""
        renderer = _renderer()
        renderer.tick()
        renderer.resize(220)
        renderer.tick()
        assert renderer.slow_redraws == 1

    def test_resize_during_tick_is_deferred(self):
        """Test that a resize inside a tick waits for the next tick."""
        renderer = _renderer()
        renderer._in_tick = True
        renderer.resize(400)
        assert renderer.surface.get_size() == (220, 220)
        assert renderer.state.pending_size == 400

        renderer._in_tick = False
        renderer.tick()
        assert renderer.surface.get_size() == (400, 400)
        assert renderer.state.pending_size is None


class TestTickErrors:
    """Test that failing ticks are reported and do not stop the clock."""

    def test_failed_tick_then_recovery(self):
        """Test that tick N fails and tick N+1 succeeds."""
        from analogclock.errors import RenderError
        error_display = MagicMock()
        renderer = _renderer(error_display=error_display)
        real_draw = renderer._draw_slow_layer
        calls = {"count": 0}

        def flaky(now, style):
            calls["count"] += 1
            if calls["count"] == 1:
                raise RuntimeError("boom")
            real_draw(now, style)

        with patch.object(renderer, "_draw_slow_layer", side_effect=flaky):
            assert renderer.tick() is False
            assert renderer.tick() is True

        error = error_display.show.call_args.args[0]
        assert isinstance(error, RenderError)
        assert isinstance(error.__cause__, RuntimeError)
        assert error_display.show.call_count == 1
        assert renderer.failed_ticks == 1
        assert renderer.slow_redraws == 1

    def test_failing_clock_is_reported(self):
        """Test that an exception from the time source is contained."""
        error_display = MagicMock()
        renderer = _renderer(clock=MagicMock(side_effect=ValueError("no time")),
                             error_display=error_display)
        assert renderer.tick() is False
        error_display.show.assert_called_once()

    def test_malformed_theme_window_does_not_break_construction(self):
        """Test that a rule with non-ASCII digits is ignored by the renderer."""
        renderer = _renderer({"themes": [
            {"time": "²:00-06:00", "color_Background": "#FF0000"},
            {"time": "00:00-24:00", "color_Background": "#0000FF"},
        ]})
        with patch.object(renderer, "_draw_face", wraps=renderer._draw_face) as draw_face:
            assert renderer.tick()
        assert draw_face.call_args.args[2].color_background == "#0000FF"

    def test_bad_mask_falls_back_to_locale_default(self):
        """Test that a bad date mask shows the default date and reports."""
        from analogclock.errors import FormatError
        error_display = MagicMock()
        renderer = _renderer({"date_Format": "yyyy 'oops"}, error_display=error_display)

        texts = _drawn_texts(renderer)

        assert "2/10/2021" in texts
        error = error_display.show.call_args.args[0]
        assert isinstance(error, FormatError)


class TestPixels:
    """Test rendered pixels."""

    def test_center_pixel_is_hub(self):
        """Test that the center pixel has the hub color."""
        from analogclock.colors import parse_color
        renderer = _renderer()
        renderer.tick()
        assert renderer.surface.get_at((110, 110)) == parse_color("#777777")

    def test_hub_color_is_not_themable(self):
        """Test that a hub color setting is ignored and the hub stays neutral."""
        from analogclock.colors import parse_color
        from analogclock.renderer import HUB_COLOR
        renderer = _renderer({"color_Hub": "#FF0000",
                              "themes": [{"time": "00:00-24:00", "color_Hub": "#00FF00"}]})
        renderer.tick()
        assert renderer.surface.get_at((110, 110)) == parse_color(HUB_COLOR)

    def test_corner_is_transparent(self):
        """Test that pixels outside the face are untouched."""
        renderer = _renderer()
        renderer.tick()
        assert renderer.surface.get_at((0, 0)).a == 0

    def test_face_uses_background_color(self):
        """Test the face fill color away from all markings."""
        from analogclock.colors import parse_color
        renderer = _renderer({"color_Background": "#0000FF", "hide_Date": True,
                              "hide_DigitalTime": True, "hide_FaceDigits": True,
                              "hide_Weekday": True})
        renderer.tick()
        # Lower-left quadrant, inside the face, away from the hands at 10:08
        assert renderer.surface.get_at((70, 150)) == parse_color("#0000FF")


class TestFaceContent:
    """Test which fields are drawn."""

    def test_default_texts(self):
        """Test the default en-US texts for the demo instant."""
        texts = _drawn_texts(_renderer())
        assert "2/10/2021" in texts
        assert "Wednesday" in texts
        assert "10:08 AM" in texts
        assert [str(n) for n in range(1, 13)] == [t for t in texts if t.isdigit()]

    def test_week_number_shown(self):
        """Test the ISO week number when enabled."""
        texts = _drawn_texts(_renderer({"hide_WeekNumber": False, "hide_FaceDigits": True}))
        assert "6" in texts

    def test_swedish_locale(self):
        """Test locale defaults for sv-SE."""
        texts = _drawn_texts(_renderer({"locale": "sv-SE"}))
        assert "2021-02-10" in texts
        assert "onsdag" in texts
        assert "10:08" in texts

    def test_custom_masks(self):
        """Test custom date and time masks."""
        texts = _drawn_texts(_renderer({"date_Format": "dddd dS", "time_Format": "HH:MM:ss"}))
        assert "Wednesday 10th" in texts
        assert "10:08:00" in texts

    def test_timezone_instead_of_weekday(self):
        """Test show_timezone with a display name."""
        texts = _drawn_texts(_renderer({"show_Timezone": True,
                                        "timezone_DisplayName": "Stockholm"}))
        assert "Stockholm" in texts
        assert "Wednesday" not in texts

    def test_hidden_fields(self):
        """Test that hidden fields are not drawn."""
        texts = _drawn_texts(_renderer({"hide_Date": True, "hide_Weekday": True,
                                        "hide_DigitalTime": True, "hide_FaceDigits": True}))
        assert texts == []

    def test_second_hand_hidden(self):
        """Test that a hidden second hand is not drawn."""
        renderer = _renderer({"hide_SecondHand": True})
        with patch.object(renderer, "_draw_hand", wraps=renderer._draw_hand) as draw_hand:
            renderer.tick()
        assert draw_hand.call_count == 2

        renderer = _renderer()
        with patch.object(renderer, "_draw_hand", wraps=renderer._draw_hand) as draw_hand:
            renderer.tick()
        assert draw_hand.call_count == 3

    def test_theme_applied(self):
        """Test that a matching theme restyles the face."""
        renderer = _renderer({"themes": [{"time": "08:00-20:00", "color_Background": "#F0F0F0"}]})
        with patch.object(renderer, "_draw_face", wraps=renderer._draw_face) as draw_face:
            renderer.tick()
        style = draw_face.call_args.args[2]
        assert style.color_background == "#F0F0F0"


class TestTiming:
    """Test the tick period and time source."""

    def test_update_interval(self):
        """Test 1 s ticks, or 10 s without a second hand."""
        assert _renderer().get_update_interval_ms() == 1000
        assert _renderer({"hide_SecondHand": True}).get_update_interval_ms() == 10000

    def test_demo_mode(self):
        """Test that demo mode shows the fixed instant."""
        from analogclock.config import normalize_config
        from analogclock.renderer import ClockRenderer
        renderer = ClockRenderer(normalize_config({"demo": True, "timezone": "UTC"}),
                                 error_display=MagicMock())
        now = renderer.now()
        assert (now.hour, now.minute, now.second) == (10, 8, 20)
        assert now.date() == datetime(2021, 2, 10).date()
