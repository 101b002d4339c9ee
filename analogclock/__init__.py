# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
# AnalogClock - Themable analog clock face renderer
"""
AnalogClock renders an analog clock face with date, weekday, week number and
digital time fields onto a pygame surface, refreshed once per second and
restyled by time-windowed themes.
"""

__version__ = "3.10.0"
__author__ = "AnalogClock"
