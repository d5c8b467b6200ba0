"""Parsing of the minutes/seconds duration inputs."""

from __future__ import annotations

from typing import Optional


class DurationError(ValueError):
    """User-facing validation error for a target duration."""


def _parse_non_negative(text: Optional[str]) -> Optional[int]:
    value = (text or "").strip()
    if not value:
        return None
    if value[0] in "+-":
        sign, digits = value[0], value[1:]
    else:
        sign, digits = "", value
    if not digits.isascii() or not digits.isdigit():
        return None
    number = int(digits)
    if sign == "-" and number != 0:
        return None
    return number


def parse_duration(minutes_text: Optional[str], seconds_text: Optional[str]) -> int:
    """Return the total seconds described by the two input fields."""
    minutes = _parse_non_negative(minutes_text)
    if minutes is None:
        raise DurationError("Minutes must be a whole number of 0 or more.")
    seconds = _parse_non_negative(seconds_text)
    if seconds is None:
        raise DurationError("Seconds must be a whole number of 0 or more.")
    if seconds >= 60:
        raise DurationError("Seconds must be between 0 and 59.")
    if minutes == 0 and seconds == 0:
        raise DurationError("Enter a duration of at least 1 second.")
    return minutes * 60 + seconds
