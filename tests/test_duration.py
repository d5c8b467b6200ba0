"""Tests for duration input parsing."""

from __future__ import annotations

import pytest

from defrag_timer.duration import DurationError, parse_duration


@pytest.mark.parametrize(
    ("minutes", "seconds", "expected"),
    [
        ("5", "0", 300),
        ("0", "1", 1),
        (" 2 ", " 30 ", 150),
        ("+1", "05", 65),
        ("120", "59", 7259),
        ("-0", "10", 10),
    ],
)
def test_parse_valid_durations(minutes: str, seconds: str, expected: int) -> None:
    assert parse_duration(minutes, seconds) == expected


@pytest.mark.parametrize(
    ("minutes", "seconds", "message"),
    [
        ("", "0", "Minutes must be a whole number of 0 or more."),
        ("abc", "0", "Minutes must be a whole number of 0 or more."),
        ("-1", "0", "Minutes must be a whole number of 0 or more."),
        ("1.5", "0", "Minutes must be a whole number of 0 or more."),
        (None, "0", "Minutes must be a whole number of 0 or more."),
        ("1", "x", "Seconds must be a whole number of 0 or more."),
        ("1", "-3", "Seconds must be a whole number of 0 or more."),
        ("1", "60", "Seconds must be between 0 and 59."),
        ("0", "0", "Enter a duration of at least 1 second."),
    ],
)
def test_parse_invalid_durations(minutes, seconds, message: str) -> None:
    with pytest.raises(DurationError) as excinfo:
        parse_duration(minutes, seconds)
    assert str(excinfo.value) == message


def test_duration_error_is_value_error() -> None:
    assert issubclass(DurationError, ValueError)
