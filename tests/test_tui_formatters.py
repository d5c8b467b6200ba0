from __future__ import annotations

import pytest

from defrag_timer.countdown import TimerState
from defrag_timer.ui import tui_formatters as fmt


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (0, "00:00"),
        (-5, "00:00"),
        (65, "01:05"),
        (59.9, "00:59"),
        (300, "05:00"),
        (3599, "59:59"),
        (3600, "1:00:00"),
        (3725.9, "1:02:05"),
        (36000, "10:00:00"),
    ],
)
def test_format_time(seconds: float, expected: str) -> None:
    assert fmt.format_time(seconds) == expected


def test_labels() -> None:
    assert fmt.target_label(300) == "Target: 05:00"
    assert fmt.elapsed_label(61) == "Elapsed: 01:01"
    assert fmt.percent_label(42) == "42%"
    assert fmt.percent_label(140) == "100%"


def test_state_labels() -> None:
    assert fmt.state_label(TimerState.IDLE) == "Idle"
    assert fmt.state_label(TimerState.RUNNING) == "Optimizing file system..."
    assert fmt.state_label(TimerState.PAUSED) == "Paused"
    assert fmt.state_label(TimerState.COMPLETED) == "Completed"
    assert fmt.start_button_label(TimerState.RUNNING) == "Pause"
    assert fmt.start_button_label(TimerState.PAUSED) == "Start"


def test_ellipsize() -> None:
    assert fmt.ellipsize("hello", 10) == "hello"
    assert fmt.ellipsize("hello world", 8) == "hello..."
    assert fmt.ellipsize("hello", 2) == ".."
    assert fmt.ellipsize("hello", 0) == ""


def test_render_progress_bar() -> None:
    assert fmt.render_progress_bar(12, 0.0) == "[----------]"
    assert fmt.render_progress_bar(12, 0.5) == "[=====-----]"
    assert fmt.render_progress_bar(12, 1.5) == "[==========]"
    assert fmt.render_progress_bar(2, 0.5) == "="
