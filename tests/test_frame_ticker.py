from __future__ import annotations

import asyncio

import pytest

from defrag_timer.ui.frame_ticker import FrameTicker


class _Timer:
    def __init__(self) -> None:
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class _Host:
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []
        self.timers: list[tuple[float, object, _Timer]] = []

    def _set_message(self, text: str, *, level: str = "info") -> None:
        self.messages.append((text, level))

    def set_timer(self, delay: float, callback) -> _Timer:
        timer = _Timer()
        self.timers.append((delay, callback, timer))
        return timer


@pytest.fixture
def loop_running(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(asyncio, "get_running_loop", lambda: object())


def test_start_schedules_first_tick(loop_running) -> None:
    host = _Host()
    ticker = FrameTicker(host, lambda: None, interval_ms=33)

    ticker.start()

    assert ticker.is_running is True
    assert host.timers[0][0] == pytest.approx(0.033)


def test_interval_has_floor() -> None:
    ticker = FrameTicker(_Host(), lambda: None, interval_ms=1)
    assert ticker.interval == pytest.approx(0.01)


def test_tick_runs_frame_and_reschedules(loop_running) -> None:
    host = _Host()
    frames: list[str] = []
    ticker = FrameTicker(host, lambda: frames.append("frame"))
    ticker.start()

    _, callback, _ = host.timers[-1]
    callback()

    assert frames == ["frame"]
    assert len(host.timers) == 2


def test_frame_can_stop_ticker(loop_running) -> None:
    host = _Host()
    ticker: FrameTicker

    def on_frame() -> None:
        ticker.stop()

    ticker = FrameTicker(host, on_frame)
    ticker.start()
    host.timers[-1][1]()

    assert ticker.is_running is False
    assert len(host.timers) == 1


def test_stop_cancels_pending_timer(loop_running) -> None:
    host = _Host()
    ticker = FrameTicker(host, lambda: None)
    ticker.start()
    pending = host.timers[-1][2]

    ticker.stop()

    assert pending.stopped is True
    assert ticker.is_running is False


def test_tick_after_stop_is_ignored(loop_running) -> None:
    host = _Host()
    frames: list[str] = []
    ticker = FrameTicker(host, lambda: frames.append("frame"))
    ticker.start()
    callback = host.timers[-1][1]
    ticker.stop()

    callback()

    assert frames == []


def test_frame_error_stops_and_reports(loop_running) -> None:
    host = _Host()

    def boom() -> None:
        raise ValueError("boom")

    ticker = FrameTicker(host, boom)
    ticker.start()
    host.timers[-1][1]()

    assert ticker.is_running is False
    assert host.messages[-1] == ("Display error: boom", "error")


def test_start_without_loop_stops(monkeypatch: pytest.MonkeyPatch) -> None:
    host = _Host()
    ticker = FrameTicker(host, lambda: None)
    monkeypatch.setattr(
        asyncio, "get_running_loop", lambda: (_ for _ in ()).throw(RuntimeError())
    )

    ticker.start()

    assert ticker.is_running is False
    assert host.timers == []
