"""Frame ticker driving the defrag grid."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Protocol

from textual.timer import Timer

logger = logging.getLogger(__name__)


class TickHost(Protocol):
    def set_timer(self, delay: float, callback: Callable[[], None]) -> Timer: ...

    def _set_message(self, text: str, *, level: str = "info") -> None: ...


class FrameTicker:
    """Non-blocking fixed-cadence frame scheduler.

    Each tick runs ``on_frame`` and then schedules the next one, so a slow
    frame delays the following tick instead of overlapping it.
    """

    def __init__(
        self,
        host: TickHost,
        on_frame: Callable[[], None],
        *,
        interval_ms: int = 33,
    ) -> None:
        self._host = host
        self._on_frame = on_frame
        self._interval = max(0.01, interval_ms / 1000.0)
        self._timer: Optional[Timer] = None
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def interval(self) -> float:
        return self._interval

    def start(self) -> None:
        self.stop()
        self._running = True
        self._schedule_next()

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
        self._running = False

    def _tick(self) -> None:
        self._timer = None
        if not self._running:
            return
        try:
            self._on_frame()
        except Exception as exc:
            logger.exception("Frame update failed")
            self._host._set_message(f"Display error: {exc}", level="error")
            self.stop()
            return
        if self._running:
            self._schedule_next()

    def _schedule_next(self) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            self.stop()
            return
        self._timer = self._host.set_timer(self._interval, self._tick)
