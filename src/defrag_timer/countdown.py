"""Countdown state machine feeding the defrag renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import math
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

PHASE_MS = 70


class TimerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass(frozen=True)
class CountdownSnapshot:
    """Point-in-time view of a countdown, in seconds."""

    state: TimerState
    target: float
    elapsed: float
    remaining: float
    progress: float
    phase: int

    @property
    def is_running(self) -> bool:
        return self.state is TimerState.RUNNING

    @property
    def is_completed(self) -> bool:
        return self.progress >= 1.0

    @property
    def percent(self) -> int:
        # Half away from zero; progress is never negative.
        return int(math.floor(self.progress * 100 + 0.5))


class Countdown:
    """Start/pause/reset countdown with automatic completion.

    Elapsed time is the sum of finished running segments plus the segment in
    progress. ``poll`` must be called while running to detect completion.
    """

    def __init__(
        self,
        target_seconds: float = 0.0,
        *,
        now: Callable[[], float] = time.monotonic,
    ) -> None:
        if target_seconds < 0:
            raise ValueError("target_seconds must not be negative")
        self._now = now
        self._target = float(target_seconds)
        self._state = TimerState.IDLE
        self._accumulated = 0.0
        self._segment_start: Optional[float] = None

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def target(self) -> float:
        return self._target

    def _transition(self, state: TimerState) -> None:
        logger.info("Countdown %s -> %s", self._state.value, state.value)
        self._state = state

    def elapsed(self) -> float:
        if self._state is TimerState.RUNNING and self._segment_start is not None:
            return self._accumulated + max(0.0, self._now() - self._segment_start)
        return self._accumulated

    def set_target(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("target seconds must not be negative")
        self._target = float(seconds)
        self.reset()

    def start(self) -> bool:
        if self._state not in (TimerState.IDLE, TimerState.PAUSED):
            return False
        if self._target <= 0:
            logger.debug("Ignoring start with empty target")
            return False
        self._segment_start = self._now()
        self._transition(TimerState.RUNNING)
        return True

    def pause(self) -> bool:
        if self._state is not TimerState.RUNNING:
            return False
        self._accumulated = self.elapsed()
        self._segment_start = None
        self._transition(TimerState.PAUSED)
        return True

    def reset(self) -> bool:
        self._accumulated = 0.0
        self._segment_start = None
        if self._state is not TimerState.IDLE:
            self._transition(TimerState.IDLE)
        return True

    def poll(self) -> bool:
        """Complete the countdown once the target is reached.

        Returns True only on the call that performs the transition.
        """
        if self._state is not TimerState.RUNNING:
            return False
        if self.elapsed() < self._target:
            return False
        self._accumulated = self._target
        self._segment_start = None
        self._transition(TimerState.COMPLETED)
        return True

    def snapshot(self) -> CountdownSnapshot:
        target = self._target
        if target <= 0:
            return CountdownSnapshot(
                state=self._state,
                target=0.0,
                elapsed=0.0,
                remaining=0.0,
                progress=0.0,
                phase=0,
            )
        elapsed = min(self.elapsed(), target)
        progress = max(0.0, min(1.0, elapsed / target))
        return CountdownSnapshot(
            state=self._state,
            target=target,
            elapsed=elapsed,
            remaining=max(0.0, target - elapsed),
            progress=progress,
            phase=int(elapsed * 1000 // PHASE_MS),
        )
