"""Status line controller for the TUI."""

from __future__ import annotations

from typing import Callable, Optional

from rich.text import Text

from defrag_timer.countdown import TimerState
from defrag_timer.ui.tui_formatters import ellipsize
from defrag_timer.ui.tui_types import StatusMessage

_LEVEL_STYLES = {"warn": "#ffcc66", "error": "#ff5f52"}


class StatusController:
    """Status line state and rendering."""

    def __init__(self, now: Callable[[], float]) -> None:
        self._now = now
        self._message: Optional[StatusMessage] = None

    def show_message(
        self,
        text: str,
        *,
        level: str = "info",
        timeout: Optional[float] = None,
    ) -> None:
        if timeout is None:
            timeout = 6.0 if level in _LEVEL_STYLES else 3.0
        until = None if timeout == 0 else self._now() + max(0.0, timeout)
        self._message = StatusMessage(text=text, level=level, until=until)

    def clear_message(self) -> None:
        self._message = None

    def current_message(self) -> Optional[StatusMessage]:
        if not self._message:
            return None
        if self._message.until is None or self._message.until > self._now():
            return self._message
        self._message = None
        return None

    def render_line(self, width: int, state: TimerState = TimerState.IDLE) -> Text:
        message = self.current_message()
        if message:
            line = ellipsize(message.text, width)
            style = _LEVEL_STYLES.get(message.level)
            return Text(line, style=style) if style else Text(line)
        return Text(ellipsize(self._render_hint(state), width))

    def _render_hint(self, state: TimerState) -> str:
        if state is TimerState.RUNNING:
            return "Space: pause  R: reset  Q: quit"
        if state is TimerState.PAUSED:
            return "Space: resume  R: reset  Q: quit"
        if state is TimerState.COMPLETED:
            return "R: reset  Q: quit"
        return "Space: start  R: reset  Q: quit"
