from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, Input, Static

from defrag_timer.countdown import TimerState
from defrag_timer.frame import CellColor
from defrag_timer.ui.grid_rendering import render_grid
from defrag_timer.ui.tui_formatters import render_progress_bar, start_button_label
from defrag_timer.ui.tui_types import ColorFrame

if TYPE_CHECKING:
    from defrag_timer.tui import DefragTimerApp


class ProgressLine(Static):
    """Text progress bar sized to the widget width."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._ratio = 0.0

    @property
    def ratio(self) -> float:
        return self._ratio

    def set_ratio(self, ratio: float) -> None:
        ratio = max(0.0, min(1.0, ratio))
        if ratio != self._ratio:
            self._ratio = ratio
            self.refresh()

    def render(self) -> Text:
        size = getattr(self, "content_size", None) or self.size
        width = max(1, getattr(size, "width", 1))
        return Text(render_progress_bar(width, self._ratio))


class DiskGrid(Static):
    """Grid of disk blocks redrawn from a color frame."""

    def __init__(self, cols: int, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._cols = cols
        self._frame: tuple[CellColor, ...] = ()

    @property
    def frame(self) -> ColorFrame:
        return self._frame

    def show_frame(self, frame: ColorFrame) -> None:
        frame = tuple(frame)
        if frame == self._frame:
            return
        self._frame = frame
        self.refresh()

    def render(self) -> Text:
        return render_grid(self._frame, self._cols)


class TimerControls(Static):
    """Duration inputs plus start/pause and reset buttons."""

    def __init__(self, minutes: int, seconds: int, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._minutes = minutes
        self._seconds = seconds

    def _app(self) -> "DefragTimerApp":
        return cast("DefragTimerApp", self.app)

    def compose(self) -> ComposeResult:
        with Horizontal(id="timer_controls"):
            yield Static("Min", classes="input_label")
            yield Input(str(self._minutes), id="minutes_input", classes="duration")
            yield Static("Sec", classes="input_label")
            yield Input(str(self._seconds), id="seconds_input", classes="duration")
            yield Button("Start", id="start_pause", variant="primary")
            yield Button("Reset", id="reset")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        app = self._app()
        if event.button.id == "start_pause":
            app.action_toggle_timer()
        elif event.button.id == "reset":
            app.action_reset_timer()
        event.stop()

    def duration_text(self) -> tuple[str, str]:
        minutes = self.query_one("#minutes_input", Input).value
        seconds = self.query_one("#seconds_input", Input).value
        return minutes, seconds

    def refresh_state(self, state: TimerState) -> None:
        try:
            button = self.query_one("#start_pause", Button)
        except Exception:
            return
        button.label = start_button_label(state)


class ValueLabel(Static):
    """Plain-text label that only re-renders when its value changes."""

    def __init__(self, text: str = "", **kwargs: Any) -> None:
        super().__init__(text, markup=False, **kwargs)
        self._label_text = text

    @property
    def label_text(self) -> str:
        return self._label_text

    def set_text(self, text: str) -> None:
        if text == self._label_text:
            return
        self._label_text = text
        self.update(text)
