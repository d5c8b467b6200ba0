"""Textual-based TUI for Defrag Timer."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from typing import Any, Callable, Optional

try:
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Container, Horizontal, Vertical
    from textual.widgets import Button, Header, Static
    from rich.text import Text
except Exception as exc:  # pragma: no cover - depends on environment
    raise RuntimeError(
        "Textual is required for the TUI. Install the 'textual' dependency."
    ) from exc

from defrag_timer.blocks import (
    DiskGeometry,
    DiskLayout,
    Proportions,
    compute_counts,
    generate_layout,
)
from defrag_timer.config import AppConfig, load_config
from defrag_timer.countdown import Countdown, TimerState
from defrag_timer.duration import DurationError, parse_duration
from defrag_timer.frame import render_frame
from defrag_timer.logging_setup import set_console_level
from defrag_timer.ui.frame_ticker import FrameTicker
from defrag_timer.ui.grid_rendering import grid_size, render_legend
from defrag_timer.ui.status_controller import StatusController
from defrag_timer.ui.tui_formatters import (
    elapsed_label,
    format_time,
    percent_label,
    state_label,
    target_label,
)
from defrag_timer.ui.tui_widgets import (
    DiskGrid,
    ProgressLine,
    TimerControls,
    ValueLabel,
)

logger = logging.getLogger(__name__)


class StatusBar(Static):
    """Status bar widget."""

    def __init__(
        self,
        controller: StatusController,
        state: Callable[[], TimerState],
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._controller = controller
        self._state = state

    def render(self) -> Text:
        width = max(1, self.size.width)
        return self._controller.render_line(width, self._state())


class DefragTimerApp(App):
    """Countdown timer drawn as a disk defragmentation run."""

    TITLE = "Disk Defragmenter"
    CSS = """
    #timer_panel {
        height: auto;
        border: round $accent;
        padding: 0 1;
    }
    #timer_controls {
        height: auto;
    }
    .input_label {
        width: auto;
        padding: 1 1 0 0;
    }
    Input.duration {
        width: 10;
    }
    #start_pause, #reset {
        margin-left: 1;
    }
    #remaining_text {
        height: 1;
        text-style: bold;
    }
    #time_row, #progress_row {
        height: 1;
    }
    #target_text, #elapsed_text, #progress_bar {
        width: 1fr;
    }
    #percent_text {
        width: 6;
    }
    #disk_panel {
        height: auto;
        border: round $accent;
        padding: 0 1;
    }
    #disk_grid, #legend {
        height: auto;
    }
    #legend {
        margin-top: 1;
    }
    #status_bar {
        dock: bottom;
        height: 1;
    }
    """

    BINDINGS = [
        Binding("space", "toggle_timer", "Start/Pause"),
        Binding("r", "reset_timer", "Reset"),
        Binding("q", "quit_app", "Quit"),
    ]

    def __init__(
        self,
        *,
        config: Optional[AppConfig] = None,
        minutes: Optional[int] = None,
        seconds: Optional[int] = None,
        now: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__()
        self._config = config or load_config()
        self._geometry = DiskGeometry(
            rows=self._config.rows,
            cols=self._config.cols,
            unmovable_rows=self._config.unmovable_rows,
        )
        self._proportions = Proportions(
            free_space_percent=self._config.free_space_percent,
            fragmented_file_percent=self._config.fragmented_file_percent,
        )
        # Fail before mounting when the grid cannot be built.
        compute_counts(self._geometry, self._proportions)
        self._minutes = self._config.minutes if minutes is None else minutes
        self._seconds = self._config.seconds if seconds is None else seconds
        self._now = now
        self._rng = rng or random.Random()
        self._countdown = Countdown(now=now)
        self._disk_layout: Optional[DiskLayout] = None
        self._status_controller = StatusController(now)
        self._ticker = FrameTicker(
            self, self._on_frame, interval_ms=self._config.frame_interval_ms
        )
        self._controls: Optional[TimerControls] = None
        self._grid: Optional[DiskGrid] = None
        self._remaining_text: Optional[ValueLabel] = None
        self._target_text: Optional[ValueLabel] = None
        self._elapsed_text: Optional[ValueLabel] = None
        self._percent_text: Optional[ValueLabel] = None
        self._progress_bar: Optional[ProgressLine] = None
        self._status_bar: Optional[StatusBar] = None

    # --- Widget composition ---
    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Container(id="root"):
            with Vertical(id="timer_panel"):
                yield TimerControls(self._minutes, self._seconds, id="controls")
                yield ValueLabel("00:00", id="remaining_text")
                with Horizontal(id="time_row"):
                    yield ValueLabel(target_label(0), id="target_text")
                    yield ValueLabel(elapsed_label(0), id="elapsed_text")
                with Horizontal(id="progress_row"):
                    yield ProgressLine(id="progress_bar")
                    yield ValueLabel(percent_label(0), id="percent_text")
            disk_panel = Vertical(id="disk_panel")
            disk_panel.border_title = "Disk"
            with disk_panel:
                yield DiskGrid(self._geometry.cols, id="disk_grid")
                width, _ = grid_size(self._geometry.rows, self._geometry.cols)
                yield Static(render_legend(max(20, width)), id="legend")
        yield StatusBar(
            self._status_controller, lambda: self._countdown.state, id="status_bar"
        )

    # --- Properties ---
    @property
    def countdown(self) -> Countdown:
        return self._countdown

    @property
    def disk_layout(self) -> Optional[DiskLayout]:
        return self._disk_layout

    @property
    def ticker(self) -> FrameTicker:
        return self._ticker

    # --- Internal helpers ---
    def _install_asyncio_exception_handler(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return

        def handler(_loop: asyncio.AbstractEventLoop, context: dict) -> None:
            exc = context.get("exception")
            if exc:
                logger.exception("Asyncio exception", exc_info=exc)
            else:
                logger.error("Asyncio error: %s", context.get("message"))

        loop.set_exception_handler(handler)

    def _set_message(
        self,
        text: str,
        *,
        level: str = "info",
        timeout: Optional[float] = None,
    ) -> None:
        self._status_controller.show_message(text, level=level, timeout=timeout)
        if self._status_bar:
            self._status_bar.refresh()

    def _clear_message(self) -> None:
        self._status_controller.clear_message()
        if self._status_bar:
            self._status_bar.refresh()

    def _regenerate_layout(self) -> None:
        self._disk_layout = generate_layout(
            self._geometry, self._proportions, rng=self._rng
        )
        logger.info(
            "Layout regenerated data=%s free=%s",
            self._disk_layout.data_count,
            self._disk_layout.free_count,
        )

    def _duration_inputs(self) -> tuple[str, str]:
        if self._controls is not None:
            return self._controls.duration_text()
        return str(self._minutes), str(self._seconds)

    def _read_duration(self) -> Optional[int]:
        minutes, seconds = self._duration_inputs()
        try:
            return parse_duration(minutes, seconds)
        except DurationError as exc:
            logger.info("Rejected duration input: %s", exc)
            self._set_message(str(exc), level="error", timeout=0)
            return None

    def _apply_target(self, seconds: int) -> None:
        self._countdown.set_target(seconds)
        self._regenerate_layout()

    def _on_frame(self) -> None:
        if self._countdown.poll():
            self._ticker.stop()
            logger.info("Countdown completed target=%ss", self._countdown.target)
        self._update_ui()

    def _update_ui(self) -> None:
        snapshot = self._countdown.snapshot()
        if self._remaining_text:
            self._remaining_text.set_text(format_time(snapshot.remaining))
        if self._target_text:
            self._target_text.set_text(target_label(snapshot.target))
        if self._elapsed_text:
            self._elapsed_text.set_text(elapsed_label(snapshot.elapsed))
        if self._percent_text:
            self._percent_text.set_text(percent_label(snapshot.percent))
        if self._progress_bar:
            self._progress_bar.set_ratio(snapshot.progress)
        if self._controls:
            self._controls.refresh_state(snapshot.state)
        self.sub_title = state_label(snapshot.state)
        if self._grid and self._disk_layout is not None:
            self._grid.show_frame(
                render_frame(
                    self._disk_layout,
                    snapshot.progress,
                    snapshot.phase,
                    is_running=snapshot.is_running,
                    is_completed=snapshot.is_completed,
                )
            )
        if self._status_bar:
            self._status_bar.refresh()

    def _log_heartbeat(self) -> None:
        snapshot = self._countdown.snapshot()
        logger.info(
            "Heartbeat state=%s elapsed=%.1f target=%.0f progress=%.3f",
            snapshot.state.value,
            snapshot.elapsed,
            snapshot.target,
            snapshot.progress,
        )

    # --- Actions ---
    def action_toggle_timer(self) -> None:
        self._clear_message()
        if self._countdown.state is TimerState.RUNNING:
            self._countdown.pause()
            self._ticker.stop()
            self._update_ui()
            return
        duration = self._read_duration()
        if duration is None:
            return
        if duration != self._countdown.target:
            self._apply_target(duration)
        if self._countdown.state is TimerState.COMPLETED:
            self._set_message("Optimization finished. Press R to run again.")
            return
        if self._countdown.start():
            self._ticker.start()
        self._update_ui()

    def action_reset_timer(self) -> None:
        self._clear_message()
        duration = self._read_duration()
        if duration is None:
            return
        self._ticker.stop()
        self._apply_target(duration)
        self._update_ui()

    def action_quit_app(self) -> None:
        self._ticker.stop()
        self.exit()

    # --- Event handlers ---
    def on_mount(self) -> None:
        self._controls = self.query_one("#controls", TimerControls)
        self._grid = self.query_one("#disk_grid", DiskGrid)
        self._remaining_text = self.query_one("#remaining_text", ValueLabel)
        self._target_text = self.query_one("#target_text", ValueLabel)
        self._elapsed_text = self.query_one("#elapsed_text", ValueLabel)
        self._percent_text = self.query_one("#percent_text", ValueLabel)
        self._progress_bar = self.query_one("#progress_bar", ProgressLine)
        self._status_bar = self.query_one("#status_bar", StatusBar)
        self._install_asyncio_exception_handler()
        initial = self._minutes * 60 + self._seconds
        self._apply_target(initial)
        self._update_ui()
        self.set_focus(self.query_one("#start_pause", Button))
        self.set_interval(10.0, self._log_heartbeat)
        logger.info("TUI mounted target=%ss", initial)

    def on_unmount(self) -> None:
        self._ticker.stop()
        logger.info("TUI shutdown")


# Public entrypoints
def run_tui(
    *,
    config: Optional[AppConfig] = None,
    minutes: Optional[int] = None,
    seconds: Optional[int] = None,
    seed: Optional[int] = None,
) -> int:
    """Run the TUI and return an exit code."""
    logger.info("TUI start minutes=%s seconds=%s seed=%s", minutes, seconds, seed)
    try:
        set_console_level(logging.WARNING)
    except Exception:
        logger.exception("Failed to set console log level for TUI")
    rng = random.Random(seed) if seed is not None else None
    app = DefragTimerApp(config=config, minutes=minutes, seconds=seconds, rng=rng)
    app.run()
    logger.info("TUI exit")
    return 0
