from __future__ import annotations

from defrag_timer.countdown import TimerState


def format_time(seconds: float) -> str:
    """Format a duration as ``mm:ss``, or ``h:mm:ss`` from one hour up."""
    total_seconds = max(0, int(seconds))
    minutes, secs = divmod(total_seconds, 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def target_label(seconds: float) -> str:
    return f"Target: {format_time(seconds)}"


def elapsed_label(seconds: float) -> str:
    return f"Elapsed: {format_time(seconds)}"


def percent_label(percent: int) -> str:
    return f"{max(0, min(100, percent))}%"


def state_label(state: TimerState) -> str:
    if state is TimerState.RUNNING:
        return "Optimizing file system..."
    if state is TimerState.PAUSED:
        return "Paused"
    if state is TimerState.COMPLETED:
        return "Completed"
    return "Idle"


def start_button_label(state: TimerState) -> str:
    return "Pause" if state is TimerState.RUNNING else "Start"


def ellipsize(text: str, max_len: int) -> str:
    if max_len <= 0:
        return ""
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return "." * max_len
    return text[: max_len - 3] + "..."


def render_progress_bar(width: int, ratio: float) -> str:
    ratio = max(0.0, min(1.0, ratio))
    if width <= 2:
        return "=" * int(ratio * max(0, width))
    inner = width - 2
    filled = int(ratio * inner)
    return f"[{'=' * filled}{'-' * (inner - filled)}]"
