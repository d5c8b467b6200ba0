"""Per-frame cell colors derived from defrag progress."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math

from defrag_timer.blocks import BlockKind, DiskLayout

ANIMATION_CYCLE = 3


class CellColor(Enum):
    """Color category for a rendered cell."""

    SYSTEM = "system"
    FREE = "free"
    CONTINUOUS = "continuous"
    FRAGMENTED = "fragmented"
    PROCESSED = "processed"
    READING = "reading"
    MOVING = "moving"


class CellState(Enum):
    """Working state of a movable cell while a frame is built."""

    FREE = "free"
    CONTINUOUS = "continuous"
    FRAGMENTED = "fragmented"
    PROCESSED = "processed"


@dataclass(frozen=True)
class FrameCounts:
    optimized: int
    moved_free: int
    swaps: int


_STATE_FROM_KIND = {
    BlockKind.FREE: CellState.FREE,
    BlockKind.CONTINUOUS: CellState.CONTINUOUS,
    BlockKind.FRAGMENTED: CellState.FRAGMENTED,
}

_COLOR_FROM_STATE = {
    CellState.PROCESSED: CellColor.PROCESSED,
    CellState.FRAGMENTED: CellColor.FRAGMENTED,
    CellState.CONTINUOUS: CellColor.CONTINUOUS,
}


def _scaled_count(progress: float, total: int) -> int:
    if total <= 0 or math.isnan(progress):
        return 0
    progress = max(0.0, min(1.0, progress))
    return max(0, min(total, math.floor(progress * total)))


def _build_state(
    layout: DiskLayout, progress: float
) -> tuple[list[CellState], FrameCounts]:
    system = layout.system_cells
    movable = layout.movable_cells
    initial = layout.movable_region()
    state = [_STATE_FROM_KIND.get(kind, CellState.FREE) for kind in initial]

    optimized = _scaled_count(progress, layout.data_count)
    for position in layout.queue[:optimized]:
        local = position - system
        if 0 <= local < movable:
            state[local] = CellState.PROCESSED

    moved_free = _scaled_count(progress, layout.free_count)
    free_positions = [i for i, kind in enumerate(initial) if kind is BlockKind.FREE]
    tail_start = movable - moved_free
    back = movable - 1
    swaps = 0
    for front in free_positions:
        if swaps >= moved_free:
            break
        if front >= tail_start:
            continue
        while back > front and state[back] is CellState.FREE:
            back -= 1
        if back <= front:
            break
        state[front], state[back] = state[back], state[front]
        back -= 1
        swaps += 1

    return state, FrameCounts(optimized=optimized, moved_free=moved_free, swaps=swaps)


def frame_counts(layout: DiskLayout, progress: float) -> FrameCounts:
    """Return how many blocks a frame at ``progress`` optimizes and relocates."""
    _, counts = _build_state(layout, progress)
    return counts


def _active_cell(
    state: list[CellState], phase: int
) -> tuple[int, CellColor | None] | None:
    unprocessed = [
        i
        for i, cell in enumerate(state)
        if cell in (CellState.CONTINUOUS, CellState.FRAGMENTED)
    ]
    if not unprocessed:
        return None
    phase = max(0, phase)
    cycle = phase % ANIMATION_CYCLE
    selected = unprocessed[(phase // ANIMATION_CYCLE) % len(unprocessed)]
    if cycle == 0:
        return selected, CellColor.READING
    if cycle == 1:
        return selected, CellColor.MOVING
    return selected, None


def render_frame(
    layout: DiskLayout,
    progress: float,
    phase: int,
    *,
    is_running: bool,
    is_completed: bool,
) -> list[CellColor]:
    """Return one color per grid cell for the given progress and phase.

    Data blocks turn ``PROCESSED`` in queue order as progress grows, while the
    same fraction of free blocks is swapped from the front of the disk to the
    back. While running, one unprocessed block cycles through reading, moving
    and settled, advancing to the next block every ``ANIMATION_CYCLE`` phases.
    ``layout`` is never modified.
    """
    state, counts = _build_state(layout, progress)
    colors = [_COLOR_FROM_STATE.get(cell, CellColor.FREE) for cell in state]

    remaining = layout.data_count - counts.optimized
    if is_running and not is_completed and remaining > 0:
        active = _active_cell(state, phase)
        if active is not None:
            index, color = active
            if color is not None:
                colors[index] = color

    return [CellColor.SYSTEM] * layout.system_cells + colors
