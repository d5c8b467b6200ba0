"""Rich rendering of defrag grid frames."""

from __future__ import annotations

from rich.text import Text

from defrag_timer.frame import CellColor
from defrag_timer.ui.tui_types import ColorFrame

STROKE = "#000080"
CELL_GLYPH = "██"
GAP = " "

CELL_STYLES: dict[CellColor, str] = {
    CellColor.SYSTEM: "#ff0000",
    CellColor.FREE: "#ffffff",
    CellColor.CONTINUOUS: "#00c0c0",
    CellColor.FRAGMENTED: "#0000ff",
    CellColor.PROCESSED: "#008000",
    CellColor.READING: "#ffa500",
    CellColor.MOVING: "#ffff00",
}

LEGEND: tuple[tuple[CellColor, str], ...] = (
    (CellColor.SYSTEM, "System (unmovable)"),
    (CellColor.FRAGMENTED, "Fragmented"),
    (CellColor.CONTINUOUS, "Unprocessed"),
    (CellColor.PROCESSED, "Optimized"),
    (CellColor.FREE, "Free space"),
    (CellColor.READING, "Reading"),
    (CellColor.MOVING, "Moving"),
)


def cell_style(color: CellColor) -> str:
    return f"{CELL_STYLES.get(color, CELL_STYLES[CellColor.FREE])} on {STROKE}"


def grid_size(rows: int, cols: int) -> tuple[int, int]:
    """Return the (width, height) in terminal cells of a rendered grid."""
    if rows <= 0 or cols <= 0:
        return (0, 0)
    width = cols * len(CELL_GLYPH) + (cols + 1) * len(GAP)
    return (width, rows)


def render_grid(colors: ColorFrame, cols: int) -> Text:
    """Render ``colors`` as rows of ``cols`` blocks on a stroke background.

    A trailing partial row is rendered as-is.
    """
    rendered = Text()
    if cols <= 0 or not colors:
        return rendered
    gap_style = f"on {STROKE}"
    for start in range(0, len(colors), cols):
        if start:
            rendered.append("\n")
        rendered.append(GAP, style=gap_style)
        for color in colors[start : start + cols]:
            rendered.append(CELL_GLYPH, style=cell_style(color))
            rendered.append(GAP, style=gap_style)
    return rendered


def render_legend(width: int) -> Text:
    """Render the color legend, wrapping entries to ``width`` columns."""
    legend = Text()
    line_len = 0
    for color, label in LEGEND:
        entry_len = len(CELL_GLYPH) + 1 + len(label)
        if line_len and line_len + 2 + entry_len > width:
            legend.append("\n")
            line_len = 0
        elif line_len:
            legend.append("  ")
            line_len += 2
        legend.append(CELL_GLYPH, style=cell_style(color))
        legend.append(f" {label}")
        line_len += entry_len
    return legend
