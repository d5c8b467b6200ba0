from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence
from typing_extensions import TypeAlias

from defrag_timer.frame import CellColor

ColorFrame: TypeAlias = Sequence[CellColor]


@dataclass(frozen=True)
class StatusMessage:
    text: str
    level: str = "info"
    until: Optional[float] = None
