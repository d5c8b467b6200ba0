"""Disk block layout generation for the defrag grid."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import random
from typing import Optional

logger = logging.getLogger(__name__)

SHUFFLE_PASSES = 5


class InvalidConfiguration(ValueError):
    """Raised when grid geometry or block proportions are unusable."""


class BlockKind(Enum):
    """Classification of a disk block, fixed when the layout is generated."""

    SYSTEM = "system"
    FREE = "free"
    CONTINUOUS = "continuous"
    FRAGMENTED = "fragmented"

    @property
    def is_data(self) -> bool:
        return self in (BlockKind.CONTINUOUS, BlockKind.FRAGMENTED)


@dataclass(frozen=True)
class DiskGeometry:
    rows: int
    cols: int
    unmovable_rows: int = 2

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def system_cells(self) -> int:
        return self.unmovable_rows * self.cols


@dataclass(frozen=True)
class Proportions:
    free_space_percent: int = 25
    fragmented_file_percent: int = 40


@dataclass(frozen=True)
class BlockCounts:
    system: int
    free: int
    continuous: int
    fragmented: int

    @property
    def movable(self) -> int:
        return self.free + self.continuous + self.fragmented

    @property
    def data(self) -> int:
        return self.continuous + self.fragmented

    @property
    def total(self) -> int:
        return self.system + self.movable


@dataclass(frozen=True)
class DiskLayout:
    """Immutable initial block layout plus its processing queue.

    ``cells`` holds one ``BlockKind`` per grid cell in index order. ``queue``
    lists the global positions of every data block in ascending order; queue
    entry ``i`` is optimized before entry ``i + 1``.
    """

    geometry: DiskGeometry
    counts: BlockCounts
    cells: tuple[BlockKind, ...]
    queue: tuple[int, ...]

    @property
    def total_cells(self) -> int:
        return len(self.cells)

    @property
    def system_cells(self) -> int:
        return self.counts.system

    @property
    def movable_cells(self) -> int:
        return self.total_cells - self.system_cells

    @property
    def data_count(self) -> int:
        return len(self.queue)

    @property
    def free_count(self) -> int:
        return self.movable_cells - self.data_count

    def movable_region(self) -> tuple[BlockKind, ...]:
        return self.cells[self.system_cells :]


def _validate(geometry: DiskGeometry, proportions: Proportions) -> None:
    if geometry.rows <= 0 or geometry.cols <= 0:
        raise InvalidConfiguration(
            f"Grid must have positive dimensions (got {geometry.rows}x{geometry.cols})"
        )
    if not 0 <= geometry.unmovable_rows <= geometry.rows:
        raise InvalidConfiguration(
            f"Unmovable rows must be between 0 and {geometry.rows} "
            f"(got {geometry.unmovable_rows})"
        )
    for name, value in (
        ("free_space_percent", proportions.free_space_percent),
        ("fragmented_file_percent", proportions.fragmented_file_percent),
    ):
        if not 0 <= value <= 100:
            raise InvalidConfiguration(f"{name} must be within 0..100 (got {value})")


def compute_counts(geometry: DiskGeometry, proportions: Proportions) -> BlockCounts:
    """Return how many blocks of each kind a layout will contain."""
    _validate(geometry, proportions)
    system = geometry.system_cells
    movable = geometry.total_cells - system
    free = movable * proportions.free_space_percent // 100
    data = movable - free
    fragmented = data * proportions.fragmented_file_percent // 100
    return BlockCounts(
        system=system,
        free=free,
        continuous=data - fragmented,
        fragmented=fragmented,
    )


def _shuffle(blocks: list[BlockKind], rng: random.Random) -> None:
    for _ in range(SHUFFLE_PASSES):
        for i in range(len(blocks) - 1, 0, -1):
            j = rng.randrange(i + 1)
            blocks[i], blocks[j] = blocks[j], blocks[i]


def generate_layout(
    geometry: DiskGeometry,
    proportions: Proportions = Proportions(),
    *,
    rng: Optional[random.Random] = None,
) -> DiskLayout:
    """Build a freshly shuffled layout for ``geometry``.

    Only the movable region is shuffled; the leading system rows stay fixed.
    Pass a seeded ``rng`` for reproducible layouts.
    """
    counts = compute_counts(geometry, proportions)
    rng = rng or random.Random()

    movable: list[BlockKind] = (
        [BlockKind.FRAGMENTED] * counts.fragmented
        + [BlockKind.CONTINUOUS] * counts.continuous
        + [BlockKind.FREE] * counts.free
    )
    _shuffle(movable, rng)

    cells = tuple([BlockKind.SYSTEM] * counts.system + movable)
    queue = tuple(index for index, kind in enumerate(cells) if kind.is_data)
    logger.debug(
        "Generated layout %sx%s system=%s free=%s continuous=%s fragmented=%s",
        geometry.rows,
        geometry.cols,
        counts.system,
        counts.free,
        counts.continuous,
        counts.fragmented,
    )
    return DiskLayout(geometry=geometry, counts=counts, cells=cells, queue=queue)
