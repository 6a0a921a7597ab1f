from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple

from orbchain.components.cell import Cell
from orbchain.components.player import PlayerColor

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class Board:
    """Immutable snapshot of the grid.

    Counts and owners live in flat row-major tuples indexed by ``row * cols + col``.
    Every mutation helper returns a new snapshot, so a board handed to the
    animation layer can never change underneath it.
    """
    rows: int
    cols: int
    counts: Tuple[int, ...]
    owners: Tuple[Optional[PlayerColor], ...]

    def __post_init__(self):
        # Every cell needs at least two neighbors or an empty board is already unstable.
        if self.rows < 2 or self.cols < 2:
            raise ValueError(f"board must be at least 2x2, got {self.rows}x{self.cols}")
        size = self.rows * self.cols
        if len(self.counts) != size or len(self.owners) != size:
            raise ValueError("cell arrays do not match board dimensions")

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def index(self, row: int, col: int) -> int:
        if not self.in_bounds(row, col):
            raise IndexError(f"({row}, {col}) is outside a {self.rows}x{self.cols} board")
        return row * self.cols + col

    def cell(self, row: int, col: int) -> Cell:
        i = self.index(row, col)
        return Cell(row=row, col=col, count=self.counts[i], owner=self.owners[i])

    def cells(self) -> Iterator[Cell]:
        for row in range(self.rows):
            for col in range(self.cols):
                i = row * self.cols + col
                yield Cell(row=row, col=col, count=self.counts[i], owner=self.owners[i])

    def total_units(self) -> int:
        return sum(self.counts)

    def owned_cell_counts(self) -> Dict[PlayerColor, int]:
        return dict(Counter(owner for owner in self.owners if owner is not None))

    def owner_colors(self) -> set[PlayerColor]:
        return {owner for owner in self.owners if owner is not None}

    def with_cells(self, updates: Iterable[Tuple[Position, int, Optional[PlayerColor]]]) -> Board:
        """Return a new board with ``((row, col), count, owner)`` entries replaced."""
        counts = list(self.counts)
        owners = list(self.owners)
        for (row, col), count, owner in updates:
            if count < 0:
                raise ValueError(f"negative unit count at ({row}, {col})")
            if (count == 0) != (owner is None):
                raise ValueError(f"owner/count mismatch at ({row}, {col})")
            i = self.index(row, col)
            counts[i] = count
            owners[i] = owner
        return Board(self.rows, self.cols, tuple(counts), tuple(owners))

    def copy(self) -> Board:
        return Board(self.rows, self.cols, tuple(self.counts), tuple(self.owners))
