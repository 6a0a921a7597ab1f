from dataclasses import dataclass
from typing import Optional

from orbchain.components.player import PlayerColor


@dataclass(frozen=True, slots=True)
class Cell:
    """Read-only view of one grid position.

    Invariant: ``owner is None`` exactly when ``count == 0``.
    """
    row: int
    col: int
    count: int = 0
    owner: Optional[PlayerColor] = None

    @property
    def position(self) -> tuple[int, int]:
        return self.row, self.col
