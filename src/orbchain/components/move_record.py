from dataclasses import dataclass

from orbchain.components.player import PlayerColor


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """One accepted placement, indexed in the order the session applied it."""
    row: int
    col: int
    color: PlayerColor
    move_index: int
