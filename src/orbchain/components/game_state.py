"""Session state describing the board, roster and whose turn it is."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import FrozenSet, Optional, Tuple

from orbchain.components.board import Board
from orbchain.components.player import Player, PlayerColor


class GamePhase(Enum):
    """Per-session state machine; FINISHED is terminal."""
    IN_PROGRESS = auto()
    RESOLVING = auto()
    FINISHED = auto()


@dataclass(frozen=True, slots=True)
class GameState:
    """Replaced wholesale after every resolved move, never mutated in place.

    ``current_player_index`` indexes ``players`` directly (eliminated players stay in the tuple).
    """
    board: Board
    players: Tuple[Player, ...]
    current_player_index: int = 0
    winner: Optional[Player] = None
    is_animating: bool = False
    move_count: int = 0
    # Colors that have placed at least one unit; nobody is eliminated before their first move.
    moved_colors: FrozenSet[PlayerColor] = frozenset()

    @property
    def phase(self) -> GamePhase:
        if self.winner is not None:
            return GamePhase.FINISHED
        if self.is_animating:
            return GamePhase.RESOLVING
        return GamePhase.IN_PROGRESS

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    def player_for(self, color) -> Optional[Player]:
        for player in self.players:
            if player.color == color:
                return player
        return None
