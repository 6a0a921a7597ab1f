from dataclasses import dataclass, field
from typing import List, Optional

from orbchain.components.game_state import GameState
from orbchain.components.move_record import MoveRecord


@dataclass(slots=True)
class SessionState:
    """Singleton component holding the live GameState and the accepted move log.

    ``pending`` carries the resolved outcome of a move whose waves are still animating.
    """
    state: GameState
    moves: List[MoveRecord] = field(default_factory=list)
    pending: Optional[object] = None
