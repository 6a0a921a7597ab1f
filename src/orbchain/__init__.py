"""Chain reaction board game: pure rules engine plus esper/arcade front end."""
from orbchain.components.board import Board
from orbchain.components.cell import Cell
from orbchain.components.detonation_wave import DetonationWave
from orbchain.components.game_state import GamePhase, GameState
from orbchain.components.move_record import MoveRecord
from orbchain.components.player import Player, PlayerColor
from orbchain.errors import (
    AnimationInProgress,
    CascadeLimitExceeded,
    GameFinished,
    GameRuleError,
    InvalidMove,
    NotYourTurn,
    OutOfOrderMove,
)
from orbchain.systems.board_ops import (
    board_size_for_player_count,
    create_board,
    detonation_threshold,
    neighbors_of,
)
from orbchain.systems.cascade import CascadeResult, apply_move
from orbchain.systems.game_ops import MoveOutcome, new_game, replay_moves, reset_game, resolve_move
from orbchain.systems.move_validation import validate_move
from orbchain.systems.turn_rules import advance_turn, check_winner

__all__ = [
    "AnimationInProgress",
    "Board",
    "CascadeLimitExceeded",
    "CascadeResult",
    "Cell",
    "DetonationWave",
    "GameFinished",
    "GamePhase",
    "GameRuleError",
    "GameState",
    "InvalidMove",
    "MoveOutcome",
    "MoveRecord",
    "NotYourTurn",
    "OutOfOrderMove",
    "Player",
    "PlayerColor",
    "advance_turn",
    "apply_move",
    "board_size_for_player_count",
    "check_winner",
    "create_board",
    "detonation_threshold",
    "neighbors_of",
    "new_game",
    "replay_moves",
    "reset_game",
    "resolve_move",
    "validate_move",
]
