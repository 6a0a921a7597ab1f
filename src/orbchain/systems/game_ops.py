"""Move pipeline: validator -> cascade -> win detector -> turn manager.

Every execution context resolves moves through ``resolve_move``; it returns a
new GameState and never touches the one it was given.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence, Tuple

from orbchain.components.board import Board
from orbchain.components.detonation_wave import DetonationWave
from orbchain.components.game_state import GameState
from orbchain.components.move_record import MoveRecord
from orbchain.components.player import Player, PlayerColor
from orbchain.constants import MAX_CASCADE_WAVES, MAX_PLAYERS, MIN_PLAYERS
from orbchain.errors import AnimationInProgress, GameFinished, NotYourTurn, OutOfOrderMove
from orbchain.systems.board_ops import board_size_for_player_count, create_board
from orbchain.systems.cascade import place_unit, run_cascade
from orbchain.systems.move_validation import check_move
from orbchain.systems.turn_rules import advance_turn, check_winner, update_liveness
from orbchain.utils.colors import default_colors


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    state: GameState
    move: MoveRecord
    placed_board: Board
    waves: Tuple[DetonationWave, ...]
    frames: Tuple[Board, ...]
    previous_index: int
    eliminated: Tuple[Player, ...] = ()
    swept: bool = False


def new_game(
    player_count: Optional[int] = None,
    colors: Optional[Sequence[PlayerColor]] = None,
    names: Optional[Sequence[str]] = None,
) -> GameState:
    if colors is None:
        count = player_count if player_count is not None else MIN_PLAYERS
    else:
        colors = list(colors)
        count = player_count if player_count is not None else len(colors)
    if not MIN_PLAYERS <= count <= MAX_PLAYERS:
        raise ValueError(f"a game needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {count}")
    if colors is None:
        colors = default_colors(count)
    if len(colors) != count:
        raise ValueError(f"expected {count} colors, got {len(colors)}")
    if len(set(colors)) != count:
        raise ValueError("player colors must be unique")
    if names is not None and len(names) != count:
        raise ValueError(f"expected {count} names, got {len(names)}")
    players = tuple(
        Player(
            id=f"p{i}",
            color=color,
            name=names[i] if names is not None else f"Player {i + 1}",
        )
        for i, color in enumerate(colors)
    )
    rows, cols = board_size_for_player_count(count)
    return GameState(board=create_board(rows, cols), players=players)


def reset_game(state: GameState) -> GameState:
    """Fresh game with the same roster, everyone alive again."""
    return GameState(
        board=create_board(state.board.rows, state.board.cols),
        players=tuple(replace(player, is_alive=True) for player in state.players),
    )


def resolve_move(
    state: GameState,
    row: int,
    col: int,
    color: Optional[PlayerColor] = None,
    *,
    max_waves: int = MAX_CASCADE_WAVES,
) -> MoveOutcome:
    """Resolve one placement by the current player.

    Raises GameFinished, AnimationInProgress, NotYourTurn or InvalidMove
    without producing a new state.
    """
    if state.winner is not None:
        raise GameFinished(f"{state.winner.name} has already won")
    if state.is_animating:
        raise AnimationInProgress("a cascade is still resolving")
    mover = state.current_player
    if color is not None and color != mover.color:
        raise NotYourTurn(f"it is {mover.name}'s turn, not {color.value}")
    check_move(state.board, row, col, mover.color)

    placed = place_unit(state.board, row, col, mover.color)
    cascade = run_cascade(placed, mover.color, max_waves=max_waves, stop_on_sweep=True)
    moved = state.moved_colors | {mover.color}
    players = update_liveness(state.players, cascade.board, moved)
    eliminated = tuple(
        after for before, after in zip(state.players, players)
        if before.is_alive and not after.is_alive
    )
    winner = check_winner(cascade.board, players)
    if winner is None:
        next_index = advance_turn(players, state.current_player_index, cascade.board, moved)
    else:
        next_index = state.current_player_index
    resolved = replace(
        state,
        board=cascade.board,
        players=players,
        current_player_index=next_index,
        winner=winner,
        is_animating=False,
        move_count=state.move_count + 1,
        moved_colors=moved,
    )
    return MoveOutcome(
        state=resolved,
        move=MoveRecord(row=row, col=col, color=mover.color, move_index=state.move_count),
        placed_board=placed,
        waves=cascade.waves,
        frames=cascade.frames,
        previous_index=state.current_player_index,
        eliminated=eliminated,
        swept=cascade.swept,
    )


def replay_moves(state: GameState, moves: Iterable[MoveRecord]) -> GameState:
    """Re-run a recorded move log; the result matches the live session exactly."""
    for move in moves:
        if move.move_index != state.move_count:
            raise OutOfOrderMove(f"expected move {state.move_count}, got {move.move_index}")
        state = resolve_move(state, move.row, move.col, move.color).state
    return state
