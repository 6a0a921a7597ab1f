from __future__ import annotations

from dataclasses import replace
from typing import Collection, Optional, Sequence, Set, Tuple

from orbchain.components.board import Board
from orbchain.components.player import Player, PlayerColor


def active_colors(board: Board) -> Set[PlayerColor]:
    """Colors owning at least one cell."""
    return board.owner_colors()


def is_player_alive(
    player: Player,
    board: Board,
    moved_colors: Optional[Collection[PlayerColor]] = None,
    *,
    active: Optional[Set[PlayerColor]] = None,
) -> bool:
    """Board-derived liveness.

    Fewer than two units on the board means the game has just started and
    nobody can be out yet. When ``moved_colors`` is supplied, players that
    have not placed a unit yet are also still in.
    """
    if board.total_units() < 2:
        return True
    if moved_colors is not None and player.color not in moved_colors:
        return True
    colors = active if active is not None else active_colors(board)
    return player.color in colors


def advance_turn(
    players: Sequence[Player],
    current_index: int,
    board: Board,
    moved_colors: Optional[Collection[PlayerColor]] = None,
) -> int:
    """Index of the next player to act, skipping eliminated players.

    The probe is bounded by the roster size so a board on which nobody is
    alive cannot spin forever.
    """
    count = len(players)
    if count == 0:
        raise ValueError("cannot advance turn with an empty roster")
    active = active_colors(board)
    next_index = (current_index + 1) % count
    attempts = 0
    while (
        not is_player_alive(players[next_index], board, moved_colors, active=active)
        and attempts < count
    ):
        next_index = (next_index + 1) % count
        attempts += 1
    return next_index


def check_winner(board: Board, players: Sequence[Player]) -> Optional[Player]:
    if board.total_units() < 2:
        return None
    active = active_colors(board)
    contenders = [player for player in players if player.color in active]
    if len(contenders) == 1:
        return contenders[0]
    return None


def update_liveness(
    players: Sequence[Player],
    board: Board,
    moved_colors: Optional[Collection[PlayerColor]] = None,
) -> Tuple[Player, ...]:
    """Recompute ``is_alive`` for the roster; eliminated players stay eliminated."""
    active = active_colors(board)
    updated = []
    for player in players:
        alive = player.is_alive and is_player_alive(player, board, moved_colors, active=active)
        updated.append(player if alive == player.is_alive else replace(player, is_alive=alive))
    return tuple(updated)
