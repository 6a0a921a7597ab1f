import pytest

from orbchain.components.player import Player, PlayerColor
from orbchain.systems.board_ops import create_board
from orbchain.systems.turn_rules import advance_turn, check_winner, is_player_alive, update_liveness
from tests.helpers import board_from_rows

RED, BLUE, GREEN = PlayerColor.RED, PlayerColor.BLUE, PlayerColor.GREEN


def _players(*colors):
    return tuple(Player(id=f"p{i}", color=c, name=f"Player {i + 1}") for i, c in enumerate(colors))


def test_winner_when_opponent_owns_nothing():
    board = board_from_rows(["2r 1r", "0. 0."])
    assert check_winner(board, _players(RED, BLUE)).color == RED


def test_no_winner_before_two_units():
    board = create_board(9, 6).with_cells([((0, 0), 1, RED)])
    assert check_winner(board, _players(RED, BLUE)) is None
    assert is_player_alive(_players(RED, BLUE)[1], board)


def test_no_winner_while_two_colors_hold_cells():
    board = board_from_rows(["1r 1b", "0. 0."])
    assert check_winner(board, _players(RED, BLUE)) is None


def test_turn_skips_player_without_cells():
    players = _players(RED, BLUE, GREEN)
    board = create_board(12, 10).with_cells([((0, 0), 1, RED), ((5, 5), 1, GREEN)])
    assert advance_turn(players, 0, board) == 2


def test_turn_wraps_around():
    players = _players(RED, BLUE, GREEN)
    board = create_board(12, 10).with_cells([((0, 0), 1, RED), ((5, 5), 1, GREEN)])
    assert advance_turn(players, 2, board) == 0


def test_player_who_never_moved_is_not_skipped():
    players = _players(RED, BLUE, GREEN)
    board = create_board(12, 10).with_cells([((0, 0), 1, RED), ((0, 1), 1, RED)])
    assert advance_turn(players, 0, board, moved_colors={RED}) == 1
    assert advance_turn(players, 0, board) == 0


def test_advance_turn_needs_players():
    with pytest.raises(ValueError):
        advance_turn((), 0, create_board(2, 2))


def test_eliminated_players_stay_eliminated():
    players = _players(RED, BLUE)
    board = board_from_rows(["2r 1r", "0. 0."])
    updated = update_liveness(players, board, {RED, BLUE})
    assert [p.is_alive for p in updated] == [True, False]
    revived_board = board_from_rows(["1r 1b", "0. 0."])
    assert [p.is_alive for p in update_liveness(updated, revived_board, {RED, BLUE})] == [True, False]
