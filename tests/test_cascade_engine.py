import random

import pytest

from orbchain.components.player import PlayerColor
from orbchain.errors import CascadeLimitExceeded, InvalidMove
from orbchain.systems.board_ops import create_board
from orbchain.systems.cascade import apply_move, detonate, find_unstable, iter_cascade, run_cascade
from orbchain.systems.game_ops import new_game, resolve_move
from tests.helpers import board_from_rows, legal_moves

RED, BLUE = PlayerColor.RED, PlayerColor.BLUE


def test_placement_without_cascade():
    board = create_board(9, 6)
    result = apply_move(board, 0, 0, RED)
    cell = result.board.cell(0, 0)
    assert (cell.count, cell.owner) == (1, RED)
    assert result.waves == ()
    assert not result.swept


def test_corner_detonation_spreads_to_both_neighbors():
    board = create_board(9, 6).with_cells([((0, 0), 1, RED)])
    result = apply_move(board, 0, 0, RED)
    assert [wave.origins for wave in result.waves] == [((0, 0),)]
    origin = result.board.cell(0, 0)
    assert (origin.count, origin.owner) == (0, None)
    for pos in ((1, 0), (0, 1)):
        cell = result.board.cell(*pos)
        assert (cell.count, cell.owner) == (1, RED)
    assert len(result.frames) == 1 and result.frames[0] == result.board


def test_chain_captures_are_attributed_to_the_mover():
    board = board_from_rows([
        "1r 2b 2b 0. 0. 0.",
        "0. 0. 0. 0. 0. 0.",
        "0. 0. 0. 0. 0. 0.",
    ])
    result = apply_move(board, 0, 0, RED)
    assert [wave.origins for wave in result.waves] == [((0, 0),), ((0, 1),), ((0, 2),)]
    assert BLUE not in result.board.owner_colors()
    assert result.board.owner_colors() == {RED}
    assert result.board.cell(0, 3).owner == RED
    assert result.board.cell(1, 2).owner == RED


def test_simultaneous_wave_uses_one_snapshot():
    board = board_from_rows([
        "2r 0. 2r",
        "0. 0. 0.",
    ])
    after = detonate(board, find_unstable(board), RED)
    # Middle top cell receives from both corners in the same wave.
    assert after.cell(0, 1).count == 2
    assert after.cell(0, 0).count == 0 and after.cell(0, 2).count == 0


def test_detonate_rejects_stable_cell():
    board = create_board(3, 3).with_cells([((1, 1), 1, RED)])
    with pytest.raises(ValueError):
        detonate(board, [(1, 1)], RED)


def test_units_are_conserved():
    board = board_from_rows([
        "1r 1b 0.",
        "1r 2b 0.",
        "0. 1r 0.",
    ])
    before = board.total_units()
    result = apply_move(board, 0, 0, RED)
    assert result.board.total_units() == before + 1
    for frame in result.frames:
        assert frame.total_units() == before + 1


def test_settled_board_is_left_alone():
    board = board_from_rows(["1r 1b", "0. 1r"])
    result = run_cascade(board, RED)
    assert result.waves == ()
    assert result.board == board


def test_same_input_same_output():
    board = board_from_rows([
        "1r 2b 0. 0.",
        "0. 1b 0. 0.",
        "0. 0. 1r 0.",
    ])
    first = apply_move(board, 0, 0, RED)
    second = apply_move(board, 0, 0, RED)
    assert first == second


def test_apply_move_rejects_opponent_cell():
    board = create_board(3, 3).with_cells([((1, 1), 1, BLUE)])
    with pytest.raises(InvalidMove):
        apply_move(board, 1, 1, RED)


def _overfull_board():
    # Five units on a 2x2 board can never settle: every corner holds at most one.
    return board_from_rows(["1r 1r", "1r 1r"])


def test_wave_limit_raises_on_board_that_cannot_settle():
    with pytest.raises(CascadeLimitExceeded) as exc_info:
        apply_move(_overfull_board(), 0, 0, RED, max_waves=50)
    assert exc_info.value.waves == 50


def test_sweep_halt_stops_board_that_cannot_settle():
    result = apply_move(_overfull_board(), 0, 0, RED, max_waves=50, stop_on_sweep=True)
    assert len(result.waves) == 1
    assert result.swept
    assert result.board.total_units() == 5
    assert find_unstable(result.board)


def test_iter_cascade_yields_board_after_each_wave():
    board = create_board(9, 6).with_cells([((0, 0), 2, RED)])
    steps = list(iter_cascade(board, RED))
    assert len(steps) == 1
    wave, after = steps[0]
    assert wave.origins == ((0, 0),)
    assert after.cell(0, 1).count == 1


def test_random_games_terminate_on_two_player_board():
    rng = random.Random(1234)
    longest = 0
    for _ in range(20):
        state = new_game(2)
        for _ in range(400):
            if state.winner is not None:
                break
            row, col = rng.choice(legal_moves(state))
            outcome = resolve_move(state, row, col, max_waves=500)
            longest = max(longest, len(outcome.waves))
            state = outcome.state
            assert state.board.total_units() == state.move_count
    assert longest < 500
