from orbchain.components.board import Board
from orbchain.components.player import PlayerColor
from orbchain.errors import InvalidMove


def validate_move(board: Board, row: int, col: int, color: PlayerColor) -> bool:
    """Return True if ``color`` may place a unit at (row, col).

    Stateless: callers are responsible for refusing moves while a cascade is animating.
    """
    if not board.in_bounds(row, col):
        return False
    owner = board.cell(row, col).owner
    return owner is None or owner == color


def check_move(board: Board, row: int, col: int, color: PlayerColor) -> None:
    if not board.in_bounds(row, col):
        raise InvalidMove(row, col, "out_of_bounds")
    if not validate_move(board, row, col, color):
        raise InvalidMove(row, col, "cell_owned")
