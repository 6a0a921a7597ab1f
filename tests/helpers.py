from typing import List, Sequence, Tuple

from orbchain.components.board import Board
from orbchain.components.game_state import GameState
from orbchain.components.player import PlayerColor
from orbchain.systems.board_ops import create_board

_COLOR_CODES = {
    'r': PlayerColor.RED,
    'b': PlayerColor.BLUE,
    'g': PlayerColor.GREEN,
    'y': PlayerColor.YELLOW,
    'p': PlayerColor.PURPLE,
    'o': PlayerColor.ORANGE,
    'k': PlayerColor.PINK,
    'c': PlayerColor.CYAN,
}


class DummyWindow:
    def __init__(self, width=800, height=600):
        self.width = width; self.height = height


def board_from_rows(rows: Sequence[str]) -> Board:
    """Build a board from rows like ``"1r 0. 2b"`` (count followed by color code, ``.`` for none)."""
    grid = [row.split() for row in rows]
    board = create_board(len(grid), len(grid[0]))
    updates = []
    for r, tokens in enumerate(grid):
        assert len(tokens) == board.cols, f"row {r} has {len(tokens)} cells"
        for c, token in enumerate(tokens):
            count = int(token[:-1])
            owner = _COLOR_CODES.get(token[-1])
            updates.append(((r, c), count, owner))
    return board.with_cells(updates)


def drive(bus, ticks, dt=0.05):
    for _ in range(ticks):
        bus.emit('tick', dt=dt)


def legal_moves(state: GameState) -> List[Tuple[int, int]]:
    color = state.current_player.color
    board = state.board
    return [
        (cell.row, cell.col)
        for cell in board.cells()
        if cell.owner is None or cell.owner == color
    ]
