"""Cascade engine: turns one placed unit into a fully resolved board.

The engine is pure. Every step reads one board snapshot and returns a new one,
so the local loop, the visual replay and the authoritative session can all
share it and still produce identical results.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from orbchain.components.board import Board
from orbchain.components.detonation_wave import DetonationWave
from orbchain.components.player import PlayerColor
from orbchain.constants import MAX_CASCADE_WAVES
from orbchain.errors import CascadeLimitExceeded
from orbchain.systems.board_ops import detonation_threshold, neighbors_of
from orbchain.systems.move_validation import check_move

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class CascadeResult:
    board: Board
    waves: Tuple[DetonationWave, ...]
    # Board after each wave, aligned with ``waves``; consumed by animation playback.
    frames: Tuple[Board, ...] = ()
    swept: bool = False


def find_unstable(board: Board) -> Tuple[Position, ...]:
    """Full-board scan for cells at or above their threshold, in row-major order."""
    rows, cols = board.rows, board.cols
    counts = board.counts
    return tuple(
        (row, col)
        for row in range(rows)
        for col in range(cols)
        if counts[row * cols + col] >= detonation_threshold(row, col, rows, cols)
    )


def place_unit(board: Board, row: int, col: int, color: PlayerColor) -> Board:
    cell = board.cell(row, col)
    return board.with_cells([((row, col), cell.count + 1, color)])


def detonate(board: Board, positions: Iterable[Position], color: PlayerColor) -> Board:
    """Detonate every position at once against a single snapshot.

    Each cell sheds its threshold and every neighbor gains one unit owned by ``color``.
    Unit arithmetic is additive, so the outcome is independent of iteration order.
    """
    rows, cols = board.rows, board.cols
    counts = list(board.counts)
    owners = list(board.owners)
    origins = list(positions)
    received: set[int] = set()
    for row, col in origins:
        i = row * cols + col
        threshold = detonation_threshold(row, col, rows, cols)
        if board.counts[i] < threshold:
            raise ValueError(f"cell ({row}, {col}) is below its threshold and cannot detonate")
        counts[i] -= threshold
        for n_row, n_col in neighbors_of(row, col, rows, cols):
            j = n_row * cols + n_col
            counts[j] += 1
            received.add(j)
    for j in received:
        owners[j] = color
    for row, col in origins:
        i = row * cols + col
        if counts[i] == 0:
            owners[i] = None
    return Board(rows, cols, tuple(counts), tuple(owners))


def is_swept(board: Board, color: PlayerColor) -> bool:
    """True when every occupied cell belongs to ``color``."""
    return all(owner is None or owner == color for owner in board.owners)


def iter_cascade(
    board: Board,
    color: PlayerColor,
    *,
    max_waves: int = MAX_CASCADE_WAVES,
    stop_on_sweep: bool = False,
) -> Iterator[Tuple[DetonationWave, Board]]:
    """Yield ``(wave, board_after)`` until the board is stable.

    With ``stop_on_sweep`` the stream also ends once ``color`` owns every occupied
    cell; further waves could only shuffle the mover's own units around.
    """
    waves = 0
    while True:
        unstable = find_unstable(board)
        if not unstable:
            return
        if waves >= max_waves:
            logger.error(
                "Cascade for %s exceeded %d waves on a %dx%d board (%d units)",
                color.value, max_waves, board.rows, board.cols, board.total_units(),
            )
            raise CascadeLimitExceeded(waves)
        board = detonate(board, unstable, color)
        waves += 1
        yield DetonationWave(origins=unstable), board
        if stop_on_sweep and is_swept(board, color):
            return


def run_cascade(
    board: Board,
    color: PlayerColor,
    *,
    max_waves: int = MAX_CASCADE_WAVES,
    stop_on_sweep: bool = False,
) -> CascadeResult:
    waves: List[DetonationWave] = []
    frames: List[Board] = []
    for wave, after in iter_cascade(board, color, max_waves=max_waves, stop_on_sweep=stop_on_sweep):
        waves.append(wave)
        frames.append(after)
        board = after
    swept = bool(waves) and bool(find_unstable(board))
    if swept:
        logger.debug("Cascade for %s halted after sweeping the board in %d waves", color.value, len(waves))
    return CascadeResult(board=board, waves=tuple(waves), frames=tuple(frames), swept=swept)


def apply_move(
    board: Board,
    row: int,
    col: int,
    color: PlayerColor,
    *,
    max_waves: int = MAX_CASCADE_WAVES,
    stop_on_sweep: bool = False,
) -> CascadeResult:
    """Place one unit for ``color`` and resolve the resulting cascade.

    Raises InvalidMove if the placement is not legal on ``board``.
    """
    check_move(board, row, col, color)
    placed = place_unit(board, row, col, color)
    return run_cascade(placed, color, max_waves=max_waves, stop_on_sweep=stop_on_sweep)
