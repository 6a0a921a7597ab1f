from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List, Tuple

from orbchain.components.board import Board
from orbchain.components.player import PlayerColor
from orbchain.constants import BOARD_SIZES

Position = Tuple[int, int]

# Fixed probe order keeps neighbor lists, and everything derived from them, deterministic.
_OFFSETS: Tuple[Position, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def board_size_for_player_count(player_count: int) -> Tuple[int, int]:
    try:
        return BOARD_SIZES[player_count]
    except KeyError:
        raise ValueError(f"unsupported player count: {player_count}") from None


@lru_cache(maxsize=4096)
def neighbors_of(row: int, col: int, rows: int, cols: int) -> Tuple[Position, ...]:
    """Orthogonal neighbors of (row, col) that fall inside a rows x cols grid."""
    return tuple(
        (row + dr, col + dc)
        for dr, dc in _OFFSETS
        if 0 <= row + dr < rows and 0 <= col + dc < cols
    )


def detonation_threshold(row: int, col: int, rows: int, cols: int) -> int:
    # Derived from neighbors_of so a detonation always hands out exactly what it loses.
    return len(neighbors_of(row, col, rows, cols))


def create_board(rows: int, cols: int) -> Board:
    size = rows * cols
    return Board(rows=rows, cols=cols, counts=(0,) * size, owners=(None,) * size)


def create_board_for_players(player_count: int) -> Board:
    rows, cols = board_size_for_player_count(player_count)
    return create_board(rows, cols)


def board_dimensions(board: Board) -> Tuple[int, int]:
    return board.rows, board.cols


def board_to_dict(board: Board) -> Dict[str, Any]:
    """Serialize to the ``{"orbs", "owner"}`` grid layout used on the wire."""
    cells: List[List[Dict[str, Any]]] = []
    for row in range(board.rows):
        row_values = []
        for col in range(board.cols):
            cell = board.cell(row, col)
            row_values.append({
                "orbs": cell.count,
                "owner": cell.owner.value if cell.owner is not None else None,
            })
        cells.append(row_values)
    return {"rows": board.rows, "cols": board.cols, "cells": cells}


def board_from_dict(payload: Dict[str, Any]) -> Board:
    try:
        rows = int(payload["rows"])
        cols = int(payload["cols"])
        grid = payload["cells"]
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"malformed board payload: {exc}") from exc
    if len(grid) != rows or any(len(row_values) != cols for row_values in grid):
        raise ValueError("cell grid does not match declared dimensions")
    updates = []
    for row, row_values in enumerate(grid):
        for col, entry in enumerate(row_values):
            count = int(entry.get("orbs", 0))
            owner_name = entry.get("owner")
            try:
                owner = PlayerColor(owner_name) if owner_name is not None else None
            except ValueError:
                raise ValueError(f"unknown player color {owner_name!r} at ({row}, {col})") from None
            updates.append(((row, col), count, owner))
    return create_board(rows, cols).with_cells(updates)
