from typing import Optional, Tuple

from orbchain.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    STATUS_BAR_HEIGHT,
)

Geometry = Tuple[int, float, float]


def compute_board_geometry(window_width: int, window_height: int, rows: int, cols: int) -> Geometry:
    """Return (tile_size, start_x, start_y) for a rows x cols board.

    Shared by rendering and input so clicks land on the cell that is drawn.
    Row 0 is the top row; ``start_y`` is the bottom edge of the board.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - STATUS_BAR_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w / cols, max_board_h / rows))
    if tile_size < 12:
        tile_size = 12
    start_x = (window_width - cols * tile_size) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_at_point(x: float, y: float, geometry: Geometry, rows: int, cols: int) -> Optional[Tuple[int, int]]:
    tile_size, start_x, start_y = geometry
    top = start_y + rows * tile_size
    if x < start_x or x >= start_x + cols * tile_size:
        return None
    if y < start_y or y >= top:
        return None
    return int((top - y) // tile_size), int((x - start_x) // tile_size)


def cell_center(row: int, col: int, geometry: Geometry, rows: int) -> Tuple[float, float]:
    tile_size, start_x, start_y = geometry
    top = start_y + rows * tile_size
    return start_x + (col + 0.5) * tile_size, top - (row + 0.5) * tile_size
