# Board dimensions chosen solely from the player count.
BOARD_SIZES = {
    2: (9, 6),
    3: (12, 10),
    4: (12, 10),
    5: (15, 15),
    6: (15, 15),
    7: (20, 20),
    8: (20, 20),
}
MIN_PLAYERS = 2
MAX_PLAYERS = 8

# Seconds each detonation wave stays on screen before the next one is applied.
WAVE_INTERVAL = 0.3
# Hard ceiling on waves per move; reaching it means a geometry or threshold bug.
MAX_CASCADE_WAVES = 10_000

TILE_SIZE = 56
BOTTOM_MARGIN = 20
# Strip above the board holding the turn / winner banner.
STATUS_BAR_HEIGHT = 48

# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.90
BOARD_MAX_HEIGHT_PCT = 0.85

GRID_LINE_COLOR = (70, 70, 90)
EXPLOSION_COLOR = (255, 255, 255)
