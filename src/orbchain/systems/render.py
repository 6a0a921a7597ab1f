from typing import Dict, List, Tuple

from esper import World

from orbchain.constants import EXPLOSION_COLOR, GRID_LINE_COLOR, STATUS_BAR_HEIGHT
from orbchain.events.bus import EventBus, EVENT_TICK
from orbchain.systems.board_ops import detonation_threshold
from orbchain.ui.layout import cell_center, compute_board_geometry
from orbchain.utils.session import get_or_create_display_board, get_session

# Orb placement inside a cell, as fractions of the tile size.
ORB_OFFSETS = {
    1: [(0.0, 0.0)],
    2: [(-0.18, 0.0), (0.18, 0.0)],
    3: [(0.0, 0.16), (-0.17, -0.12), (0.17, -0.12)],
    4: [(-0.17, 0.17), (0.17, 0.17), (-0.17, -0.17), (0.17, -0.17)],
}
BACKGROUND_FILL = (30, 30, 40)
STATUS_TEXT_COLOR = (235, 235, 235)


class RenderSystem:
    """Draws the display board and the turn banner.

    Reads only DisplayBoard and the session state. Without an active arcade
    window it still builds the layout cache so tests can inspect it.
    """
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self._time = 0.0
        self._last_cell_layout: Dict[Tuple[int, int], Dict[str, object]] = {}
        self._status_text = ""

    def on_tick(self, sender, **kwargs):
        self._time += float(kwargs.get('dt', 1/60))

    def status_text(self) -> str:
        state = get_session(self.world).state
        if state.winner is not None:
            return f"{state.winner.name} wins!"
        player = state.current_player
        if state.is_animating:
            return f"{player.name} ({player.color.value}) - resolving..."
        return f"{player.name}'s turn ({player.color.value})"

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True

        display = get_or_create_display_board(self.world)
        board = display.board
        self._last_cell_layout = {}
        self._status_text = self.status_text()
        if board is None:
            return
        geometry = compute_board_geometry(self.window.width, self.window.height, board.rows, board.cols)
        tile_size, start_x, start_y = geometry
        exploding = set(display.exploding)
        # Pulse exploding cells with elapsed time.
        pulse = 0.5 + 0.5 * abs(((self._time * 4) % 2) - 1)

        orb_commands: List[Tuple[float, float, float, Tuple[int, int, int]]] = []
        for cell in board.cells():
            cx, cy = cell_center(cell.row, cell.col, geometry, board.rows)
            entry = {
                'center': (cx, cy),
                'size': tile_size,
                'count': cell.count,
                'owner': cell.owner,
                'critical': cell.count == detonation_threshold(cell.row, cell.col, board.rows, board.cols) - 1,
                'exploding': cell.position in exploding,
            }
            self._last_cell_layout[cell.position] = entry
            if cell.owner is None or cell.count == 0:
                continue
            radius = tile_size * 0.14
            for ox, oy in ORB_OFFSETS[min(cell.count, 4)]:
                orb_commands.append((cx + ox * tile_size, cy + oy * tile_size, radius, cell.owner.rgb))

        if headless:
            return

        board_w = board.cols * tile_size
        board_h = board.rows * tile_size
        arcade.draw_lbwh_rectangle_filled(start_x, start_y, board_w, board_h, BACKGROUND_FILL)
        for (row, col), entry in self._last_cell_layout.items():
            if entry['exploding']:
                cx, cy = entry['center']
                alpha = int(120 + 120 * pulse)
                arcade.draw_lbwh_rectangle_filled(
                    cx - tile_size / 2, cy - tile_size / 2, tile_size, tile_size, (*EXPLOSION_COLOR, alpha),
                )
        for col in range(board.cols + 1):
            x = start_x + col * tile_size
            arcade.draw_line(x, start_y, x, start_y + board_h, GRID_LINE_COLOR, 1)
        for row in range(board.rows + 1):
            y = start_y + row * tile_size
            arcade.draw_line(start_x, y, start_x + board_w, y, GRID_LINE_COLOR, 1)
        for x, y, radius, rgb in orb_commands:
            arcade.draw_circle_filled(x, y, radius, rgb)
            arcade.draw_circle_outline(x, y, radius, (20, 20, 20), 1)
        for entry in self._last_cell_layout.values():
            if entry['count'] > 4:
                cx, cy = entry['center']
                arcade.draw_text(str(entry['count']), cx, cy, STATUS_TEXT_COLOR, 10,
                                 anchor_x='center', anchor_y='center')

        state = get_session(self.world).state
        banner_color = state.winner.color.rgb if state.winner else state.current_player.color.rgb
        arcade.draw_text(
            self._status_text,
            self.window.width / 2,
            start_y + board_h + STATUS_BAR_HEIGHT / 2,
            banner_color,
            16,
            anchor_x='center',
            anchor_y='center',
        )
