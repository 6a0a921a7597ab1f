from esper import World

from orbchain.events.bus import EventBus, EVENT_CELL_CLICK, EVENT_MOUSE_PRESS
from orbchain.ui.layout import cell_at_point, compute_board_geometry
from orbchain.utils.session import get_or_create_display_board


class InputSystem:
    """Maps left clicks on the board to EVENT_CELL_CLICK; move rules live in MoveSystem."""
    def __init__(self, event_bus: EventBus, window, world: World):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        # Left button (1) only.
        if kwargs.get('button') != 1:
            return
        board = get_or_create_display_board(self.world).board
        if board is None:
            return
        geometry = compute_board_geometry(self.window.width, self.window.height, board.rows, board.cols)
        cell = cell_at_point(x, y, geometry, board.rows, board.cols)
        if cell is None:
            return
        row, col = cell
        self.event_bus.emit(EVENT_CELL_CLICK, row=row, col=col)
