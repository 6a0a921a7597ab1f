from orbchain.events.bus import EventBus, EVENT_CELL_CLICK, EVENT_MOUSE_PRESS, EVENT_MOVE_REQUEST
from orbchain.systems.input import InputSystem
from orbchain.systems.move_system import MoveSystem
from orbchain.systems.render import RenderSystem
from orbchain.ui.layout import cell_at_point, cell_center, compute_board_geometry
from orbchain.utils.session import current_state
from orbchain.world import create_world
from tests.helpers import DummyWindow


def test_geometry_fits_window_and_centers_board():
    tile, start_x, start_y = compute_board_geometry(800, 600, 9, 6)
    assert tile * 6 <= 800 and start_y + tile * 9 <= 600
    assert abs((start_x + tile * 6 / 2) - 400) < 1


def test_cell_centers_map_back_to_cells():
    geometry = compute_board_geometry(800, 600, 9, 6)
    for row, col in [(0, 0), (8, 5), (4, 2)]:
        x, y = cell_center(row, col, geometry, 9)
        assert cell_at_point(x, y, geometry, 9, 6) == (row, col)
    assert cell_at_point(0, 0, geometry, 9, 6) is None


def test_row_zero_is_drawn_at_the_top():
    geometry = compute_board_geometry(800, 600, 9, 6)
    _, top_y = cell_center(0, 0, geometry, 9)
    _, bottom_y = cell_center(8, 0, geometry, 9)
    assert top_y > bottom_y


def test_left_click_emits_cell_click():
    bus = EventBus(); world = create_world(player_count=2); window = DummyWindow()
    InputSystem(bus, window, world)
    clicks = []
    bus.subscribe(EVENT_CELL_CLICK, lambda s, **k: clicks.append((k['row'], k['col'])))
    geometry = compute_board_geometry(window.width, window.height, 9, 6)
    x, y = cell_center(3, 2, geometry, 9)
    bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=1)
    bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=4)
    bus.emit(EVENT_MOUSE_PRESS, x=1, y=1, button=1)
    assert clicks == [(3, 2)]


def test_render_layout_cache_headless():
    bus = EventBus(); world = create_world(player_count=2); window = DummyWindow()
    MoveSystem(world, bus, animate=False)
    render = RenderSystem(world, bus, window)
    bus.emit(EVENT_MOVE_REQUEST, row=0, col=0)
    render.process()
    assert len(render._last_cell_layout) == 9 * 6
    entry = render._last_cell_layout[(0, 0)]
    assert entry['count'] == 1 and entry['critical']
    assert not render._last_cell_layout[(4, 3)]['critical']
    state = current_state(world)
    assert render.status_text() == f"{state.current_player.name}'s turn (blue)"
