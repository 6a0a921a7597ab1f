from dataclasses import replace

from orbchain.components.player import PlayerColor
from orbchain.events.bus import (
    EventBus,
    EVENT_CELL_CLICK,
    EVENT_GAME_RESET,
    EVENT_GAME_WON,
    EVENT_NEW_GAME_REQUEST,
    EVENT_PLAYER_ELIMINATED,
    EVENT_TURN_ADVANCED,
)
from orbchain.systems.game_ops import new_game
from orbchain.systems.move_system import MoveSystem
from orbchain.systems.outcome_system import OutcomeSystem
from orbchain.systems.turn_system import TurnSystem
from orbchain.utils.session import current_state, get_or_create_display_board, get_session
from orbchain.world import create_world
from tests.helpers import board_from_rows

RED, BLUE = PlayerColor.RED, PlayerColor.BLUE


def _winning_world():
    board = board_from_rows([
        "1r 0. 0.",
        "1b 0. 0.",
    ])
    state = replace(new_game(2), board=board, moved_colors=frozenset({RED, BLUE}))
    bus = EventBus(); world = create_world(state=state)
    MoveSystem(world, bus, animate=False)
    TurnSystem(world, bus)
    OutcomeSystem(world, bus)
    return bus, world


def test_capture_announces_elimination_and_winner():
    bus, world = _winning_world()
    eliminated = []; won = []; turns = []
    bus.subscribe(EVENT_PLAYER_ELIMINATED, lambda s, **k: eliminated.append(k['player'].color))
    bus.subscribe(EVENT_GAME_WON, lambda s, **k: won.append((k['winner'].color, k['move_count'])))
    bus.subscribe(EVENT_TURN_ADVANCED, lambda s, **k: turns.append(k))
    bus.emit(EVENT_CELL_CLICK, row=0, col=0)
    assert eliminated == [BLUE]
    assert won == [(RED, 1)]
    assert turns == []
    assert current_state(world).winner.color == RED


def test_new_game_request_resets_session():
    bus, world = _winning_world()
    bus.emit(EVENT_CELL_CLICK, row=0, col=0)
    resets = []
    bus.subscribe(EVENT_GAME_RESET, lambda s, **k: resets.append(k['state']))
    bus.emit(EVENT_NEW_GAME_REQUEST)
    state = current_state(world)
    assert resets == [state]
    assert state.winner is None and state.move_count == 0
    assert state.board.total_units() == 0
    assert get_session(world).moves == []
    assert get_or_create_display_board(world).board == state.board
    bus.emit(EVENT_CELL_CLICK, row=1, col=1)
    assert current_state(world).board.cell(1, 1).owner == RED
