from esper import World

from orbchain.components.display_board import DisplayBoard
from orbchain.components.game_state import GameState
from orbchain.components.session_state import SessionState
from orbchain.components.turn_state import TurnState


def get_session(world: World) -> SessionState:
    """Return the singleton SessionState; a world without one was never set up."""
    for _, session in world.get_component(SessionState):
        return session
    raise RuntimeError("SessionState not found; build the world with create_world")


def current_state(world: World) -> GameState:
    return get_session(world).state


def get_or_create_display_board(world: World) -> DisplayBoard:
    existing = list(world.get_component(DisplayBoard))
    if existing:
        return existing[0][1]
    world.create_entity(DisplayBoard())
    return list(world.get_component(DisplayBoard))[0][1]


def get_or_create_turn_state(world: World) -> TurnState:
    """Return the shared TurnState component, creating it if absent."""
    existing = list(world.get_component(TurnState))
    if existing:
        return existing[0][1]
    world.create_entity(TurnState())
    return list(world.get_component(TurnState))[0][1]
