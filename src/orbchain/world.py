from __future__ import annotations

from typing import Optional, Sequence

from esper import World

from orbchain.components.display_board import DisplayBoard
from orbchain.components.game_state import GameState
from orbchain.components.player import PlayerColor
from orbchain.components.session_state import SessionState
from orbchain.components.turn_state import TurnState
from orbchain.systems.game_ops import new_game


def create_world(
    *,
    player_count: Optional[int] = None,
    colors: Optional[Sequence[PlayerColor]] = None,
    names: Optional[Sequence[str]] = None,
    state: Optional[GameState] = None,
) -> World:
    """Build a world holding one game session.

    ``state`` seeds the session directly (used by tests and replays); otherwise a
    fresh game is created from the roster arguments.
    """
    world = World()
    initial = state if state is not None else new_game(player_count, colors, names)

    session_entity = world.create_entity()
    world.add_component(session_entity, SessionState(state=initial))
    world.add_component(session_entity, TurnState())

    # The presentation layer reads its own board so animation never touches session state.
    world.create_entity(DisplayBoard(board=initial.board))
    return world
