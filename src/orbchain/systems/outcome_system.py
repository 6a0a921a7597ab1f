from __future__ import annotations

import logging

from esper import World

from orbchain.events.bus import (
    EventBus,
    EVENT_GAME_RESET,
    EVENT_GAME_WON,
    EVENT_MOVE_RESOLVED,
    EVENT_NEW_GAME_REQUEST,
    EVENT_PLAYER_ELIMINATED,
)
from orbchain.systems.game_ops import reset_game
from orbchain.utils.session import get_or_create_display_board, get_or_create_turn_state, get_session

logger = logging.getLogger(__name__)


class OutcomeSystem:
    """Announces eliminations and the winner, and starts a new game on request."""

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_MOVE_RESOLVED, self._on_move_resolved)
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self._on_new_game_request)

    def _on_move_resolved(self, sender, **payload) -> None:
        outcome = payload.get("outcome")
        state = payload.get("state")
        previous = payload.get("previous")
        if outcome is not None:
            for player in outcome.eliminated:
                logger.info("%s (%s) has been eliminated", player.name, player.color.value)
                self.event_bus.emit(EVENT_PLAYER_ELIMINATED, player=player)
        if state is None or state.winner is None:
            return
        if previous is not None and previous.winner is not None:
            return
        logger.info("%s wins after %d moves", state.winner.name, state.move_count)
        self.event_bus.emit(EVENT_GAME_WON, winner=state.winner, move_count=state.move_count)

    def _on_new_game_request(self, sender, **payload) -> None:
        session = get_session(self.world)
        session.state = reset_game(session.state)
        session.moves.clear()
        session.pending = None
        display = get_or_create_display_board(self.world)
        display.board = session.state.board
        display.exploding = ()
        turn_state = get_or_create_turn_state(self.world)
        turn_state.action_source = None
        turn_state.cascade_active = False
        turn_state.cascade_depth = 0
        logger.info("New game started with %d players", len(session.state.players))
        self.event_bus.emit(EVENT_GAME_RESET, state=session.state)
