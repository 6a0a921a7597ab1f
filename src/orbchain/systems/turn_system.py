import logging

from esper import World

from orbchain.events.bus import (
    EventBus,
    EVENT_MOVE_RESOLVED,
    EVENT_TURN_ADVANCED,
)

logger = logging.getLogger(__name__)


class TurnSystem:
    """Publishes turn rotation once a move has fully resolved.

    The next index is already decided by the move pipeline; this system only
    announces it. Nothing is published when the move ended the game.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_MOVE_RESOLVED, self.on_move_resolved)

    def on_move_resolved(self, sender, **payload):
        state = payload.get('state')
        outcome = payload.get('outcome')
        if state is None or state.winner is not None:
            return
        previous_index = outcome.previous_index if outcome is not None else None
        if previous_index is None:
            previous = payload.get('previous')
            previous_index = previous.current_player_index if previous is not None else state.current_player_index
        player = state.current_player
        logger.debug("Turn passes from seat %d to %s", previous_index, player.name)
        self.event_bus.emit(
            EVENT_TURN_ADVANCED,
            previous_index=previous_index,
            new_index=state.current_player_index,
            color=player.color,
        )
