import logging
from dataclasses import replace
from typing import Optional

from esper import World

from orbchain.components.player import PlayerColor
from orbchain.errors import GameRuleError
from orbchain.events.bus import (
    EventBus,
    EVENT_ANIMATION_COMPLETE,
    EVENT_ANIMATION_START,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_CELL_CLICK,
    EVENT_MOVE_ACCEPTED,
    EVENT_MOVE_REJECTED,
    EVENT_MOVE_REQUEST,
    EVENT_MOVE_RESOLVED,
)
from orbchain.systems.game_ops import MoveOutcome, resolve_move
from orbchain.utils.session import get_or_create_display_board, get_or_create_turn_state, get_session

logger = logging.getLogger(__name__)

LOCAL_SOURCE = "local"


class MoveSystem:
    """Local game loop: validates, resolves and commits moves for the session in this world.

    Flow:
      - EVENT_CELL_CLICK (current player) or EVENT_MOVE_REQUEST resolves the move at once
        through the pure pipeline.
      - If the move detonated anything and animation is enabled, the session is flagged
        as animating and the wave log goes to the AnimationSystem; the resolved state is
        committed on the matching EVENT_ANIMATION_COMPLETE.
      - Moves arriving while a cascade is animating are rejected, not queued.
    """
    def __init__(self, world: World, event_bus: EventBus, *, animate: bool = True):
        self.world = world
        self.event_bus = event_bus
        self.animate = animate
        self.event_bus.subscribe(EVENT_CELL_CLICK, self.on_cell_click)
        self.event_bus.subscribe(EVENT_MOVE_REQUEST, self.on_move_request)
        self.event_bus.subscribe(EVENT_CASCADE_STEP, self.on_cascade_step)
        self.event_bus.subscribe(EVENT_ANIMATION_COMPLETE, self.on_animation_complete)

    def on_cell_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.submit(row, col)

    def on_move_request(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.submit(row, col, kwargs.get('color'))

    def submit(self, row: int, col: int, color: Optional[PlayerColor] = None) -> bool:
        session = get_session(self.world)
        state = session.state
        try:
            outcome = resolve_move(state, row, col, color)
        except GameRuleError as exc:
            logger.debug("Rejected move at (%s, %s): %s", row, col, exc)
            self.event_bus.emit(EVENT_MOVE_REJECTED, row=row, col=col, color=color, reason=exc.reason)
            return False
        session.moves.append(outcome.move)
        self.event_bus.emit(EVENT_MOVE_ACCEPTED, move=outcome.move)

        turn_state = get_or_create_turn_state(self.world)
        turn_state.action_source = "move"
        turn_state.cascade_depth = 0
        if self.animate and outcome.waves:
            turn_state.cascade_active = True
            session.state = replace(state, board=outcome.placed_board, is_animating=True)
            session.pending = outcome
            get_or_create_display_board(self.world).board = outcome.placed_board
            self.event_bus.emit(
                EVENT_ANIMATION_START,
                kind='detonation',
                frames=list(zip(outcome.waves, outcome.frames)),
                source=LOCAL_SOURCE,
            )
        else:
            self._commit(outcome)
        return True

    def on_cascade_step(self, sender, **kwargs):
        if kwargs.get('source') != LOCAL_SOURCE:
            return
        state = get_or_create_turn_state(self.world)
        state.cascade_depth = kwargs.get('depth', state.cascade_depth + 1)

    def on_animation_complete(self, sender, **kwargs):
        if kwargs.get('kind') != 'detonation' or kwargs.get('source') != LOCAL_SOURCE:
            return
        pending = get_session(self.world).pending
        if pending is None:
            return
        self._commit(pending)

    def _commit(self, outcome: MoveOutcome) -> None:
        session = get_session(self.world)
        previous = session.state
        session.state = outcome.state
        session.pending = None
        display = get_or_create_display_board(self.world)
        display.board = outcome.state.board
        display.exploding = ()
        turn_state = get_or_create_turn_state(self.world)
        turn_state.cascade_active = False
        turn_state.action_source = None
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=len(outcome.waves), source=LOCAL_SOURCE)
        self.event_bus.emit(EVENT_MOVE_RESOLVED, previous=previous, state=outcome.state, outcome=outcome)
