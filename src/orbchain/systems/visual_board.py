import logging
from collections import deque
from typing import Deque, Optional, Tuple

from esper import World

from orbchain.components.board import Board
from orbchain.components.player import PlayerColor
from orbchain.events.bus import (
    EventBus,
    EVENT_ANIMATION_COMPLETE,
    EVENT_ANIMATION_START,
    EVENT_AUTHORITATIVE_STATE,
    EVENT_REMOTE_MOVE,
)
from orbchain.systems.cascade import place_unit, run_cascade
from orbchain.utils.session import get_or_create_display_board

logger = logging.getLogger(__name__)

REPLAY_SOURCE = "replay"


class VisualBoardSystem:
    """Client-side predictor for moves decided by a remote authority.

    Each remote move is replayed locally with the shared cascade engine and
    animated wave by wave. An authoritative board that arrives mid-animation is
    held back and swapped in once playback finishes, replacing the predicted
    board rather than merging with it. Remote moves that arrive mid-animation
    are queued and played in move order.
    """
    def __init__(self, world: World, event_bus: EventBus, *, initial_board: Optional[Board] = None,
                 animate: bool = True):
        self.world = world
        self.event_bus = event_bus
        self.animate = animate
        self.is_animating = False
        self.last_move_index = -1
        self.animating_index: Optional[int] = None
        self.predicted_board: Optional[Board] = None
        self.pending_board: Optional[Board] = None
        self.pending_index: Optional[int] = None
        self.desynced = False
        self._queued: Deque[Tuple[int, int, PlayerColor, int]] = deque()
        if initial_board is not None:
            get_or_create_display_board(world).board = initial_board
        event_bus.subscribe(EVENT_REMOTE_MOVE, self.on_remote_move)
        event_bus.subscribe(EVENT_AUTHORITATIVE_STATE, self.on_authoritative_state)
        event_bus.subscribe(EVENT_ANIMATION_COMPLETE, self.on_animation_complete)

    def on_remote_move(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        color = kwargs.get('color')
        move_index = kwargs.get('move_index')
        if row is None or col is None or color is None:
            return
        if move_index is None:
            move_index = self.last_move_index + 1
        if move_index <= self.last_move_index:
            logger.debug("Ignoring duplicate remote move %d", move_index)
            return
        board = get_or_create_display_board(self.world).board
        if board is None or not board.in_bounds(row, col):
            logger.warning("Remote move %d at (%s, %s) does not fit the displayed board", move_index, row, col)
            return
        self.last_move_index = move_index
        if self.is_animating:
            self._queued.append((row, col, color, move_index))
            return
        self._play(row, col, color, move_index)

    def on_authoritative_state(self, sender, **kwargs):
        state = kwargs.get('state')
        board = kwargs.get('board') or (state.board if state is not None else None)
        if board is None:
            return
        move_index = kwargs.get('move_index')
        if self.is_animating:
            if move_index is not None and self.animating_index is not None and move_index < self.animating_index:
                logger.debug("Dropping stale authoritative board for move %d", move_index)
                return
            if move_index is not None and self.pending_index is not None and move_index < self.pending_index:
                return
            self.pending_board = board
            self.pending_index = move_index
            return
        get_or_create_display_board(self.world).board = board

    def on_animation_complete(self, sender, **kwargs):
        if kwargs.get('source') != REPLAY_SOURCE or not self.is_animating:
            return
        self._finish()

    def _play(self, row: int, col: int, color: PlayerColor, move_index: int):
        display = get_or_create_display_board(self.world)
        placed = place_unit(display.board, row, col, color)
        result = run_cascade(placed, color, stop_on_sweep=True)
        self.predicted_board = result.board
        self.animating_index = move_index
        display.board = placed
        if not self.animate:
            self.is_animating = True
            self._finish()
            return
        self.is_animating = True
        self.event_bus.emit(
            EVENT_ANIMATION_START,
            kind='detonation',
            frames=list(zip(result.waves, result.frames)),
            source=REPLAY_SOURCE,
        )

    def _finish(self):
        display = get_or_create_display_board(self.world)
        self.is_animating = False
        if self.pending_board is not None:
            if self.pending_index == self.animating_index and self.pending_board != self.predicted_board:
                self.desynced = True
                logger.warning("Predicted board for move %s diverged from the authority", self.animating_index)
            display.board = self.pending_board
            if self.pending_index is not None:
                # Queued moves up to the authoritative index are already part of that board.
                while self._queued and self._queued[0][3] <= self.pending_index:
                    self._queued.popleft()
        else:
            display.board = self.predicted_board
        display.exploding = ()
        self.pending_board = None
        self.pending_index = None
        self.animating_index = None
        if self._queued:
            self._play(*self._queued.popleft())
