from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from orbchain.components.game_state import GameState
from orbchain.components.move_record import MoveRecord
from orbchain.components.player import PlayerColor
from orbchain.errors import GameRuleError
from orbchain.events.bus import (
    EventBus,
    EVENT_AUTHORITATIVE_STATE,
    EVENT_MOVE_REJECTED,
    EVENT_MOVE_SUBMIT,
    EVENT_REMOTE_MOVE,
)
from orbchain.systems.game_ops import new_game, replay_moves, resolve_move

logger = logging.getLogger(__name__)


class AuthoritativeSession:
    """Trusted copy of a networked game.

    Moves come in as EVENT_MOVE_SUBMIT. Accepted ones are numbered and broadcast
    as EVENT_REMOTE_MOVE followed by EVENT_AUTHORITATIVE_STATE; everything else
    is answered with EVENT_MOVE_REJECTED and leaves the state untouched.
    """

    def __init__(
        self,
        event_bus: EventBus,
        state: Optional[GameState] = None,
        *,
        player_count: Optional[int] = None,
        colors: Optional[Sequence[PlayerColor]] = None,
    ) -> None:
        self.event_bus = event_bus
        self.state = state if state is not None else new_game(player_count, colors)
        self.initial_state = self.state
        self.moves: List[MoveRecord] = []
        event_bus.subscribe(EVENT_MOVE_SUBMIT, self.on_move_submit)

    def on_move_submit(self, sender, **payload) -> None:
        row = payload.get("row")
        col = payload.get("col")
        if row is None or col is None:
            return
        self.submit(row, col, payload.get("color"))

    def submit(self, row: int, col: int, color: Optional[PlayerColor]) -> Optional[MoveRecord]:
        try:
            outcome = resolve_move(self.state, row, col, color)
        except GameRuleError as exc:
            logger.info("Rejected move at (%s, %s) from %s: %s", row, col, color.value if color else None, exc)
            self.event_bus.emit(EVENT_MOVE_REJECTED, row=row, col=col, color=color, reason=exc.reason)
            return None
        self.state = outcome.state
        move = outcome.move
        self.moves.append(move)
        for player in outcome.eliminated:
            logger.info("%s eliminated on move %d", player.name, move.move_index)
        if self.state.winner is not None:
            logger.info("Game finished after %d moves, winner %s", self.state.move_count, self.state.winner.name)
        self.event_bus.emit(EVENT_REMOTE_MOVE, row=move.row, col=move.col, color=move.color,
                            move_index=move.move_index)
        self.event_bus.emit(EVENT_AUTHORITATIVE_STATE, state=self.state, move_index=move.move_index)
        return move

    def rebuild(self) -> GameState:
        """Recompute the current state from the recorded move log."""
        return replay_moves(self.initial_state, self.moves)
