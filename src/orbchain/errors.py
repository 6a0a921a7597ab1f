"""Gameplay rejections and engine invariant violations."""
from __future__ import annotations


class GameRuleError(Exception):
    """A move was refused; the session state is left untouched."""

    reason = "rejected"


class InvalidMove(GameRuleError, ValueError):
    def __init__(self, row: int, col: int, reason: str):
        super().__init__(f"invalid move at ({row}, {col}): {reason}")
        self.row = row
        self.col = col
        self.reason = reason


class AnimationInProgress(GameRuleError):
    reason = "animation_in_progress"


class NotYourTurn(GameRuleError):
    reason = "not_your_turn"


class GameFinished(GameRuleError):
    reason = "game_finished"


class OutOfOrderMove(GameRuleError):
    reason = "out_of_order"


class CascadeLimitExceeded(RuntimeError):
    """The cascade kept detonating past the configured wave ceiling."""

    def __init__(self, waves: int):
        super().__init__(f"cascade did not settle after {waves} waves")
        self.waves = waves
