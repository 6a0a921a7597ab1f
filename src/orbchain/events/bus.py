from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_CELL_CLICK = "cell_click"                    # payload: row, col


# ============================================================================
# MOVES
# ============================================================================
EVENT_MOVE_REQUEST = "move_request"                # payload: row, col, color=PlayerColor|None
EVENT_MOVE_ACCEPTED = "move_accepted"              # payload: move=MoveRecord
EVENT_MOVE_REJECTED = "move_rejected"              # payload: row, col, color, reason=str
EVENT_MOVE_RESOLVED = "move_resolved"              # payload: previous=GameState, state=GameState, outcome=MoveOutcome


# ============================================================================
# CASCADE & ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"          # payload: kind=str, frames=list[(DetonationWave, Board)], source=str
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: kind=str, source=str
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(r,c),...], source=str
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, source=str


# ============================================================================
# TURNS & OUTCOME
# ============================================================================
EVENT_TURN_ADVANCED = "turn_advanced"              # payload: previous_index=int, new_index=int, color=PlayerColor
EVENT_PLAYER_ELIMINATED = "player_eliminated"      # payload: player=Player
EVENT_GAME_WON = "game_won"                        # payload: winner=Player, move_count=int
EVENT_NEW_GAME_REQUEST = "new_game_request"        # payload: None
EVENT_GAME_RESET = "game_reset"                    # payload: state=GameState


# ============================================================================
# NETWORK BOUNDARY
# ============================================================================
EVENT_MOVE_SUBMIT = "move_submit"                  # payload: row, col, color=PlayerColor
EVENT_REMOTE_MOVE = "remote_move"                  # payload: row, col, color=PlayerColor, move_index=int
EVENT_AUTHORITATIVE_STATE = "authoritative_state"  # payload: state=GameState, move_index=int
