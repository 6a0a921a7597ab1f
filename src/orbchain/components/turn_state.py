from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class TurnState:
    """Tracks the cascade currently being played back for the local session."""

    action_source: Optional[str] = None
    cascade_active: bool = False
    cascade_depth: int = 0
