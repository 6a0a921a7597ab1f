from dataclasses import dataclass
from typing import Optional, Tuple

from orbchain.components.board import Board


@dataclass(slots=True)
class DisplayBoard:
    """Board the presentation layer draws, plus the wave currently exploding.

    Only animation and replay systems write it; renderers treat it as read-only.
    """
    board: Optional[Board] = None
    exploding: Tuple[Tuple[int, int], ...] = ()
