from dataclasses import dataclass
from typing import Tuple

from orbchain.components.board import Board
from orbchain.components.detonation_wave import DetonationWave


@dataclass(slots=True)
class DetonationAnimation:
    """One queued wave of a cascade playback; ``board`` is the snapshot after it fires."""
    wave: DetonationWave
    board: Board
    source: str
    depth: int
    final: bool = False
    progress: float = 0.0
