from dataclasses import dataclass
from typing import Tuple

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class DetonationWave:
    """Cells that detonated simultaneously within one cascade step (row-major order)."""
    origins: Tuple[Position, ...]

    def __len__(self) -> int:
        return len(self.origins)

    def __iter__(self):
        return iter(self.origins)
