from dataclasses import dataclass
from enum import Enum


class PlayerColor(Enum):
    """Gameplay identity of a player; ownership is always compared by color."""
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    PURPLE = "purple"
    ORANGE = "orange"
    PINK = "pink"
    CYAN = "cyan"

    @property
    def rgb(self) -> tuple[int, int, int]:
        return PALETTE[self]


PALETTE: dict[PlayerColor, tuple[int, int, int]] = {
    PlayerColor.RED: (255, 154, 162),     # #FF9AA2
    PlayerColor.BLUE: (199, 206, 234),    # #C7CEEA
    PlayerColor.GREEN: (181, 234, 215),   # #B5EAD7
    PlayerColor.YELLOW: (255, 247, 177),  # #FFF7B1
    PlayerColor.PURPLE: (224, 187, 228),  # #E0BBE4
    PlayerColor.ORANGE: (255, 218, 193),  # #FFDAC1
    PlayerColor.PINK: (248, 187, 208),    # #F8BBD0
    PlayerColor.CYAN: (178, 235, 242),    # #B2EBF2
}


@dataclass(frozen=True, slots=True)
class Player:
    id: str
    color: PlayerColor
    name: str
    is_alive: bool = True
