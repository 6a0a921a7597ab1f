from __future__ import annotations

from typing import List, Sequence

from orbchain.components.player import PlayerColor
from orbchain.constants import MAX_PLAYERS

ALL_COLORS: tuple[PlayerColor, ...] = tuple(PlayerColor)


def default_colors(player_count: int) -> List[PlayerColor]:
    """First ``player_count`` colors in palette order."""
    if not 0 < player_count <= MAX_PLAYERS:
        raise ValueError(f"unsupported player count: {player_count}")
    return list(ALL_COLORS[:player_count])


def cycle_color(colors: Sequence[PlayerColor], index: int) -> List[PlayerColor]:
    """Move player ``index`` to the next palette color nobody else has picked."""
    current = colors[index]
    taken = {color for i, color in enumerate(colors) if i != index}
    position = ALL_COLORS.index(current)
    candidate = current
    for step in range(1, len(ALL_COLORS) + 1):
        candidate = ALL_COLORS[(position + step) % len(ALL_COLORS)]
        if candidate not in taken:
            break
    updated = list(colors)
    updated[index] = candidate
    return updated
