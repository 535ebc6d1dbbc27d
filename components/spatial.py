"""components.spatial — Position, size, and tile occupancy.

All coordinates and dimensions are in pixels, map space
(top-left of the map is (0, 0), y grows downward).
"""

from __future__ import annotations
from dataclasses import dataclass

from core.constants import PLAYER_WIDTH, PLAYER_HEIGHT


@dataclass
class Position:
    """Top-left corner of the sprite."""
    x: float = 0.0        # px
    y: float = 0.0        # px


@dataclass
class Collider:
    """Sprite box used for every tile test.  Never larger than one tile."""
    width: int = PLAYER_WIDTH     # px
    height: int = PLAYER_HEIGHT   # px


@dataclass
class CurrentTile:
    """The tile the entity mostly occupies (>50% rule).

    Derived data — ``logic.movement.update_current_tile`` rewrites it
    from Position before every movement or mining decision.  Nothing
    else should assign to it.
    """
    x: int = 0
    y: int = 0

    def as_tuple(self) -> tuple[int, int]:
        return self.x, self.y


@dataclass
class Facing:
    """Last direction the entity tried to move in.

    Values: 'right', 'left', 'up', 'down'
    Read by the renderer to draw the drill side.
    """
    direction: str = "down"
