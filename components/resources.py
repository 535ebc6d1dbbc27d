"""components.resources — World-level singletons and the player marker."""

from __future__ import annotations
from dataclasses import dataclass

from core.constants import PLAYER_SPEED, PLAYER_ACCELERATION


@dataclass
class GameClock:
    """Monotonic logical clock.

    ``tick`` counts host-loop frames and is the only time base the
    core uses (mining pace, cooldown deadlines).  ``time`` accumulates
    real ``dt`` seconds for display only.
    """
    tick: int = 0
    time: float = 0.0

    def advance(self, dt: float = 0.0) -> int:
        self.tick += 1
        self.time += dt
        return self.tick


@dataclass
class Camera:
    """Viewport state, recomputed every frame by ``logic.viewport``.

    ``offset`` is added to map-space pixels to get screen pixels.
    ``start_tile`` / ``end_tile`` bound the visible tiles (inclusive).
    """
    screen_w: int = 0
    screen_h: int = 0
    offset_x: int = 0
    offset_y: int = 0
    start_tile: tuple[int, int] = (0, 0)
    end_tile: tuple[int, int] = (0, 0)


@dataclass
class Player:
    """Marks the player entity and carries its movement tuning."""
    speed: float = PLAYER_SPEED                 # px per tick
    acceleration: float = PLAYER_ACCELERATION   # reserved, unused
