"""components.mining — Per-entity drilling state."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Miner:
    """Mining state machine data: ``Idle → Mining → Idle``.

    ``blocked_until`` is the cooldown deadline (GameClock tick).  While
    ``clock.tick < blocked_until`` the entity has moved too recently to
    start mining.  Moves push the deadline forward; nothing ever has to
    cancel a timer.

    While ``is_mining`` is True, ``direction`` / ``remaining_steps`` /
    ``next_step_tick`` describe the drill in progress and
    ``logic.mining.mining_system`` advances it one pixel per step.
    """
    is_mining: bool = False
    direction: str = ""
    remaining_steps: int = 0
    next_step_tick: int = 0
    blocked_until: int = 0
    tiles_mined: int = 0

    def blocked(self, tick: int) -> bool:
        return tick < self.blocked_until
