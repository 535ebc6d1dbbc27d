"""components — ECS component dataclasses, organised by domain.

Submodules
----------
spatial        Position, Collider, CurrentTile, Facing
mining         Miner
resources      GameClock, Camera, Player
dev_log        DevLog

All public names are re-exported here so systems can simply
``from components import Position``.
"""

# ── Spatial ──────────────────────────────────────────────────────────
from components.spatial import Position, Collider, CurrentTile, Facing

# ── Mining ───────────────────────────────────────────────────────────
from components.mining import Miner

# ── World resources / singletons ─────────────────────────────────────
from components.resources import GameClock, Camera, Player

# ── Debug ────────────────────────────────────────────────────────────
from components.dev_log import DevLog

__all__ = [
    # spatial
    "Position", "Collider", "CurrentTile", "Facing",
    # mining
    "Miner",
    # resources
    "GameClock", "Camera", "Player",
    # debug
    "DevLog",
]
