"""logic/player.py — Player entity creation and the render-facing handle.

``spawn_player`` assembles the player's components from tuning;
``PlayerHandle`` wraps the entity id with the small object API the
scene (and tests) use::

    world = new_world(TileMap.from_rows(rows))
    player = PlayerHandle(world, spawn_player(world, 1, 1))
    player.move("down", 5)
    if player.can_mine("down"):
        player.mine("down")
        player.run_until_idle()

Position, dimensions, current tile and the mining flags are exposed
read-only; every change goes through ``move`` / ``mine`` / ``step``.
"""

from __future__ import annotations

from core.constants import (
    PLAYER_WIDTH, PLAYER_HEIGHT, PLAYER_SPEED, PLAYER_ACCELERATION,
)
from core.ecs import World
from core.events import EventBus
from core.tilemap import TileMap
from core.tuning import get as _tun
from core.collision import clamp
from components import (
    Position, Collider, CurrentTile, Facing, Miner, Player, GameClock, DevLog,
)
from logic import mining as _mining
from logic.movement import move as _move, update_current_tile, rest_y
from logic.tick import tick_systems


def new_world(tmap: TileMap) -> World:
    """Fresh World with the resources the core systems expect."""
    world = World()
    world.set_res(tmap)
    world.set_res(GameClock())
    world.set_res(EventBus())
    world.set_res(DevLog())
    return world


def spawn_player(world: World, tile_x: int = 0, tile_y: int = 0, *,
                 width: int | None = None, height: int | None = None) -> int:
    """Create the player standing on the floor of tile (tile_x, tile_y).

    The sprite starts flush against the tile's left wall.  Sizes default
    to ``[player]`` in tuning and may not exceed one tile.
    """
    tmap = world.res(TileMap)
    w = int(width if width is not None else _tun("player", "width", PLAYER_WIDTH))
    h = int(height if height is not None else _tun("player", "height", PLAYER_HEIGHT))
    if not (0 < w <= tmap.tile_width and 0 < h <= tmap.tile_height):
        raise ValueError(f"player {w}x{h} does not fit a "
                         f"{tmap.tile_width}x{tmap.tile_height} tile")
    if not tmap.in_bounds(tile_x, tile_y):
        raise ValueError(f"spawn tile ({tile_x}, {tile_y}) is off the map")

    col = Collider(w, h)
    eid = world.spawn()
    world.add(eid, Position(float(tile_x * tmap.tile_width),
                            float(rest_y(tmap, col, tile_y))))
    world.add(eid, col)
    world.add(eid, CurrentTile(tile_x, tile_y))
    world.add(eid, Facing())
    world.add(eid, Miner())
    world.add(eid, Player(
        speed=float(_tun("player", "speed", PLAYER_SPEED)),
        acceleration=float(_tun("player", "acceleration", PLAYER_ACCELERATION)),
    ))
    update_current_tile(world, eid)
    return eid


class PlayerHandle:
    """Object-style view of the player entity."""

    def __init__(self, world: World, eid: int):
        self.world = world
        self.eid = eid

    # ── Render contract (read-only) ──────────────────────────────────

    @property
    def position(self) -> tuple[float, float]:
        pos = self.world.get(self.eid, Position)
        return pos.x, pos.y

    @property
    def dimensions(self) -> tuple[int, int]:
        col = self.world.get(self.eid, Collider)
        return col.width, col.height

    @property
    def current_tile(self) -> tuple[int, int]:
        return update_current_tile(self.world, self.eid)

    @property
    def facing(self) -> str:
        return self.world.get(self.eid, Facing).direction

    @property
    def is_mining(self) -> bool:
        return self.world.get(self.eid, Miner).is_mining

    @property
    def mining_blocked(self) -> bool:
        clock = self.world.res(GameClock)
        return self.world.get(self.eid, Miner).blocked(clock.tick if clock else 0)

    @property
    def speed(self) -> float:
        return self.world.get(self.eid, Player).speed

    @property
    def acceleration(self) -> float:
        return self.world.get(self.eid, Player).acceleration

    # ── Actions ──────────────────────────────────────────────────────

    def place(self, x: float, y: float) -> None:
        """Teleport to (x, y), clamped to the map.  Editor / test setup."""
        tmap = self.world.res(TileMap)
        col = self.world.get(self.eid, Collider)
        max_x, max_y = tmap.max_position(col.width, col.height)
        pos = self.world.get(self.eid, Position)
        pos.x = clamp(0, x, max_x)
        pos.y = clamp(0, y, max_y)
        update_current_tile(self.world, self.eid)

    def move(self, direction: str, velocity: float) -> bool:
        return _move(self.world, self.eid, direction, velocity)

    def can_mine(self, direction: str) -> bool:
        return _mining.can_mine(self.world, self.eid, direction)

    def mine(self, direction: str) -> bool:
        return _mining.mine(self.world, self.eid, direction)

    def step(self, dt: float = 0.0, held=None) -> None:
        """Advance the world by one tick."""
        tick_systems(self.world, dt, held)

    def run_until_idle(self, max_ticks: int = 10_000) -> int:
        """Tick until no dig is in progress.  Returns ticks spent."""
        ticks = 0
        while self.is_mining and ticks < max_ticks:
            self.step()
            ticks += 1
        return ticks

    def __repr__(self) -> str:
        x, y = self.position
        return (f"PlayerHandle(eid={self.eid}, pos=({x:.1f}, {y:.1f}), "
                f"tile={self.current_tile}, mining={self.is_mining})")
