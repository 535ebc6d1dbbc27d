"""logic/mining.py — Mining state machine.

``Idle → Mining → Idle``.  ``mine()`` only *starts* a dig; the drill
then advances one pixel per step inside ``mining_system`` (called once
per tick), so the host loop keeps rendering while the player sinks into
the tile.  When the sprite has travelled one full tile the tile it now
occupies turns from earth into tunnel.

Pacing is driven entirely by ``GameClock.tick``:

    mining.step_ticks       ticks between one-pixel steps
    mining.cooldown_ticks   ticks after a move (or a finished dig)
                            before the next dig may start

Illegal digs are silently ignored: ``can_mine()`` is the only gate and
``mine()`` returns False when it refuses.
"""

from __future__ import annotations

from core.collision import box_ranges, box_contains
from core.constants import (
    TILE_EARTH, TILE_TUNNEL, MINING_DIRECTIONS,
    MINING_STEP_TICKS, MINING_COOLDOWN_TICKS,
)
from core.ecs import World
from core.events import EventBus, MiningStarted, TileMined
from core.tilemap import TileMap
from core.tuning import get as _tun
from components import Position, Collider, Miner, Facing, GameClock, DevLog
from logic.movement import move, update_current_tile, rest_y

_OFFSETS = {"down": (0, 1), "left": (-1, 0), "right": (1, 0)}


def _tick(world: World) -> int:
    clock = world.res(GameClock)
    return clock.tick if clock else 0


def mining_target(world: World, eid: int, direction: str) -> tuple[int, int] | None:
    """Tile a dig in *direction* would convert, or None for a bad direction."""
    if direction not in _OFFSETS:
        return None
    tx, ty = update_current_tile(world, eid)
    dx, dy = _OFFSETS[direction]
    return tx + dx, ty + dy


def can_mine(world: World, eid: int, direction: str) -> bool:
    """True if *eid* may start digging in *direction* right now.

    All of these must hold:

    - not cooling down from a recent move, and not already mining;
    - the sprite sits entirely inside its current tile;
    - it stands on the tile floor with earth underneath;
    - for left/right, it is pressed flush against that tile wall;
    - the target tile is on the map and is earth.
    """
    if direction not in MINING_DIRECTIONS:
        return False
    miner = world.get(eid, Miner)
    if miner is None or miner.is_mining or miner.blocked(_tick(world)):
        return False

    tmap = world.res(TileMap)
    pos = world.get(eid, Position)
    col = world.get(eid, Collider)
    tx, ty = update_current_tile(world, eid)

    box = box_ranges(pos.x, pos.y, col.width, col.height)
    if not box_contains(tmap.tile_ranges(tx, ty), box):
        return False
    # Flush/rest tests use the box's first pixel, not the float position
    (left_px, _), (top_px, _) = box

    if top_px != rest_y(tmap, col, ty):
        return False
    if tmap.get(tx, ty + 1) != TILE_EARTH:
        return False

    if direction == "left" and left_px != tx * tmap.tile_width:
        return False
    if direction == "right" and left_px != tx * tmap.tile_width + (tmap.tile_width - col.width):
        return False

    dx, dy = _OFFSETS[direction]
    return tmap.get(tx + dx, ty + dy) == TILE_EARTH


def mine(world: World, eid: int, direction: str) -> bool:
    """Start digging in *direction*.  Returns False (no-op) if not allowed."""
    if not can_mine(world, eid, direction):
        return False

    tmap = world.res(TileMap)
    miner = world.get(eid, Miner)
    tick = _tick(world)
    target = mining_target(world, eid, direction)

    miner.is_mining = True
    miner.direction = direction
    miner.remaining_steps = tmap.tile_height if direction == "down" else tmap.tile_width
    miner.next_step_tick = tick
    miner.blocked_until = tick + _tun("mining", "cooldown_ticks", MINING_COOLDOWN_TICKS)

    facing = world.get(eid, Facing)
    if facing is not None:
        facing.direction = direction

    bus = world.res(EventBus)
    if bus:
        bus.emit(MiningStarted(eid=eid, direction=direction,
                               x=target[0], y=target[1], tick=tick))
    log = world.res(DevLog)
    if log:
        log.record("mine", "start", eid=eid, t=tick,
                   details={"dir": direction, "tile": target})
    return True


def mining_system(world: World) -> None:
    """Advance every in-progress dig by at most one step this tick."""
    tick = _tick(world)
    step_ticks = _tun("mining", "step_ticks", MINING_STEP_TICKS)
    for eid, miner in world.query(Miner):
        if not miner.is_mining or tick < miner.next_step_tick:
            continue
        move(world, eid, miner.direction, 1)
        miner.remaining_steps -= 1
        miner.next_step_tick = tick + step_ticks
        if miner.remaining_steps <= 0:
            _finish(world, eid, miner, tick)


def _finish(world: World, eid: int, miner: Miner, tick: int) -> None:
    tmap = world.res(TileMap)
    tx, ty = update_current_tile(world, eid)
    converted = tmap.get(tx, ty) == TILE_EARTH
    if converted:
        tmap.set(tx, ty, TILE_TUNNEL)
        miner.tiles_mined += 1

    miner.is_mining = False
    miner.direction = ""
    miner.remaining_steps = 0
    miner.blocked_until = tick + _tun("mining", "cooldown_ticks", MINING_COOLDOWN_TICKS)

    if converted:
        bus = world.res(EventBus)
        if bus:
            bus.emit(TileMined(eid=eid, x=tx, y=ty, tick=tick))
    log = world.res(DevLog)
    if log:
        log.record("mine", "done" if converted else "done (no earth)",
                   eid=eid, t=tick, details={"tile": (tx, ty)})
