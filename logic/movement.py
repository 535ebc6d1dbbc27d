"""logic/movement.py — Tile collision resolver.

Moves the player one axis at a time and decides, against the
``TileMap`` resource, whether the move is legal.

A move in direction D examines five neighbours of the current tile:
the tile straight ahead, the two tiles beside it on the perpendicular
axis, and the two diagonals ahead.  If the candidate sprite box
overlaps any of them that is earth, the move is refused and the sprite
is snapped flush against the obstacle instead.

While an entity is mining, down/left/right moves ignore earth so the
drill can advance into the tile it is converting.
"""

from __future__ import annotations
import math

from core.collision import clamp, box_ranges, boxes_overlap
from core.constants import TILE_EARTH, DIRECTIONS, MINING_COOLDOWN_TICKS
from core.ecs import World
from core.tilemap import TileMap
from core.tuning import get as _tun
from components import Position, Collider, CurrentTile, Miner, GameClock, DevLog

# (dx, dy) tile offsets checked for each direction: ahead first.
NEIGHBOURS: dict[str, tuple[tuple[int, int], ...]] = {
    "up":    ((0, -1), (-1, 0), (1, 0), (-1, -1), (1, -1)),
    "down":  ((0, 1), (-1, 0), (1, 0), (-1, 1), (1, 1)),
    "left":  ((-1, 0), (0, -1), (0, 1), (-1, -1), (-1, 1)),
    "right": ((1, 0), (0, -1), (0, 1), (1, -1), (1, 1)),
}


# ── Current tile ─────────────────────────────────────────────────────

def tile_index(pos: float, size: int, tile_size: int) -> int:
    """Tile index along one axis using the >50% overlap rule.

    Starts from the tile holding the sprite's leading (top/left) edge
    and moves on to the next tile only once more than half of the
    sprite has crossed into it.
    """
    index = int(math.floor(pos / tile_size))
    if pos - index * tile_size > tile_size - size / 2:
        index += 1
    return index


def compute_current_tile(pos: Position, col: Collider,
                         tmap: TileMap) -> tuple[int, int]:
    return (tile_index(pos.x, col.width, tmap.tile_width),
            tile_index(pos.y, col.height, tmap.tile_height))


def update_current_tile(world: World, eid: int) -> tuple[int, int]:
    """Recompute and store the entity's CurrentTile from its Position."""
    pos = world.get(eid, Position)
    col = world.get(eid, Collider)
    tile = compute_current_tile(pos, col, world.res(TileMap))
    cur = world.get(eid, CurrentTile)
    if cur is None:
        world.add(eid, CurrentTile(*tile))
    else:
        cur.x, cur.y = tile
    return tile


# ── Geometry helpers ─────────────────────────────────────────────────

def candidate_position(pos: Position, col: Collider, tmap: TileMap,
                       direction: str, velocity: float) -> tuple[float, float]:
    """Position after moving *velocity* px in *direction*, clamped to the map."""
    x, y = pos.x, pos.y
    if direction == "up":
        y -= velocity
    elif direction == "down":
        y += velocity
    elif direction == "left":
        x -= velocity
    elif direction == "right":
        x += velocity
    max_x, max_y = tmap.max_position(col.width, col.height)
    return clamp(0, x, max_x), clamp(0, y, max_y)


def blocking_tiles(tmap: TileMap, tile: tuple[int, int], direction: str,
                   x: float, y: float, col: Collider) -> list[tuple[int, int]]:
    """Earth neighbours of *tile* that the box at (x, y) would overlap.

    Neighbours off the map (``None``) never block.
    """
    box = box_ranges(x, y, col.width, col.height)
    hits = []
    for dx, dy in NEIGHBOURS[direction]:
        tx, ty = tile[0] + dx, tile[1] + dy
        if tmap.get(tx, ty) != TILE_EARTH:
            continue
        if boxes_overlap(box, tmap.tile_ranges(tx, ty)):
            hits.append((tx, ty))
    return hits


def rest_y(tmap: TileMap, col: Collider, ty: int) -> int:
    """Y at which the sprite stands on the floor of tile row *ty*."""
    return ty * tmap.tile_height + (tmap.tile_height - col.height)


def snap_to_edge(pos: Position, col: Collider, tmap: TileMap,
                 tile: tuple[int, int], direction: str) -> bool:
    """Push the sprite flush against the side of *tile* it was moving toward.

    Moves forward along *direction*, or drops the sub-pixel remainder
    when the sprite already covers the edge pixel (a down/right move
    can stop at e.g. x=40.12 with the box flush at pixel 40).  Returns
    True if the position changed.
    """
    tx, ty = tile
    if direction == "down":
        target = rest_y(tmap, col, ty)
        if pos.y != target and math.floor(pos.y) <= target:
            pos.y = target
            return True
    elif direction == "up":
        target = ty * tmap.tile_height
        if target < pos.y:
            pos.y = target
            return True
    elif direction == "left":
        target = tx * tmap.tile_width
        if target < pos.x:
            pos.x = target
            return True
    elif direction == "right":
        target = tx * tmap.tile_width + (tmap.tile_width - col.width)
        if pos.x != target and math.floor(pos.x) <= target:
            pos.x = target
            return True
    return False


# ── Public operation ─────────────────────────────────────────────────

def move(world: World, eid: int, direction: str, velocity: float) -> bool:
    """Try to move *eid* by *velocity* px in *direction*.

    Returns True when the entity actually moved.  Refused moves,
    zero-distance moves (e.g. against the map edge) and unknown
    directions return False and never raise.  A successful move starts
    (or restarts) the mining cooldown.
    """
    if direction not in DIRECTIONS:
        return False

    tmap = world.res(TileMap)
    clock = world.res(GameClock)
    pos = world.get(eid, Position)
    col = world.get(eid, Collider)
    miner = world.get(eid, Miner)
    tick = clock.tick if clock else 0

    tile = update_current_tile(world, eid)
    nx, ny = candidate_position(pos, col, tmap, direction, velocity)

    drilling = miner is not None and miner.is_mining and direction != "up"
    if not drilling:
        hits = blocking_tiles(tmap, tile, direction, nx, ny, col)
        if hits:
            if snap_to_edge(pos, col, tmap, tile, direction):
                update_current_tile(world, eid)
                log = world.res(DevLog)
                if log:
                    log.record("move", f"snap {direction}", eid=eid, t=tick,
                               details={"pos": (pos.x, pos.y), "hit": hits[0]})
            return False

    if nx == pos.x and ny == pos.y:
        return False

    pos.x, pos.y = nx, ny
    update_current_tile(world, eid)
    if miner is not None:
        miner.blocked_until = tick + _tun("mining", "cooldown_ticks",
                                          MINING_COOLDOWN_TICKS)
    return True
