"""core/tilemap.py — The tile grid the player walks on and digs through.

A ``TileMap`` wraps a row-major ``list[list[int]]`` of tile ids
(``tiles[y][x]``) together with the pixel size of one tile.  It lives
as an ECS resource::

    tmap = world.res(TileMap)
    if tmap.get(tx, ty + 1) == TILE_EARTH:
        ...

Lookups outside the grid return ``None`` instead of raising, so callers
can probe neighbours of an edge tile without bounds checks.  ``None``
must always be treated as "open" by blocking tests.

Maps are authored as strings, one character per tile (see
``TILE_LEGEND`` in ``core/constants.py``)::

    [map]
    tile_width = 32
    tile_height = 32
    rows = [
        "..........",
        "##########",
    ]
"""

from __future__ import annotations
import tomllib
from pathlib import Path

from core.constants import (
    TILE_SKY, TILE_EARTH, TILE_LEGEND, TILE_WIDTH, TILE_HEIGHT,
)


class TileMap:
    def __init__(self, tiles: list[list[int]],
                 tile_width: int = TILE_WIDTH, tile_height: int = TILE_HEIGHT):
        if not tiles or not tiles[0]:
            raise ValueError("tile map must have at least one row and column")
        width = len(tiles[0])
        for y, row in enumerate(tiles):
            if len(row) != width:
                raise ValueError(
                    f"row {y} has {len(row)} tiles, expected {width}")
        if tile_width <= 0 or tile_height <= 0:
            raise ValueError("tile dimensions must be positive")
        self.tiles = tiles
        self.width = width
        self.height = len(tiles)
        self.tile_width = int(tile_width)
        self.tile_height = int(tile_height)

    # ── Construction ─────────────────────────────────────────────────

    @classmethod
    def from_rows(cls, rows: list[str], tile_width: int = TILE_WIDTH,
                  tile_height: int = TILE_HEIGHT) -> TileMap:
        """Build a map from legend strings (``.`` sky, ``#`` earth, ...)."""
        tiles: list[list[int]] = []
        for y, row in enumerate(rows):
            parsed = []
            for x, ch in enumerate(row):
                if ch not in TILE_LEGEND:
                    raise ValueError(f"unknown tile {ch!r} at ({x}, {y})")
                parsed.append(TILE_LEGEND[ch])
            tiles.append(parsed)
        return cls(tiles, tile_width, tile_height)

    @classmethod
    def from_toml(cls, path: str | Path) -> TileMap:
        """Load the ``[map]`` table of a TOML file."""
        with open(path, "rb") as f:
            data = tomllib.load(f)
        table = data.get("map")
        if not isinstance(table, dict) or "rows" not in table:
            raise ValueError(f"{path}: missing [map] table with 'rows'")
        tmap = cls.from_rows(
            list(table["rows"]),
            int(table.get("tile_width", TILE_WIDTH)),
            int(table.get("tile_height", TILE_HEIGHT)),
        )
        print(f"[MAP] Loaded {tmap.width}x{tmap.height} map from {path}")
        return tmap

    @classmethod
    def layered(cls, width: int, height: int, sky_rows: int = 1,
                tile_width: int = TILE_WIDTH,
                tile_height: int = TILE_HEIGHT) -> TileMap:
        """Flat world: *sky_rows* rows of sky on top, earth below."""
        tiles = [[TILE_SKY if y < sky_rows else TILE_EARTH
                  for _ in range(width)] for y in range(height)]
        return cls(tiles, tile_width, tile_height)

    def copy(self) -> TileMap:
        return TileMap([row[:] for row in self.tiles],
                       self.tile_width, self.tile_height)

    # ── Access ───────────────────────────────────────────────────────

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> int | None:
        """Tile id at (x, y), or ``None`` outside the grid."""
        if not self.in_bounds(x, y):
            return None
        return self.tiles[y][x]

    def set(self, x: int, y: int, tile: int) -> None:
        """Unchecked write — the caller guarantees (x, y) is in bounds."""
        self.tiles[y][x] = tile

    def relative(self, tile: tuple[int, int], dx: int, dy: int) -> int | None:
        """Tile id offset (dx, dy) from *tile*, or ``None``."""
        return self.get(tile[0] + dx, tile[1] + dy)

    def count(self, tile: int) -> int:
        return sum(row.count(tile) for row in self.tiles)

    # ── Pixel geometry ───────────────────────────────────────────────

    def tile_ranges(self, x: int, y: int
                    ) -> tuple[tuple[int, int], tuple[int, int]]:
        """Inclusive pixel ranges ``(x_range, y_range)`` covered by a tile."""
        left = x * self.tile_width
        top = y * self.tile_height
        return ((left, left + self.tile_width - 1),
                (top, top + self.tile_height - 1))

    def max_position(self, w: int, h: int) -> tuple[float, float]:
        """Largest top-left pixel position a *w*×*h* sprite may occupy."""
        x_off = self.tile_width - w
        y_off = self.tile_height - h
        return (self.tile_width * (self.width - 1) + x_off,
                self.tile_height * (self.height - 1) + y_off)

    def pixel_size(self) -> tuple[int, int]:
        return self.width * self.tile_width, self.height * self.tile_height

    def __repr__(self) -> str:
        return (f"TileMap({self.width}x{self.height}, "
                f"tile={self.tile_width}x{self.tile_height}, "
                f"earth={self.count(TILE_EARTH)})")
