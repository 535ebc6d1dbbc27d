"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.

Unit System
-----------
All gameplay distances are measured in **pixels**.  The map is a grid
of fixed-size tiles; a position is the top-left corner of a sprite in
map space (before the camera offset is applied).

    Distance / position     px
    Speed / gravity         px per tick
    Time                    ticks  (one tick = one frame of the host loop)

At the default 60 FPS a tick is ~16.7 ms, so the mining pace
(1 tick per pixel) and the post-move cooldown (6 ticks ≈ 100 ms) match
the feel of the browser prototype.

Every value here is only a *default* — ``data/tuning.toml`` overrides
them at startup (see ``core/tuning.py``).
"""

# Tile IDs  (must match TILE_COLORS and the legend in data/map.toml)
TILE_SKY     = 0
TILE_EARTH   = 1
TILE_TUNNEL  = 2
TILE_SURFACE = 3      # unclassified / default ground cover

TILE_NAMES = {
    TILE_SKY: "sky",
    TILE_EARTH: "earth",
    TILE_TUNNEL: "tunnel",
    TILE_SURFACE: "surface",
}

# Single-character legend used by map rows (data/map.toml, tests)
TILE_LEGEND = {
    ".": TILE_SKY,
    "#": TILE_EARTH,
    "=": TILE_TUNNEL,
    "_": TILE_SURFACE,
}

# ── Grid ────────────────────────────────────────────────────────────
TILE_WIDTH  = 32      # px
TILE_HEIGHT = 32      # px

# ── Player ──────────────────────────────────────────────────────────
# Narrower than a tile so it can stand flush against either wall;
# as tall as a tile so "resting on the floor" == "aligned to the tile top".
PLAYER_WIDTH  = 24    # px
PLAYER_HEIGHT = 32    # px
PLAYER_SPEED  = 2.36  # px / tick
PLAYER_ACCELERATION = 0.1   # reserved

# ── Physics ─────────────────────────────────────────────────────────
GRAVITY = 5.0         # px / tick, applied while the fly key is not held

# ── Mining ──────────────────────────────────────────────────────────
MINING_STEP_TICKS     = 1   # ticks between one-pixel drilling steps
MINING_COOLDOWN_TICKS = 6   # ticks after a move before mining is allowed

# Directions
DIRECTIONS = ("up", "down", "left", "right")
MINING_DIRECTIONS = ("down", "left", "right")

# Render
TILE_COLORS = {
    TILE_SKY:     (134, 197, 218),
    TILE_EARTH:   (150, 75, 0),
    TILE_TUNNEL:  (198, 137, 61),
    TILE_SURFACE: (90, 164, 87),
}
CURRENT_TILE_COLOR = (50, 205, 50)   # debug highlight
PLAYER_COLOR = (255, 0, 0)
BACKGROUND_COLOR = (0, 0, 0)
