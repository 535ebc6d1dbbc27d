"""logic/viewport.py — Camera that keeps the player centred.

Pure arithmetic on the ``Camera`` resource; the scene calls
``update_camera`` once per frame with the player's centre point and
then draws only tiles in ``start_tile..end_tile`` shifted by the offset.
"""

from __future__ import annotations
import math

from components import Camera
from core.tilemap import TileMap


def update_camera(cam: Camera, tmap: TileMap, px: float, py: float) -> None:
    """Centre *cam* on map pixel (px, py) and recompute the visible tiles.

    One spare tile is kept on every side so partially visible tiles at
    the screen edge are still drawn.
    """
    cam.offset_x = int(math.floor(cam.screen_w / 2 - px))
    cam.offset_y = int(math.floor(cam.screen_h / 2 - py))

    tx = int(math.floor(px / tmap.tile_width))
    ty = int(math.floor(py / tmap.tile_height))
    half_w = math.ceil(cam.screen_w / 2 / tmap.tile_width)
    half_h = math.ceil(cam.screen_h / 2 / tmap.tile_height)

    cam.start_tile = (max(0, tx - 1 - half_w), max(0, ty - 1 - half_h))
    cam.end_tile = (min(tmap.width - 1, tx + 1 + half_w),
                    min(tmap.height - 1, ty + 1 + half_h))


def to_screen(cam: Camera, x: float, y: float) -> tuple[int, int]:
    """Map-space pixel → screen pixel."""
    return int(cam.offset_x + x), int(cam.offset_y + y)
