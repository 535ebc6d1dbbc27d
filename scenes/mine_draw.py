"""scenes/mine_draw.py — Drawing helpers for MineScene.

Everything here is read-only: tiles, the player box and the HUD are
drawn from the TileMap / PlayerHandle state after the tick has run.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import pygame

from core.constants import (
    TILE_COLORS, TILE_NAMES, CURRENT_TILE_COLOR, PLAYER_COLOR,
)
from core.tilemap import TileMap
from components import Camera, GameClock, DevLog
from logic.viewport import to_screen

if TYPE_CHECKING:
    from core.app import App
    from logic.player import PlayerHandle


def draw_tiles(surface: pygame.Surface, tmap: TileMap, cam: Camera,
               highlight: tuple[int, int] | None = None,
               show_grid: bool = False):
    (sx, sy), (ex, ey) = cam.start_tile, cam.end_tile
    tw, th = tmap.tile_width, tmap.tile_height
    for y in range(sy, ey + 1):
        for x in range(sx, ex + 1):
            color = TILE_COLORS.get(tmap.tiles[y][x], (255, 0, 255))
            if highlight == (x, y):
                color = CURRENT_TILE_COLOR
            rect = pygame.Rect(*to_screen(cam, x * tw, y * th), tw, th)
            pygame.draw.rect(surface, color, rect)
            if show_grid:
                pygame.draw.rect(surface, (255, 255, 255), rect, 1)


def draw_player(surface: pygame.Surface, player: PlayerHandle, cam: Camera):
    x, y = player.position
    w, h = player.dimensions
    rect = pygame.Rect(*to_screen(cam, x, y), w, h)
    pygame.draw.rect(surface, PLAYER_COLOR, rect)

    # Drill nub on the facing side
    nub = 4
    facing = player.facing
    if facing == "left":
        tip = pygame.Rect(rect.left - nub, rect.centery - nub // 2, nub, nub)
    elif facing == "right":
        tip = pygame.Rect(rect.right, rect.centery - nub // 2, nub, nub)
    elif facing == "up":
        tip = pygame.Rect(rect.centerx - nub // 2, rect.top - nub, nub, nub)
    else:
        tip = pygame.Rect(rect.centerx - nub // 2, rect.bottom, nub, nub)
    color = (255, 255, 0) if player.is_mining else (200, 200, 200)
    pygame.draw.rect(surface, color, tip)


def draw_hud(surface: pygame.Surface, app: App, player: PlayerHandle,
             tmap: TileMap):
    app.draw_text(surface, f"FPS: {app.current_fps:.0f}", 10, 10,
                  color=PLAYER_COLOR, font=app.font_lg)
    tx, ty = player.current_tile
    kind = TILE_NAMES.get(tmap.get(tx, ty), "?")
    state = "mining" if player.is_mining else (
        "cooldown" if player.mining_blocked else "ready")
    app.draw_text(surface, f"Tile ({tx}, {ty}) {kind}  [{state}]", 10, 36)


def draw_debug_overlay(surface: pygame.Surface, app: App, player: PlayerHandle):
    x, y = player.position
    clock = app.world.res(GameClock)
    lines = [
        f"pos=({x:.2f}, {y:.2f})  tick={clock.tick if clock else 0}",
    ]
    log = app.world.res(DevLog)
    if log:
        lines += [log.format(e) for e in log.recent(8)]
    yy = surface.get_height() - 16 * len(lines) - 8
    for line in lines:
        app.draw_text(surface, line, 10, yy, color=(230, 230, 230))
        yy += 16
