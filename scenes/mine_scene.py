"""
scenes/mine_scene.py — Side-on digging view

Renders the tile grid and the player on top of it.
Camera follows the player.  Arrows / WASD:

    Up      fly (suspends gravity)
    Left    walk, or dig sideways when pressed flush against earth
    Right   walk, or dig sideways when pressed flush against earth
    Down    dig into the earth below

Tab toggles the debug overlay (current tile + dev log), G the grid,
F5 reloads tuning, Esc quits.
"""

from __future__ import annotations
import pygame

from core.scene import Scene
from core.app import App
from core.constants import BACKGROUND_COLOR
from core.events import EventBus
from core.tilemap import TileMap
from core import tuning as tuning_mod
from components import Camera
from logic.input_manager import InputManager
from logic.player import PlayerHandle
from logic.tick import tick_systems
from logic.viewport import update_camera
from scenes.mine_draw import draw_tiles, draw_player, draw_hud, draw_debug_overlay


class MineScene(Scene):
    def __init__(self, player_eid: int):
        self.player_eid = player_eid
        self.player: PlayerHandle | None = None
        self.input = InputManager()
        self.show_debug = False
        self.show_grid = False

    def on_enter(self, app: App):
        self.player = PlayerHandle(app.world, self.player_eid)
        if not app.world.res(Camera):
            app.world.set_res(Camera())

        bus = app.world.res(EventBus)
        if bus is None:
            bus = EventBus()
            app.world.set_res(bus)

        def _on_tile_mined(ev):
            print(f"[MINE] tunnel dug at ({ev.x}, {ev.y}) on tick {ev.tick}")

        bus.subscribe("TileMined", _on_tile_mined)

    def handle_events(self, events: list[pygame.event.Event], app: App):
        self.input.begin_frame()
        for event in events:
            self.input.feed(event)
        for event in self.input.raw_events:
            if event.type == pygame.WINDOWFOCUSLOST:
                self.input.release_all()

        if self.input.just("quit"):
            app.pop_scene()
        if self.input.just("toggle_debug"):
            self.show_debug = not self.show_debug
        if self.input.just("toggle_grid"):
            self.show_grid = not self.show_grid
        if self.input.just("tuning_reload"):
            tuning_mod.reload()

    def update(self, dt: float, app: App):
        tick_systems(app.world, dt, held=self.input.held_intents())

    def draw(self, surface: pygame.Surface, app: App):
        tmap = app.world.res(TileMap)
        cam = app.world.res(Camera)
        cam.screen_w, cam.screen_h = surface.get_size()

        x, y = self.player.position
        w, h = self.player.dimensions
        update_camera(cam, tmap, x + w / 2, y + h / 2)

        surface.fill(BACKGROUND_COLOR)
        highlight = self.player.current_tile if self.show_debug else None
        draw_tiles(surface, tmap, cam, highlight, self.show_grid)
        draw_player(surface, self.player, cam)
        draw_hud(surface, app, self.player, tmap)
        if self.show_debug:
            draw_debug_overlay(surface, app, self.player)
