"""
core/app.py — Pygame application shell

Handles the window, main loop, and scene stack.
You don't edit this file to build the game.
You write Scenes and push/pop them.

    app = App(title="Digger", width=960, height=640)
    app.push_scene(MineScene(...))
    app.run()
"""

from __future__ import annotations
import pygame
from core.scene import Scene
from core.ecs import World


class App:
    def __init__(self, title: str = "Digger", width: int = 960, height: int = 640,
                 fps: int = 60, world: World | None = None):
        pygame.init()
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = fps
        self.dt = 0.0

        # Scene stack; only the top scene is active
        self._scenes: list[Scene] = []

        # The ECS world, shared across all scenes
        self.world = world if world is not None else World()

        self.font = pygame.font.SysFont("monospace", 14)
        self.font_lg = pygame.font.SysFont("monospace", 20)

    # -- Scene management --

    @property
    def scene(self) -> Scene | None:
        return self._scenes[-1] if self._scenes else None

    def push_scene(self, scene: Scene):
        if self._scenes:
            self._scenes[-1].on_exit(self)
        self._scenes.append(scene)
        scene.on_enter(self)

    def pop_scene(self):
        if self._scenes:
            self._scenes[-1].on_exit(self)
            self._scenes.pop()
        if self._scenes:
            self._scenes[-1].on_enter(self)
        else:
            self.running = False

    # -- Main loop --

    def run(self):
        while self.running:
            self.dt = self.clock.tick(self.fps) / 1000.0

            events = []
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.VIDEORESIZE:
                    self.screen = pygame.display.set_mode(
                        (event.w, event.h), pygame.RESIZABLE)
                    events.append(event)
                else:
                    events.append(event)

            if self.scene:
                self.scene.handle_events(events, self)
                self.scene.update(self.dt, self)
                self.scene.draw(self.screen, self)

            pygame.display.flip()

        pygame.quit()

    @property
    def current_fps(self) -> float:
        return self.clock.get_fps()

    # -- Convenience --

    def draw_text(self, surface: pygame.Surface, text: str, x: int, y: int,
                  color=(255, 255, 255), font=None):
        """Quick text draw. Returns the rect for layout chaining."""
        f = font or self.font
        img = f.render(text, True, color)
        return surface.blit(img, (x, y))
