"""
core/scene.py — Scene interface

Every screen in the game is a Scene. The app holds a stack of them.
Only the top scene gets event/update/draw calls.

To make a new scene:

    class MyScene(Scene):
        def on_enter(self, app):
            # setup, called when scene becomes active
            pass

        def handle_events(self, events, app):
            # this frame's pygame events, in order
            pass

        def update(self, dt, app):
            # one simulation tick; dt is seconds since last frame
            pass

        def draw(self, surface, app):
            # draw to the surface
            pass
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    def on_enter(self, app: App):
        """Called when this scene becomes active (pushed or revealed)."""
        pass

    def on_exit(self, app: App):
        """Called when this scene is removed or covered."""
        pass

    def handle_events(self, events: list[pygame.event.Event], app: App):
        """Process this frame's pygame events."""
        pass

    def update(self, dt: float, app: App):
        """Advance the simulation by one tick."""
        pass

    def draw(self, surface: pygame.Surface, app: App):
        """Draw to the screen surface."""
        pass
