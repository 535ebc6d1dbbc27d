"""logic/input_manager.py — Intent-based input layer.

Sits between raw pygame events and game actions.  The scene feeds in
raw events; the manager maps them to *intents*.  Systems read intents
and never touch raw keycodes.

Usage (in mine_scene):

    self.input = InputManager()
    # each frame:
    self.input.begin_frame()
    for event in events:
        self.input.feed(event)

    if self.input.just("toggle_debug"):  # discrete press
        ...
    tick_systems(world, dt, held=self.input.held_intents())

Held state is tracked from KEYDOWN / KEYUP events rather than polled
with ``pygame.key.get_pressed()``, so the manager works (and can be
tested) without a display.
"""

from __future__ import annotations
import pygame


# ── Intent names ────────────────────────────────────────────────────
# Held:      move_up  move_down  move_left  move_right
# Discrete:  toggle_debug  toggle_grid  tuning_reload  quit


# ── Default key bindings ────────────────────────────────────────────

_HELD_BINDS: dict[str, tuple[int, ...]] = {
    "move_up":      (pygame.K_UP, pygame.K_w),
    "move_down":    (pygame.K_DOWN, pygame.K_s),
    "move_left":    (pygame.K_LEFT, pygame.K_a),
    "move_right":   (pygame.K_RIGHT, pygame.K_d),
}

_PRESS_BINDS: dict[str, tuple[int, ...]] = {
    "toggle_debug":  (pygame.K_TAB,),
    "toggle_grid":   (pygame.K_g,),
    "tuning_reload": (pygame.K_F5,),
    "quit":          (pygame.K_ESCAPE,),
}


class InputManager:
    """Maps key down / key up events to held and pressed intents.

    Call ``begin_frame()`` before processing a frame's events and
    ``feed(event)`` for each one; then query ``held()`` / ``just()``.
    """

    def __init__(self):
        # Keys currently down
        self._down: set[int] = set()
        # Intents pressed *this frame* (rising edge)
        self._pressed: set[str] = set()
        # Stash for events the scene still needs (QUIT, resize, ...)
        self.raw_events: list[pygame.event.Event] = []

    # ── frame lifecycle ─────────────────────────────────────────

    def begin_frame(self):
        """Call at the start of each frame before feeding events."""
        self._pressed.clear()
        self.raw_events.clear()

    def feed(self, event: pygame.event.Event):
        """Feed a raw pygame event."""
        if event.type == pygame.KEYDOWN:
            self._down.add(event.key)
            for intent, keys in _PRESS_BINDS.items():
                if event.key in keys:
                    self._pressed.add(intent)
        elif event.type == pygame.KEYUP:
            self._down.discard(event.key)
        else:
            self.raw_events.append(event)

    def release_all(self):
        """Forget held keys (window lost focus)."""
        self._down.clear()

    # ── queries ─────────────────────────────────────────────────

    def just(self, intent: str) -> bool:
        """True if the intent was triggered this frame."""
        return intent in self._pressed

    def held(self, intent: str) -> bool:
        """True while any key bound to *intent* is down."""
        return any(k in self._down for k in _HELD_BINDS.get(intent, ()))

    def held_intents(self) -> set[str]:
        """All held movement intents, as consumed by ``input_system``."""
        return {intent for intent in _HELD_BINDS if self.held(intent)}
