"""logic/tick.py — System tick orchestration.

One call to ``tick_systems`` is one frame of the simulation:

    1. advance the GameClock
    2. turn held direction intents into player actions (input_system)
    3. advance any in-progress dig (mining_system)
    4. drain the event bus

Usage::

    from logic.tick import tick_systems
    tick_systems(world, dt, held=input_mgr.held_intents())
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Iterable

from components import GameClock, Player, Miner, Facing
from core.constants import GRAVITY
from core.events import EventBus
from core.tuning import get as _tun
from logic.movement import move
from logic.mining import can_mine, mine, mining_system

if TYPE_CHECKING:
    from core.ecs import World


def input_system(world: "World", held: Iterable[str]) -> None:
    """Apply one tick of player control from the held intents.

    Nothing happens while the player is mining.  Otherwise gravity
    pulls the player down unless the fly key (up) is held; left or
    right (not both) digs sideways when a dig is possible and walks
    otherwise; up flies; down starts digging downward.
    """
    result = world.query_one(Player, Miner)
    if result is None:
        return
    eid, player, miner = result
    if miner.is_mining:
        return

    held = set(held)
    up = "move_up" in held
    down = "move_down" in held
    left = "move_left" in held
    right = "move_right" in held

    if not up:
        move(world, eid, "down", _tun("physics", "gravity", GRAVITY))

    horizontal = None
    if left and not right:
        horizontal = "left"
    elif right and not left:
        horizontal = "right"

    facing = world.get(eid, Facing)
    if horizontal is not None:
        if facing is not None:
            facing.direction = horizontal
        if can_mine(world, eid, horizontal):
            mine(world, eid, horizontal)
        else:
            move(world, eid, horizontal, player.speed)

    # A sideways dig that just started owns the player until it ends
    if miner.is_mining:
        return

    if up:
        if facing is not None:
            facing.direction = "up"
        move(world, eid, "up", player.speed)

    if down:
        mine(world, eid, "down")


def tick_systems(world: "World", dt: float = 0.0,
                 held: Iterable[str] | None = None) -> None:
    """Run all core gameplay systems for one frame.

    Parameters
    ----------
    dt : float
        Real seconds since the last frame (display only; pacing is
        tick-based).
    held : iterable of str, optional
        Held intents for this frame.  ``None`` skips player input
        entirely (tests, cutscenes).
    """
    clock = world.res(GameClock)
    if clock is None:
        clock = GameClock()
        world.set_res(clock)
    clock.advance(dt)

    if held is not None:
        input_system(world, held)

    mining_system(world)

    bus = world.res(EventBus)
    if bus:
        bus.drain()
