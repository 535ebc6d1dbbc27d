"""test_input.py — Held-intent control, the viewport, and the plumbing
(event bus, dev log, ECS) the core systems lean on.

Run:  python test_input.py
"""
from __future__ import annotations
import sys, traceback

import pygame

from core import tuning
tuning.reset()

from core.ecs import World
from core.constants import TILE_TUNNEL
from core.events import EventBus, MiningStarted, TileMined
from core.tilemap import TileMap
from components import Camera, DevLog, Position, Miner
from logic.input_manager import InputManager
from logic.player import new_world, spawn_player, PlayerHandle
from logic.viewport import update_camera, to_screen


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    msg = f"  [FAIL] {label}"
    if detail:
        msg += f" — {detail}"
    print(msg)

def check(cond: bool, label: str, detail: str = ""):
    if cond:
        ok(label)
    else:
        fail(label, detail)
        raise AssertionError(f"{label} {detail}".strip())


def _player(rows: list[str], tile: tuple[int, int]) -> PlayerHandle:
    world = new_world(TileMap.from_rows(rows))
    return PlayerHandle(world, spawn_player(world, *tile))


def _key(kind: int, key: int) -> pygame.event.Event:
    return pygame.event.Event(kind, key=key)


SKY = ["." * 10] * 10
LEDGE = [
    "..........",
    "..#.......",
    "##########",
    "##########",
]


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 1:  INPUT MANAGER
# ═══════════════════════════════════════════════════════════════════════

def test_input_manager():
    print("\n=== 1: InputManager ===")
    im = InputManager()
    im.begin_frame()
    im.feed(_key(pygame.KEYDOWN, pygame.K_a))
    im.feed(_key(pygame.KEYDOWN, pygame.K_UP))
    check(im.held_intents() == {"move_left", "move_up"}, "WASD and arrows both bind",
          f"{im.held_intents()}")
    check(not im.just("toggle_debug"), "no discrete intent yet")

    im.feed(_key(pygame.KEYDOWN, pygame.K_TAB))
    check(im.just("toggle_debug"), "Tab → toggle_debug this frame")
    im.begin_frame()
    check(not im.just("toggle_debug"), "discrete intents last one frame")
    check(im.held("move_left"), "held keys survive begin_frame()")

    im.feed(_key(pygame.KEYUP, pygame.K_a))
    check(not im.held("move_left"), "key up releases the intent")

    quit_ev = pygame.event.Event(pygame.QUIT)
    im.feed(quit_ev)
    check(im.raw_events == [quit_ev], "non-key events are stashed for the scene")

    im.release_all()
    check(im.held_intents() == set(), "release_all() forgets every held key")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 2:  INPUT SYSTEM
# ═══════════════════════════════════════════════════════════════════════

def test_gravity_and_flight():
    print("\n=== 2: Gravity and flight ===")
    p = _player(SKY, (3, 3))
    p.step(held=set())
    check(p.position == (96, 101), "nothing held → gravity pulls 5 px", f"{p.position}")

    p.step(held={"move_up"})
    check(abs(p.position[1] - (101 - 2.36)) < 1e-9 and p.facing == "up",
          "up held → flies by speed, gravity suspended", f"{p.position}")

    y = p.position[1]
    p.step(held={"move_left", "move_right"})
    check(p.position == (96, y + 5), "left + right cancel out; only gravity applies",
          f"{p.position}")

    p.step(held={"move_right"})
    check(abs(p.position[0] - (96 + 2.36)) < 1e-9 and p.facing == "right",
          "right held in open sky → walks", f"{p.position}")


def test_held_direction_digs():
    print("\n=== 3: Held direction starts a dig ===")
    p = _player(LEDGE, (3, 1))
    p.step(held={"move_left"})
    check(p.is_mining, "pushing left against earth starts a sideways dig")
    check(p.facing == "left", "facing follows the held direction")
    check(p.position == (95, 32), "first drill step lands on the same tick",
          f"{p.position}")

    p = _player(LEDGE, (3, 1))
    p.step(held={"move_down"})
    check(p.is_mining and p.position == (96, 33), "down held on earth digs down",
          f"{p.position}")

    p.step(held={"move_up"})
    check(p.position == (96, 34), "input is ignored while the drill runs",
          f"{p.position}")
    p.step(held={"move_left"})
    check(p.position == (96, 35) and p.facing == "down",
          "held left does not steer mid-dig", f"{p.position} {p.facing}")

    p.run_until_idle()
    check(p.world.res(TileMap).get(3, 2) == TILE_TUNNEL, "the dug tile is tunnel")


def test_walk_then_dig():
    print("\n=== 4: Walking delays a dig ===")
    p = _player(LEDGE, (3, 1))
    p.place(100, 32)
    p.step(held={"move_left"})
    check(not p.is_mining and p.position[0] < 100, "not flush yet → walks left",
          f"{p.position}")
    p.step(held={"move_left"})
    check(p.position == (96, 32) and not p.is_mining,
          "snapped against the wall, cooldown still running", f"{p.position}")

    ticks = 0
    while not p.is_mining and ticks < 20:
        p.step(held={"move_left"})
        ticks += 1
    check(p.is_mining, "dig starts once the cooldown lapses", f"after {ticks} ticks")
    check(ticks <= 6, "within the cooldown window", f"{ticks}")


def test_stock_speed_reaches_dig():
    print("\n=== 4b: Stock speed still lines up for a dig ===")
    p = _player(["......", "..#...", "######"], (0, 1))
    ticks = 0
    while not p.is_mining and ticks < 60:
        p.step(held={"move_right"})
        ticks += 1
    check(p.is_mining, "holding right into a wall ends in a dig",
          f"pos={p.position} after {ticks} ticks")
    p.run_until_idle()
    check(p.world.res(TileMap).get(2, 1) == TILE_TUNNEL, "the wall tile was dug")

    p = _player(["......", "......", "######"], (1, 1))
    p.step(held={"move_up"})
    p.step(held={"move_up"})
    for _ in range(10):
        p.step(held=set())
    check(p.position == (32, 32), "hop lands exactly on the floor", f"{p.position}")
    ticks = 0
    while not p.is_mining and ticks < 20:
        p.step(held={"move_down"})
        ticks += 1
    check(p.is_mining, "down held after landing digs", f"after {ticks} ticks")
    p.run_until_idle()
    check(p.world.res(TileMap).get(1, 2) == TILE_TUNNEL, "the floor tile was dug")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 3:  VIEWPORT
# ═══════════════════════════════════════════════════════════════════════

def test_viewport():
    print("\n=== 5: Viewport ===")
    tmap = TileMap.layered(40, 24)
    cam = Camera(screen_w=320, screen_h=320)

    update_camera(cam, tmap, 160, 160)
    check((cam.offset_x, cam.offset_y) == (0, 0), "centred near the origin",
          f"{cam.offset_x}, {cam.offset_y}")
    check(cam.start_tile == (0, 0), "start clamped to the map", f"{cam.start_tile}")
    check(cam.end_tile == (11, 11), "half-screen of tiles plus one spare",
          f"{cam.end_tile}")
    check(to_screen(cam, 32, 64) == (32, 64), "to_screen with zero offset")

    update_camera(cam, tmap, 1264, 752)
    check(cam.offset_x == -1104 and cam.offset_y == -592, "far corner offset",
          f"{cam.offset_x}, {cam.offset_y}")
    check(cam.end_tile == (39, 23), "end clamped to the last tile", f"{cam.end_tile}")
    check(cam.start_tile == (33, 17), "start trails by half a screen",
          f"{cam.start_tile}")
    check(to_screen(cam, 1264, 752) == (160, 160), "player drawn at screen centre")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 4:  EVENT BUS / DEV LOG / ECS
# ═══════════════════════════════════════════════════════════════════════

def test_event_bus():
    print("\n=== 6: EventBus ===")
    bus = EventBus()
    seen = []

    def boom(ev):
        raise RuntimeError("handler failure")

    bus.subscribe("TileMined", boom)
    bus.subscribe("TileMined", seen.append)
    bus.emit(TileMined(eid=1, x=2, y=3))
    check(bus.pending_count() == 1, "emit() only queues")
    check(bus.drain() == 1, "drain() processes the queue")
    check(len(seen) == 1, "a failing handler does not stop the others")
    check(bus.stats() == {"TileMined": 1}, "stats count by event type")

    chained = []
    bus.subscribe("MiningStarted", lambda ev: chained.append(ev))
    bus.subscribe("TileMined", lambda ev: bus.emit(
        MiningStarted(eid=ev.eid, direction="down", x=ev.x, y=ev.y + 1)) if ev.x == 9 else None)
    bus.emit(TileMined(eid=1, x=9, y=0))
    check(bus.drain() == 2, "events emitted by handlers drain in the same call")
    check(len(chained) == 1, "re-emitted event reached its subscriber")

    bus.emit(TileMined(eid=1, x=0, y=0))
    bus.clear()
    check(bus.pending_count() == 0, "clear() drops pending events")


def test_dev_log():
    print("\n=== 7: DevLog ===")
    log = DevLog(max_entries=3)
    for i in range(5):
        log.record("move", f"snap {i}", t=i)
    check([e["msg"] for e in log.entries] == ["snap 2", "snap 3", "snap 4"],
          "ring buffer keeps the newest entries")
    check(log.recent(1)[0]["t"] == 4, "recent() newest last")

    log.pause()
    log.record("mine", "start")
    check(log.for_cat("mine") == [], "paused log records nothing")
    log.resume()

    log.cat_filter = {"mine"}
    log.record("move", "snap up")
    log.record("mine", "done", details={"tile": (1, 2)})
    check(log.for_cat("move")[-1]["msg"] == "snap 4", "filtered category dropped")
    entry = log.for_cat("mine")[-1]
    check("done" in log.format(entry) and "tile=(1, 2)" in log.format(entry),
          "format() includes message and details", log.format(entry))

    log.clear()
    check(log.entries == [], "clear()")


def test_world():
    print("\n=== 8: World ===")
    w = World()
    a, b = w.spawn(), w.spawn()
    w.add(a, Position(1.0, 2.0))
    w.add(a, Miner())
    w.add(b, Position(3.0, 4.0))
    check([eid for eid, *_ in w.query(Position, Miner)] == [a], "query() intersects stores")
    check(w.query_one(Miner)[0] == a, "query_one() returns the first match")

    w.set_res(DevLog())
    check(isinstance(w.res(DevLog), DevLog), "resources stored by type")
    check([eid for eid, _ in w.query(DevLog)] == [], "resources never show up in queries")

    w.kill(a)
    check(not w.alive(a) and w.alive(b), "kill() marks dead")
    check([eid for eid, _ in w.query(Position)] == [b], "dead entities skipped")
    w.purge()
    check(w.get(a, Position) is None, "purge() removes components")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("InputManager", test_input_manager),
        ("Gravity and flight", test_gravity_and_flight),
        ("Held direction digs", test_held_direction_digs),
        ("Walk then dig", test_walk_then_dig),
        ("Stock speed dig", test_stock_speed_reaches_dig),
        ("Viewport", test_viewport),
        ("EventBus", test_event_bus),
        ("DevLog", test_dev_log),
        ("World", test_world),
    ]
    for name, fn in sections:
        try:
            fn()
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    print(f"\n{'=' * 60}")
    print(f"  Input Tests: {_passed} passed, {_failed} failed")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
