"""core/events.py — Lightweight event bus.

Lets the mining system *signal* that something happened without
knowing who cares (the scene's log line, the HUD, tests).  The bus
lives as an ECS resource::

    from core.events import EventBus
    bus = world.res(EventBus)
    bus.emit(TileMined(eid=1, x=4, y=7))

Consumers subscribe with a callable::

    bus.subscribe("TileMined", my_handler)

And the tick pipeline drains once per frame::

    bus.drain()          # calls all handlers for pending events

Design rules:
  - Events are plain dataclasses — no behaviour.
  - ``emit()`` is O(1) (just appends).
  - ``drain()`` processes all queued events in FIFO order.
  - Handlers may emit new events; those are processed in the same drain.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable
from collections import defaultdict
import traceback


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class MiningStarted:
    """An entity began drilling into the tile at (x, y)."""
    eid: int
    direction: str
    x: int
    y: int
    tick: int = 0


@dataclass
class TileMined:
    """The tile at (x, y) turned from earth into tunnel."""
    eid: int
    x: int
    y: int
    tick: int = 0


# ═══════════════════════════════════════════════════════════════════
#  Event Bus
# ═══════════════════════════════════════════════════════════════════

class EventBus:
    """Fire-and-forget event bus stored as an ECS resource."""

    def __init__(self):
        self._queue: list[Any] = []
        self._subs: dict[str, list[Callable]] = defaultdict(list)
        self._stats: dict[str, int] = defaultdict(int)

    def emit(self, event) -> None:
        """Queue an event for processing on next ``drain()``."""
        self._queue.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Register *handler* for events whose class name is *event_type*."""
        self._subs[event_type].append(handler)

    def drain(self) -> int:
        """Process all queued events.  Returns number processed."""
        processed = 0
        safety = 1000  # handlers that keep re-emitting can't hang the frame
        while self._queue and safety > 0:
            batch = self._queue[:]
            self._queue.clear()
            for event in batch:
                name = type(event).__name__
                self._stats[name] += 1
                for handler in self._subs.get(name, []):
                    try:
                        handler(event)
                    except Exception as exc:
                        print(f"[EVENT] handler error for {name}: {exc}")
                        traceback.print_exc()
            processed += len(batch)
            safety -= 1
        return processed

    def clear(self) -> None:
        """Discard all pending events."""
        self._queue.clear()

    def stats(self) -> dict[str, int]:
        """Return cumulative event counts by type."""
        return dict(self._stats)

    def pending_count(self) -> int:
        return len(self._queue)

    def __repr__(self) -> str:
        return f"EventBus(pending={len(self._queue)}, subs={len(self._subs)})"
