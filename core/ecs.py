"""
core/ecs.py — Entity-Component-System

Entities are ints. Components are any object, stored by type.
Resources (the tile map, the clock, the event bus) are singletons
stored under the reserved id ``-1``.

    w = World()
    w.set_res(TileMap.layered(10, 10))
    p = w.spawn()
    w.add(p, Position(32.0, 32.0))
    w.add(p, Miner())

    for eid, pos, miner in w.query(Position, Miner):
        ...
"""

from __future__ import annotations
from typing import Any, Iterator

_RESOURCE = -1


class World:
    def __init__(self):
        self._next_id = 0
        self._stores: dict[type, dict[int, Any]] = {}
        self._dead: set[int] = set()

    # -- Entities --

    def spawn(self) -> int:
        self._next_id += 1
        return self._next_id

    def kill(self, eid: int):
        self._dead.add(eid)

    def alive(self, eid: int) -> bool:
        return 0 < eid <= self._next_id and eid not in self._dead

    def purge(self):
        """Drop dead entities from every store. Call once per frame."""
        for store in self._stores.values():
            for eid in self._dead:
                store.pop(eid, None)
        self._dead.clear()

    # -- Components --

    def add(self, eid: int, comp: Any):
        self._stores.setdefault(type(comp), {})[eid] = comp

    def get(self, eid: int, comp_type: type) -> Any | None:
        return self._stores.get(comp_type, {}).get(eid)

    def has(self, eid: int, comp_type: type) -> bool:
        return eid in self._stores.get(comp_type, {})

    def remove(self, eid: int, comp_type: type):
        self._stores.get(comp_type, {}).pop(eid, None)

    # -- Queries --

    def query(self, *types: type) -> Iterator[tuple]:
        """Yield (eid, comp1, comp2, ...) for living entities with ALL types."""
        if not types:
            return
        stores = [self._stores.get(t, {}) for t in types]
        smallest = min(stores, key=len)
        for eid in list(smallest):
            if eid == _RESOURCE or eid in self._dead:
                continue
            if all(eid in s for s in stores):
                yield (eid, *(s[eid] for s in stores))

    def query_one(self, *types: type) -> tuple | None:
        """Return first match or None."""
        for result in self.query(*types):
            return result
        return None

    # -- Resources (singletons, not tied to entities) --

    def set_res(self, resource: Any):
        self._stores.setdefault(type(resource), {})[_RESOURCE] = resource

    def res(self, res_type: type) -> Any | None:
        return self._stores.get(res_type, {}).get(_RESOURCE)
