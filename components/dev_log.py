"""components.dev_log — Structured movement / mining event log.

A ring-buffer resource that records tick-stamped things the core did
to the player: wall snaps, mining start/finish, rejected digs.  The
debug overlay (Tab) shows the newest lines; tests read it to check
*why* something happened.

Usage:
    log = world.res(DevLog)
    if log:
        log.record("mine", "start", eid=eid, t=clock.tick,
                   details={"dir": "down", "tile": (4, 7)})

Each entry is a dict:
    {"t": int, "eid": int, "cat": str, "msg": str, "details": dict | None}
"""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class DevLog:
    """Ring-buffer of core events for the debug overlay."""

    entries: list[dict] = field(default_factory=list)
    max_entries: int = 200
    _paused: bool = False

    # If non-empty, only entries whose ``cat`` is in the set are kept.
    cat_filter: set[str] = field(default_factory=set)

    def record(self, cat: str, msg: str, *, eid: int = 0, t: int = 0,
               details: dict | None = None) -> None:
        if self._paused:
            return
        if self.cat_filter and cat not in self.cat_filter:
            return
        self.entries.append({
            "t": t,
            "eid": eid,
            "cat": cat,
            "msg": msg,
            "details": details,
        })
        if len(self.entries) > self.max_entries:
            del self.entries[:-self.max_entries]

    def clear(self):
        self.entries.clear()

    def pause(self):
        self._paused = True

    def resume(self):
        self._paused = False

    def recent(self, n: int = 10) -> list[dict]:
        """Return the *n* most recent entries (newest last)."""
        return self.entries[-n:]

    def for_cat(self, cat: str, n: int = 50) -> list[dict]:
        """Return last *n* entries in a category."""
        return [e for e in self.entries if e["cat"] == cat][-n:]

    def format(self, entry: dict) -> str:
        text = f"[{entry['t']:>6}] {entry['cat']:<5} {entry['msg']}"
        if entry["details"]:
            text += " " + " ".join(f"{k}={v}" for k, v in entry["details"].items())
        return text
