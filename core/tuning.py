"""core/tuning.py — Data-driven tuning constants.

All gameplay numbers live in ``data/tuning.toml`` and are loaded once
at startup.  Any system can read a value with::

    from core.tuning import get
    gravity = get("physics", "gravity", 5.0)

The defaults passed to ``get()`` come from ``core/constants.py`` so the
game still runs (with stock values) when the file is missing.

Hot-reload: call ``reload()`` to re-read the file.  In-game, press F5.
"""

from __future__ import annotations
import tomllib
from pathlib import Path


_data: dict = {}
_path: Path | None = None


def load(path: str | Path | None = None) -> None:
    """Load (or reload) tuning constants from *path*.

    If *path* is ``None``, default to ``data/tuning.toml`` relative to
    the project root (one level above ``core/``).
    """
    global _data, _path

    if path is None:
        root = Path(__file__).resolve().parent.parent
        path = root / "data" / "tuning.toml"
    else:
        path = Path(path)

    _path = path

    if not path.exists():
        print(f"[TUNING] {path} not found — using defaults")
        _data = {}
        return

    with open(path, "rb") as f:
        _data = tomllib.load(f)

    count = _count_leaves(_data)
    print(f"[TUNING] Loaded {count} values from {path}")


def reload() -> None:
    """Re-read the tuning file from disk (hot-reload)."""
    load(_path)


def reset() -> None:
    """Forget every loaded value so ``get()`` falls back to defaults."""
    global _data
    _data = {}


def _node(section_path: str) -> dict | None:
    """The table at dotted *section_path*, or None if any part is missing."""
    node = _data
    for part in section_path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    return node if isinstance(node, dict) else None


def get(section: str, key: str, default=None):
    """Read a tuning value.

    *section* uses dot-notation to traverse nested tables, e.g.
    ``"mining"`` looks up ``[mining]``.

    >>> get("mining", "cooldown_ticks", 6)
    6
    """
    node = _node(section)
    if node is None:
        return default
    return node.get(key, default)


def section(section_path: str) -> dict:
    """Return an entire section dict (shallow copy), or empty dict."""
    node = _node(section_path)
    return dict(node) if node is not None else {}


def _count_leaves(d: dict) -> int:
    return sum(_count_leaves(v) if isinstance(v, dict) else 1 for v in d.values())
