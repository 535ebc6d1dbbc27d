"""core/collision.py — Low-level integer AABB primitives.

These live in ``core/`` (not ``logic/``) because the tile map, the
movement resolver and the mining guard all need them.  Keeping them
here prevents a circular dependency.

Pixel convention
----------------
A sprite at a float position covers whole pixels starting at the
*floored* coordinate::

    pixels covered on x = [floor(x), floor(x) + width - 1]

Tiles are always pixel-aligned, so tile ``tx`` covers
``[tx * tile_w, (tx + 1) * tile_w - 1]``.  Every overlap and
containment test in the game goes through this one convention.
"""

from __future__ import annotations
import math


def clamp(lo: float, value: float, hi: float) -> float:
    """Clamp *value* between *lo* and *hi* (inclusive)."""
    return min(hi, max(lo, value))


def pixel_range(start: float, size: int) -> tuple[int, int]:
    """Inclusive pixel span ``(first, last)`` covered by a box edge."""
    first = int(math.floor(start))
    return first, first + int(size) - 1


def ranges_overlap(a: tuple[int, int], b: tuple[int, int]) -> bool:
    """True if the inclusive integer ranges *a* and *b* share a pixel."""
    return max(a[0], b[0]) <= min(a[1], b[1])


def range_contains(outer: tuple[int, int], inner: tuple[int, int]) -> bool:
    """True if every pixel of *inner* lies inside *outer*."""
    return outer[0] <= inner[0] and inner[1] <= outer[1]


def box_ranges(x: float, y: float, w: int, h: int
               ) -> tuple[tuple[int, int], tuple[int, int]]:
    """Return ``(x_range, y_range)`` for the box at (x, y)."""
    return pixel_range(x, w), pixel_range(y, h)


def boxes_overlap(a: tuple[tuple[int, int], tuple[int, int]],
                  b: tuple[tuple[int, int], tuple[int, int]]) -> bool:
    """Two boxes overlap when their ranges intersect on *both* axes."""
    return ranges_overlap(a[0], b[0]) and ranges_overlap(a[1], b[1])


def box_contains(outer: tuple[tuple[int, int], tuple[int, int]],
                 inner: tuple[tuple[int, int], tuple[int, int]]) -> bool:
    """Full containment on both axes (stricter than overlap)."""
    return range_contains(outer[0], inner[0]) and range_contains(outer[1], inner[1])
