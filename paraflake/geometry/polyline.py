"""Ordered, owned sequence of points.

Ownership
---------
``append`` *moves* a point into the polyline: no copy is made, so later
in-place operations on the polyline (``rotate``, ``reflect``) are seen
through any outside reference to that point.  ``extend`` and ``clone``
*copy*: the source polyline is never aliased.

Drawing
-------
``draw`` walks the points as one closed path on a
:class:`~paraflake.export.surface.DrawingSurface`: move to the first
point, line to each later point, close back to the start.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

import numpy as np

from paraflake.geometry.point import Point

if TYPE_CHECKING:
    from paraflake.export.surface import DrawingSurface

logger = logging.getLogger(__name__)


class Polyline:
    """Ordered list of :class:`Point` objects owned by this polyline."""

    __slots__ = ("_points",)

    def __init__(self) -> None:
        self._points: list[Point] = []

    @classmethod
    def from_points(cls, points: Iterable[tuple[float, float]]) -> Polyline:
        """Build a polyline from ``(x, y)`` pairs."""
        polyline = cls()
        for x, y in points:
            polyline.append(Point(x, y))
        return polyline

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __getitem__(self, index: int) -> Point:
        return self._points[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polyline):
            return NotImplemented
        return self._points == other._points

    def __repr__(self) -> str:
        return f"Polyline({len(self._points)} points)"

    @property
    def points(self) -> tuple[Point, ...]:
        """Snapshot of the contained points (the points themselves are shared)."""
        return tuple(self._points)

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def append(self, point: Point) -> None:
        """Add *point* to the end.  The polyline takes ownership; no copy."""
        self._points.append(point)

    def extend(self, other: Polyline) -> None:
        """Append clones of every point of *other*, in order."""
        # Snapshot first so that ``p.extend(p)`` doubles instead of looping.
        clones = [point.clone() for point in other._points]
        self._points.extend(clones)

    def clone(self) -> Polyline:
        cloned = Polyline()
        cloned._points = [point.clone() for point in self._points]
        return cloned

    # ------------------------------------------------------------------
    # In-place transforms
    # ------------------------------------------------------------------

    def rotate(self, theta: float) -> None:
        """Rotate every point about the origin by *theta* radians."""
        for point in self._points:
            point.rotate(theta)

    def reflect(self) -> None:
        """Mirror across the x-axis (negate every ``y``)."""
        for point in self._points:
            point.y = -point.y

    def reverse(self) -> None:
        self._points.reverse()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def to_array(self) -> np.ndarray:
        """Return the points as a float64 array of shape ``(N, 2)``."""
        if not self._points:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([p.as_tuple() for p in self._points], dtype=np.float64)

    def bounds(self) -> tuple[float, float, float, float]:
        """Axis-aligned bounding box ``(min_x, min_y, max_x, max_y)``.

        Raises
        ------
        ValueError
            If the polyline is empty.
        """
        if not self._points:
            raise ValueError("Cannot compute bounds of an empty polyline")
        arr = self.to_array()
        min_x, min_y = arr.min(axis=0)
        max_x, max_y = arr.max(axis=0)
        return float(min_x), float(min_y), float(max_x), float(max_y)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def format(self) -> str:
        """One ``G1 X.. Y..`` line per point, each newline-terminated."""
        return "".join(point.format() + "\n" for point in self._points)

    def draw(self, surface: DrawingSurface) -> None:
        """Trace the polyline as one closed path on *surface*.

        An empty polyline issues no calls.
        """
        if not self._points:
            logger.debug("draw() on empty polyline, nothing to do")
            return

        first = self._points[0]
        surface.begin_path()
        surface.move_to(first.x, first.y)
        for point in self._points[1:]:
            surface.line_to(point.x, point.y)
        surface.close_path()
