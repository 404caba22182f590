"""2D point with in-place rotation and translation.

Points are plain value objects: equality compares coordinates, and
``clone()`` is the only way to get an independent copy.  ``rotate`` and
``relative_move`` mutate the point and return it so calls can chain::

    p = Point(1.0, 0.0).rotate(math.pi / 2).relative_move(0.0, 1.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(slots=True)
class Point:
    """Mutable 2D coordinate.

    Parameters
    ----------
    x, y : float
        Coordinates.  Any real number is accepted and stored as ``float``.
    """

    x: float
    y: float

    def __post_init__(self) -> None:
        self.x = float(self.x)
        self.y = float(self.y)

    def rotate(self, theta: float) -> Point:
        """Rotate in place about the origin by *theta* radians."""
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        old_x, old_y = self.x, self.y
        self.x = old_x * cos_t - old_y * sin_t
        self.y = old_x * sin_t + old_y * cos_t
        return self

    def relative_move(self, dx: float, dy: float) -> Point:
        """Translate in place by ``(dx, dy)``."""
        self.x += dx
        self.y += dy
        return self

    def clone(self) -> Point:
        return Point(self.x, self.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def format(self) -> str:
        """Linear-move command for this point, e.g. ``"G1 X1.00 Y2.00"``."""
        return f"G1 X{self.x:.2f} Y{self.y:.2f}"
