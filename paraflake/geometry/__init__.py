"""
Geometry primitives.

Point and Polyline are the only geometry types.  All angles are radians,
all transforms are about the origin and mutate in place.
"""

from paraflake.geometry.point import Point
from paraflake.geometry.polyline import Polyline

__all__ = ["Point", "Polyline"]
