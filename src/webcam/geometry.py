"""
Distance helpers for normalized landmark points.
"""
import math
from typing import Sequence

Point3 = Sequence[float]


def distance(a: Point3, b: Point3) -> float:
    """Euclidean distance between two (x, y, z) points."""
    return math.sqrt(
        (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2
    )


def distance_2d(a: Point3, b: Point3) -> float:
    """Euclidean distance in the image plane (z ignored)."""
    return math.hypot(a[0] - b[0], a[1] - b[1])
