"""2D geometry primitives shared by the snapping engine.

Points are plain ``(x, y)`` tuples. Angles are in degrees; positive rotation
is counter-clockwise in the engine's frame (standard rotation matrix).
"""

import math
from typing import Tuple

Point = Tuple[float, float]


def rotate_point(point: Point, degrees: float) -> Point:
    """Rotate a point around the origin."""
    rad = math.radians(degrees)
    cos_r, sin_r = math.cos(rad), math.sin(rad)
    x, y = point
    return (x * cos_r - y * sin_r, x * sin_r + y * cos_r)


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    return math.sqrt(dx * dx + dy * dy)


def normalize_angle(degrees: float) -> float:
    """Reduce an angle into [0, 360)."""
    result = degrees % 360.0
    # -1e-17 % 360 rounds to 360.0
    return 0.0 if result == 360.0 else result
