"""
Spatial utility functions for 2D viewport geometry.

Helper functions for speed capping, boundary reflection and headings.
None of them divide by viewport dimensions, so a zero-sized viewport is safe.
"""

import math
import numpy as np
from typing import Tuple


def clamp_speed(velocity: np.ndarray, max_speed: float) -> np.ndarray:
    """
    Clamp velocity magnitude to maximum speed.

    Rescales both axes by the same factor so the heading is preserved.
    A zero vector is returned unchanged.

    Args:
        velocity: Velocity vector [dx, dy]
        max_speed: Maximum allowed speed

    Returns:
        Velocity with clamped magnitude
    """
    speed_sq = float(np.dot(velocity, velocity))

    if speed_sq > max_speed * max_speed:
        # Rescale to max_speed
        speed = math.sqrt(speed_sq)
        if speed > 0.0:
            return velocity * (max_speed / speed)

    return velocity


def reflect_axis(coord: float, delta: float, upper: float) -> Tuple[float, float, bool]:
    """
    Reflect one axis against the interval [0, upper].

    Out of bounds means coord < 0 or coord > upper; the velocity component
    flips sign exactly and the coordinate is clamped to the nearest bound.
    A degenerate axis (upper <= 0) counts as out of bounds every call and
    pins the coordinate to 0.

    Args:
        coord: Position on this axis
        delta: Velocity on this axis
        upper: Viewport extent on this axis

    Returns:
        Tuple of (coord, delta, reflected)
    """
    if upper <= 0.0:
        return 0.0, -delta, True

    if coord < 0.0:
        return 0.0, -delta, True
    if coord > upper:
        return upper, -delta, True

    return coord, delta, False


def reflect_in_viewport(
    position: np.ndarray,
    velocity: np.ndarray,
    width: float,
    height: float
) -> Tuple[np.ndarray, np.ndarray, bool]:
    """
    Reflect a point off the edges of the viewport rectangle.

    Args:
        position: Position [x, y]
        velocity: Velocity [dx, dy]
        width: Viewport width
        height: Viewport height

    Returns:
        Tuple of (position, velocity, reflected_any)
    """
    x, dx, hit_x = reflect_axis(float(position[0]), float(velocity[0]), width)
    y, dy, hit_y = reflect_axis(float(position[1]), float(velocity[1]), height)

    return (
        np.array([x, y], dtype=np.float64),
        np.array([dx, dy], dtype=np.float64),
        hit_x or hit_y,
    )


def heading_of(velocity: np.ndarray) -> float:
    """Angle of a velocity vector in radians (atan2(dy, dx))"""
    return math.atan2(float(velocity[1]), float(velocity[0]))
