"""Circular angle helpers shared by the bearing, smoothing and alignment code."""

from __future__ import annotations


def normalize360(degrees: float) -> float:
    """Wrap ``degrees`` into ``[0, 360)``."""

    wrapped = degrees % 360.0
    # Tiny negatives can round up to exactly 360.0 under float modulo.
    if wrapped >= 360.0:
        return 0.0
    return wrapped


def shortest_angle_diff(target: float, current: float) -> float:
    """Signed shortest rotation from ``current`` to ``target`` in ``(-180, 180]``."""

    diff = (target - current + 540.0) % 360.0 - 180.0
    # Normalise -180 to 180 exactly.
    if diff <= -180.0:
        return 180.0
    return diff
