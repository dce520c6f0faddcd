"""Circular low-pass filter for the rendered compass rotation."""

from __future__ import annotations

from dataclasses import dataclass

from qibla.angles import normalize360, shortest_angle_diff
from qibla.constants import SMOOTHING_FACTOR


def _validate_factor(factor: float) -> float:
    if not 0.0 < factor <= 1.0:
        raise ValueError("factor must be in (0, 1]")
    return float(factor)


def smooth_rotation(current: float, target: float, factor: float = SMOOTHING_FACTOR) -> float:
    """Move ``current`` a fraction ``factor`` of the way to ``target`` along the shorter arc."""

    _validate_factor(factor)
    diff = shortest_angle_diff(target, current)
    return normalize360(current + diff * factor)


@dataclass
class SmootherState:
    current_rotation_deg: float = 0.0


def step(state: SmootherState, target_degrees: float, factor: float = SMOOTHING_FACTOR) -> SmootherState:
    """Return the state after one filter step toward ``target_degrees``."""

    return SmootherState(
        current_rotation_deg=smooth_rotation(
            state.current_rotation_deg, normalize360(target_degrees), factor
        )
    )


class AngularSmoother:
    """First-order IIR filter on the circle.

    Larger factors track the target faster but let sensor jitter through;
    smaller factors are steadier but lag. The state lives for the whole
    session and is never reset mid-stream, otherwise the indicator snaps.
    """

    def __init__(self, factor: float = SMOOTHING_FACTOR) -> None:
        self.factor = _validate_factor(factor)
        self._state = SmootherState()

    @property
    def state(self) -> SmootherState:
        return self._state

    @property
    def rotation(self) -> float:
        return self._state.current_rotation_deg

    def step(self, target_degrees: float) -> SmootherState:
        self._state = step(self._state, target_degrees, self.factor)
        return self._state


__all__ = ["AngularSmoother", "SmootherState", "smooth_rotation", "step"]
