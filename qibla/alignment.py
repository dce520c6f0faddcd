"""Alignment detection with edge-triggered, cooldown-limited feedback."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from qibla.angles import shortest_angle_diff
from qibla.constants import ALIGN_COOLDOWN_MS, ALIGN_TOLERANCE_DEGREES

Clock = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class AlignmentPhase(str, Enum):
    ALIGNED = "aligned"
    NOT_ALIGNED = "not_aligned"


@dataclass
class AlignmentState:
    is_aligned: bool = False
    last_trigger_at: Optional[float] = None

    @property
    def phase(self) -> AlignmentPhase:
        return AlignmentPhase.ALIGNED if self.is_aligned else AlignmentPhase.NOT_ALIGNED


@dataclass(frozen=True)
class AlignmentUpdate:
    phase: AlignmentPhase
    turn_degrees: float
    diff_abs: float
    triggered: bool

    @property
    def aligned(self) -> bool:
        return self.phase == AlignmentPhase.ALIGNED


class AlignmentDetector:
    """Tracks whether the device faces the target bearing.

    A single tolerance decides the phase on every sample, so a heading that
    hovers on the boundary flips between phases. Feedback only fires on the
    ``NOT_ALIGNED -> ALIGNED`` edge and only once the cooldown since the last
    trigger has elapsed; staying aligned never refires.
    """

    def __init__(
        self,
        *,
        tolerance_degrees: float = ALIGN_TOLERANCE_DEGREES,
        cooldown_ms: float = ALIGN_COOLDOWN_MS,
        clock: Clock = monotonic_ms,
    ) -> None:
        if tolerance_degrees < 0:
            raise ValueError("tolerance_degrees must be non-negative")
        if cooldown_ms < 0:
            raise ValueError("cooldown_ms must be non-negative")
        self.tolerance_degrees = tolerance_degrees
        self.cooldown_ms = cooldown_ms
        self._clock = clock
        self._state = AlignmentState()

    @property
    def state(self) -> AlignmentState:
        return self._state

    def is_within_tolerance(self, diff_abs: float) -> bool:
        return diff_abs <= self.tolerance_degrees

    def _cooldown_elapsed(self, now_ms: float) -> bool:
        last = self._state.last_trigger_at
        return last is None or (now_ms - last) > self.cooldown_ms

    def update(
        self,
        target_bearing: float,
        heading: float,
        now_ms: Optional[float] = None,
    ) -> AlignmentUpdate:
        if now_ms is None:
            now_ms = self._clock()

        turn = shortest_angle_diff(target_bearing, heading)
        diff_abs = abs(turn)
        aligned = self.is_within_tolerance(diff_abs)

        triggered = False
        if aligned and not self._state.is_aligned and self._cooldown_elapsed(now_ms):
            self._state.last_trigger_at = now_ms
            triggered = True

        self._state.is_aligned = aligned
        return AlignmentUpdate(
            phase=self._state.phase,
            turn_degrees=turn,
            diff_abs=diff_abs,
            triggered=triggered,
        )


__all__ = [
    "AlignmentDetector",
    "AlignmentPhase",
    "AlignmentState",
    "AlignmentUpdate",
    "Clock",
    "monotonic_ms",
]
