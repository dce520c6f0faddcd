"""Per-session compass state: bearing, smoothed rotation and alignment."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from qibla import telemetry
from qibla.alignment import AlignmentDetector, Clock, monotonic_ms
from qibla.angles import normalize360
from qibla.config import QiblaSettings
from qibla.constants import ALIGN_COOLDOWN_MS, ALIGN_TOLERANCE_DEGREES, SMOOTHING_FACTOR
from qibla.errors import SessionAlreadyEstablished
from qibla.feedback import FeedbackDispatcher
from qibla.formatting import accuracy_status_line, heading_status_line
from qibla.geodesy import KAABA, GeoCoordinate, compute_distance_km, compute_initial_bearing
from qibla.sensors import HeadingSample, OrientationFrame, normalize_heading
from qibla.smoothing import AngularSmoother

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompassUpdate:
    """Everything the renderer needs after one processed orientation sample."""

    rotation_deg: float
    heading_deg: float
    turn_deg: float
    heading_line: str
    accuracy_line: str
    aligned: bool
    triggered: bool
    sample: HeadingSample


class CompassSession:
    """Owns the state of one start/stop cycle.

    The bearing is fixed once by :meth:`establish`; a new fix means a new
    session. Orientation events that arrive before that are dropped rather
    than queued.
    """

    def __init__(
        self,
        *,
        target: GeoCoordinate = KAABA,
        tolerance_degrees: float = ALIGN_TOLERANCE_DEGREES,
        cooldown_ms: float = ALIGN_COOLDOWN_MS,
        smoothing_factor: float = SMOOTHING_FACTOR,
        feedback: Optional[FeedbackDispatcher] = None,
        clock: Clock = monotonic_ms,
    ) -> None:
        self.target = target
        self.smoother = AngularSmoother(factor=smoothing_factor)
        self.detector = AlignmentDetector(
            tolerance_degrees=tolerance_degrees,
            cooldown_ms=cooldown_ms,
            clock=clock,
        )
        self._feedback = feedback
        self._origin: Optional[GeoCoordinate] = None
        self._bearing: Optional[float] = None
        self._distance_km: Optional[float] = None
        self.dropped_frames = 0

    @classmethod
    def from_settings(
        cls,
        settings: QiblaSettings,
        *,
        feedback: Optional[FeedbackDispatcher] = None,
        clock: Clock = monotonic_ms,
    ) -> "CompassSession":
        return cls(
            tolerance_degrees=settings.align_tolerance_deg,
            cooldown_ms=settings.align_cooldown_ms,
            smoothing_factor=settings.smoothing_factor,
            feedback=feedback,
            clock=clock,
        )

    @property
    def bearing(self) -> Optional[float]:
        return self._bearing

    @property
    def distance_km(self) -> Optional[float]:
        return self._distance_km

    @property
    def origin(self) -> Optional[GeoCoordinate]:
        return self._origin

    @property
    def is_established(self) -> bool:
        return self._bearing is not None

    def establish(self, origin: GeoCoordinate) -> float:
        if self._bearing is not None:
            raise SessionAlreadyEstablished("bearing already set for this session")
        self._origin = origin
        self._bearing = compute_initial_bearing(origin, self.target)
        self._distance_km = compute_distance_km(origin, self.target)
        logger.info(
            "compass session established: bearing=%.1f distance_km=%.0f",
            self._bearing,
            self._distance_km,
        )
        telemetry.record_session_started(self._bearing, self._distance_km)
        return self._bearing

    def process(
        self,
        event: Union[OrientationFrame, Mapping[str, Any]],
        now_ms: Optional[float] = None,
    ) -> Optional[CompassUpdate]:
        if self._bearing is None:
            self._drop("no_bearing")
            return None

        sample = normalize_heading(event)
        if sample is None:
            self._drop("unrecognised")
            return None

        bearing = self._bearing
        heading = sample.heading_deg
        self.smoother.step(normalize360(bearing - heading))
        alignment = self.detector.update(bearing, heading, now_ms)

        if alignment.triggered:
            telemetry.record_alignment_triggered(alignment.turn_degrees, sample.source_kind.value)
            if self._feedback is not None:
                self._feedback.fire()

        return CompassUpdate(
            rotation_deg=self.smoother.rotation,
            heading_deg=heading,
            turn_deg=alignment.turn_degrees,
            heading_line=heading_status_line(bearing, heading, alignment.turn_degrees),
            accuracy_line=accuracy_status_line(self._distance_km, sample.accuracy_label),
            aligned=alignment.aligned,
            triggered=alignment.triggered,
            sample=sample,
        )

    def _drop(self, reason: str) -> None:
        self.dropped_frames += 1
        logger.debug("orientation frame dropped: %s", reason)
        telemetry.record_frame_dropped(reason)


__all__ = ["CompassSession", "CompassUpdate"]
