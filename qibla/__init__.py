"""Qibla compass core package exports."""

from .alignment import AlignmentDetector, AlignmentPhase, AlignmentState, AlignmentUpdate
from .angles import normalize360, shortest_angle_diff
from .constants import (
    ALIGN_COOLDOWN_MS,
    ALIGN_TOLERANCE_DEGREES,
    KAABA_LATITUDE,
    KAABA_LONGITUDE,
    SMOOTHING_FACTOR,
)
from .errors import (
    ErrorKind,
    LocationUnavailable,
    PermissionDenied,
    QiblaError,
    SessionAlreadyEstablished,
    StepOutcome,
)
from .feedback import FeedbackDispatcher
from .geodesy import (
    KAABA,
    GeoCoordinate,
    compute_distance_km,
    compute_initial_bearing,
    compute_qibla_bearing,
    compute_qibla_distance_km,
)
from .sensors import (
    AbsoluteFrame,
    HeadingSample,
    RelativeFrame,
    SourceKind,
    normalize_heading,
    parse_orientation_event,
)
from .session import CompassSession, CompassUpdate
from .smoothing import AngularSmoother, SmootherState, smooth_rotation
from .workflow import ActivationResult, ActivationWorkflow

__all__ = [
    "ALIGN_COOLDOWN_MS",
    "ALIGN_TOLERANCE_DEGREES",
    "KAABA_LATITUDE",
    "KAABA_LONGITUDE",
    "SMOOTHING_FACTOR",
    "AbsoluteFrame",
    "ActivationResult",
    "ActivationWorkflow",
    "AlignmentDetector",
    "AlignmentPhase",
    "AlignmentState",
    "AlignmentUpdate",
    "AngularSmoother",
    "CompassSession",
    "CompassUpdate",
    "ErrorKind",
    "FeedbackDispatcher",
    "GeoCoordinate",
    "HeadingSample",
    "KAABA",
    "LocationUnavailable",
    "PermissionDenied",
    "QiblaError",
    "RelativeFrame",
    "SessionAlreadyEstablished",
    "SmootherState",
    "SourceKind",
    "StepOutcome",
    "compute_distance_km",
    "compute_initial_bearing",
    "compute_qibla_bearing",
    "compute_qibla_distance_km",
    "normalize360",
    "normalize_heading",
    "parse_orientation_event",
    "shortest_angle_diff",
    "smooth_rotation",
]
