"""Orientation event ingestion and heading normalisation.

Browsers and devices report orientation in two incompatible shapes. iOS Safari
exposes a true-north compass heading (``webkitCompassHeading``) while most other
platforms only expose ``alpha``, a rotation about the vertical axis with no
external reference. :func:`parse_orientation_event` sniffs the raw payload once
and returns an explicit :class:`AbsoluteFrame` or :class:`RelativeFrame`;
everything downstream switches on that type.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union

from qibla.angles import normalize360
from qibla.constants import ABSOLUTE_ACCURACY_FALLBACK_LABEL, RELATIVE_ACCURACY_LABEL

logger = logging.getLogger(__name__)

_ABSOLUTE_HEADING_KEYS = ("webkitCompassHeading", "heading")
_ABSOLUTE_ACCURACY_KEYS = ("webkitCompassAccuracy", "accuracy")
_RELATIVE_KEYS = ("alpha",)


class SourceKind(str, Enum):
    ABSOLUTE = "absolute"
    RELATIVE = "relative"


@dataclass(frozen=True)
class AbsoluteFrame:
    """True-north compass heading with optional accuracy in degrees."""

    heading: float
    accuracy: Optional[float] = None


@dataclass(frozen=True)
class RelativeFrame:
    """Rotation around the vertical axis without an absolute reference."""

    alpha: float


OrientationFrame = Union[AbsoluteFrame, RelativeFrame]


@dataclass(frozen=True)
class HeadingSample:
    heading_deg: float
    accuracy_label: Optional[str]
    source_kind: SourceKind


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def _first_number(payload: Mapping[str, Any], keys: tuple[str, ...]) -> Optional[float]:
    for key in keys:
        number = _as_number(payload.get(key))
        if number is not None:
            return number
    return None


def parse_orientation_event(payload: Mapping[str, Any]) -> Optional[OrientationFrame]:
    """Classify a raw orientation payload, or return ``None`` if unrecognised."""

    heading = _first_number(payload, _ABSOLUTE_HEADING_KEYS)
    if heading is not None:
        return AbsoluteFrame(
            heading=heading,
            accuracy=_first_number(payload, _ABSOLUTE_ACCURACY_KEYS),
        )

    alpha = _first_number(payload, _RELATIVE_KEYS)
    if alpha is not None:
        return RelativeFrame(alpha=alpha)

    return None


def _format_accuracy(accuracy: Optional[float]) -> str:
    if accuracy is None:
        return ABSOLUTE_ACCURACY_FALLBACK_LABEL
    return f"{accuracy:.0f}°"


def normalize_heading(
    event: Union[OrientationFrame, Mapping[str, Any], None],
) -> Optional[HeadingSample]:
    """Convert a frame (or raw payload) into a canonical :class:`HeadingSample`."""

    if event is None:
        return None
    frame = event
    if not isinstance(frame, (AbsoluteFrame, RelativeFrame)):
        frame = parse_orientation_event(event)
        if frame is None:
            logger.debug("dropping unrecognised orientation event with keys %s", list(event))
            return None

    if isinstance(frame, AbsoluteFrame):
        return HeadingSample(
            heading_deg=normalize360(frame.heading),
            accuracy_label=_format_accuracy(frame.accuracy),
            source_kind=SourceKind.ABSOLUTE,
        )
    return HeadingSample(
        heading_deg=normalize360(360.0 - frame.alpha),
        accuracy_label=RELATIVE_ACCURACY_LABEL,
        source_kind=SourceKind.RELATIVE,
    )


__all__ = [
    "AbsoluteFrame",
    "HeadingSample",
    "OrientationFrame",
    "RelativeFrame",
    "SourceKind",
    "normalize_heading",
    "parse_orientation_event",
]
