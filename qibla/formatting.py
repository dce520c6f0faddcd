"""User-facing status lines."""

from __future__ import annotations

from typing import Optional

from qibla.constants import MISSING_VALUE_LABEL, TURN_DEADBAND_DEGREES
from qibla.errors import ErrorKind

GETTING_LOCATION = "Getting location…"
WAITING_FOR_PERMISSIONS = "Waiting for permissions…"

_FAILURE_MESSAGES = {
    ErrorKind.PERMISSION_DENIED: (
        "Permission denied. Please allow Motion/Orientation and Location in Safari."
    ),
    ErrorKind.LOCATION_DENIED: (
        "Location denied. Please allow Location access in browser settings."
    ),
    ErrorKind.LOCATION_UNAVAILABLE: (
        "Could not start. Ensure HTTPS + allow Location and Motion/Orientation."
    ),
}


def format_turn(turn_degrees: float) -> str:
    """Render a signed turn; positive means turn right (clockwise)."""

    magnitude = abs(turn_degrees)
    if magnitude < TURN_DEADBAND_DEGREES:
        return "0°"
    direction = "right" if turn_degrees > 0 else "left"
    return f"{magnitude:.0f}° {direction}"


def heading_status_line(bearing: float, heading: float, turn_degrees: float) -> str:
    return (
        f"Qibla: {bearing:.0f}° | Heading: {heading:.0f}° | "
        f"Turn: {format_turn(turn_degrees)}"
    )


def accuracy_status_line(distance_km: Optional[float], accuracy_label: Optional[str]) -> str:
    label = accuracy_label if accuracy_label is not None else MISSING_VALUE_LABEL
    if distance_km is None:
        return f"Accuracy: {label}"
    return f"Distance to Kaaba: {distance_km:.0f} km | Accuracy: {label}"


def ready_status_line(bearing: float) -> str:
    return (
        f"Location OK. Qibla bearing: {bearing:.0f}°. "
        "Move phone in a figure-8 to calibrate."
    )


def failure_status_line(kind: ErrorKind) -> str:
    return _FAILURE_MESSAGES.get(kind, _FAILURE_MESSAGES[ErrorKind.LOCATION_UNAVAILABLE])


__all__ = [
    "GETTING_LOCATION",
    "WAITING_FOR_PERMISSIONS",
    "accuracy_status_line",
    "failure_status_line",
    "format_turn",
    "heading_status_line",
    "ready_status_line",
]
