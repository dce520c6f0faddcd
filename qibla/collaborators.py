"""Interfaces of the platform collaborators the compass core talks to."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Protocol

from qibla.config import QiblaSettings
from qibla.constants import LOCATION_MAXIMUM_AGE_MS, LOCATION_TIMEOUT_MS
from qibla.geodesy import GeoCoordinate

OrientationCallback = Callable[[Mapping[str, Any]], None]

PERMISSION_GRANTED = "granted"


class OrientationChannel(str, Enum):
    ABSOLUTE = "deviceorientationabsolute"
    RELATIVE = "deviceorientation"


@dataclass(frozen=True)
class LocationRequestPolicy:
    enable_high_accuracy: bool = True
    timeout_ms: int = LOCATION_TIMEOUT_MS
    maximum_age_ms: int = LOCATION_MAXIMUM_AGE_MS

    @classmethod
    def from_settings(cls, settings: QiblaSettings) -> "LocationRequestPolicy":
        return cls(
            enable_high_accuracy=settings.location_high_accuracy,
            timeout_ms=settings.location_timeout_ms,
            maximum_age_ms=settings.location_maximum_age_ms,
        )


class PermissionRequester(Protocol):
    def request_orientation_permission(self) -> Awaitable[str]: ...


class LocationProvider(Protocol):
    """One-shot position fix.

    Implementations raise ``PermissionDenied`` (``code=1``) when the user
    refuses location access and ``LocationUnavailable`` when no fix arrives in
    ``policy.timeout_ms`` or geolocation is unsupported.
    """

    def get_current_position(self, policy: LocationRequestPolicy) -> Awaitable[GeoCoordinate]: ...


class OrientationSource(Protocol):
    def subscribe(self, channel: OrientationChannel, callback: OrientationCallback) -> None: ...


class HapticPlayer(Protocol):
    def vibrate(self, duration_ms: int) -> None: ...


class AudioPlayer(Protocol):
    def play_tick(self) -> None: ...


class AlwaysGranted:
    """Permission requester for platforms without an orientation permission gate."""

    async def request_orientation_permission(self) -> str:
        return PERMISSION_GRANTED


__all__ = [
    "AlwaysGranted",
    "AudioPlayer",
    "HapticPlayer",
    "LocationProvider",
    "LocationRequestPolicy",
    "OrientationCallback",
    "OrientationChannel",
    "OrientationSource",
    "PERMISSION_GRANTED",
    "PermissionRequester",
]
