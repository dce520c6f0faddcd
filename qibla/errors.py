"""Error kinds and typed step outcomes for the activation workflow."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

# Geolocation API error code for a refused location permission.
GEOLOCATION_PERMISSION_DENIED = 1


class ErrorKind(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    LOCATION_DENIED = "location_denied"
    LOCATION_UNAVAILABLE = "location_unavailable"
    ALREADY_ACTIVE = "already_active"


class QiblaError(Exception):
    kind: ErrorKind = ErrorKind.LOCATION_UNAVAILABLE


class PermissionDenied(QiblaError):
    """Motion/orientation or location permission was refused."""

    kind = ErrorKind.PERMISSION_DENIED

    def __init__(self, message: str = "Permission denied", *, code: Optional[int] = None) -> None:
        super().__init__(message)
        self.code = code
        if code == GEOLOCATION_PERMISSION_DENIED:
            self.kind = ErrorKind.LOCATION_DENIED


class LocationUnavailable(QiblaError):
    """No fix within the bounded wait, or geolocation is not supported."""

    kind = ErrorKind.LOCATION_UNAVAILABLE


class SessionAlreadyEstablished(QiblaError, RuntimeError):
    """A session bearing can only be established once."""


@dataclass(frozen=True)
class StepOutcome(Generic[T]):
    """Result of one workflow step: either ``value`` or an ``error`` kind."""

    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "StepOutcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind, detail: Optional[str] = None) -> "StepOutcome[T]":
        return cls(error=error, detail=detail)


__all__ = [
    "ErrorKind",
    "GEOLOCATION_PERMISSION_DENIED",
    "LocationUnavailable",
    "PermissionDenied",
    "QiblaError",
    "SessionAlreadyEstablished",
    "StepOutcome",
]
