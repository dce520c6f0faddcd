"""Great-circle bearing and distance on a spherical Earth."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field

from qibla.angles import normalize360
from qibla.constants import EARTH_RADIUS_KM, KAABA_LATITUDE, KAABA_LONGITUDE


class GeoCoordinate(BaseModel):
    """Latitude/longitude pair in degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


KAABA = GeoCoordinate(latitude=KAABA_LATITUDE, longitude=KAABA_LONGITUDE)


def compute_initial_bearing(origin: GeoCoordinate, target: GeoCoordinate) -> float:
    """Return the initial great-circle bearing from ``origin`` to ``target``.

    The result is measured clockwise from true north and normalised to
    ``[0, 360)``. An origin on a pole is not special-cased; ``atan2`` still
    yields a defined value there.
    """

    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(target.latitude)
    delta_lon = math.radians(target.longitude - origin.longitude)

    angle = math.atan2(
        math.sin(delta_lon),
        math.cos(lat1) * math.tan(lat2) - math.sin(lat1) * math.cos(delta_lon),
    )
    return normalize360(math.degrees(angle))


def compute_distance_km(origin: GeoCoordinate, target: GeoCoordinate) -> float:
    """Haversine distance in kilometres (roughly 0.5% error from the sphere)."""

    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(target.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(target.longitude - origin.longitude)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    # Near-antipodal points can push a past 1.0 through rounding.
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def compute_qibla_bearing(origin: GeoCoordinate) -> float:
    return compute_initial_bearing(origin, KAABA)


def compute_qibla_distance_km(origin: GeoCoordinate) -> float:
    return compute_distance_km(origin, KAABA)


__all__ = [
    "GeoCoordinate",
    "KAABA",
    "compute_initial_bearing",
    "compute_distance_km",
    "compute_qibla_bearing",
    "compute_qibla_distance_km",
]
