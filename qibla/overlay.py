"""Pydantic payloads describing the map overlay for a session."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel

from qibla.constants import (
    MAP_DEFAULT_ZOOM,
    MAP_FIT_PADDING_PX,
    MAP_LINE_COLOR,
    MAP_LINE_WEIGHT,
)
from qibla.geodesy import KAABA, GeoCoordinate


class MapPoint(BaseModel):
    """Lat/lon representation for map overlays."""

    lat: float
    lon: float


class MapMarker(BaseModel):
    position: MapPoint
    label: str


class MapBounds(BaseModel):
    south_west: MapPoint
    north_east: MapPoint
    padding_px: int = MAP_FIT_PADDING_PX


class MapPolyline(BaseModel):
    points: List[MapPoint]
    color: str = MAP_LINE_COLOR
    weight: int = MAP_LINE_WEIGHT


class MapView(BaseModel):
    center: MapPoint
    zoom: int = MAP_DEFAULT_ZOOM


class QiblaMapOverlay(BaseModel):
    """Markers, connecting line and fit bounds for the user and the Kaaba."""

    kaaba: MapMarker
    user: MapMarker
    line: MapPolyline
    bounds: MapBounds


def _point(coordinate: GeoCoordinate) -> MapPoint:
    return MapPoint(lat=coordinate.latitude, lon=coordinate.longitude)


def initial_view() -> MapView:
    return MapView(center=_point(KAABA))


def build_map_overlay(user: GeoCoordinate) -> QiblaMapOverlay:
    user_point = _point(user)
    kaaba_point = _point(KAABA)
    return QiblaMapOverlay(
        kaaba=MapMarker(position=kaaba_point, label="Kaaba"),
        user=MapMarker(position=user_point, label="Your Location"),
        line=MapPolyline(points=[user_point, kaaba_point]),
        bounds=MapBounds(
            south_west=MapPoint(
                lat=min(user.latitude, KAABA.latitude),
                lon=min(user.longitude, KAABA.longitude),
            ),
            north_east=MapPoint(
                lat=max(user.latitude, KAABA.latitude),
                lon=max(user.longitude, KAABA.longitude),
            ),
        ),
    )


__all__ = [
    "MapBounds",
    "MapMarker",
    "MapPoint",
    "MapPolyline",
    "MapView",
    "QiblaMapOverlay",
    "build_map_overlay",
    "initial_view",
]
