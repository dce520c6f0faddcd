#!/usr/bin/env python3
"""Print the Qibla bearing and distance for a coordinate."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Sequence

from pydantic import ValidationError

from qibla.alignment import AlignmentDetector
from qibla.angles import normalize360
from qibla.config import get_settings
from qibla.formatting import accuracy_status_line, heading_status_line
from qibla.geodesy import GeoCoordinate, compute_qibla_bearing, compute_qibla_distance_km


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--lat", type=float, required=True, help="Latitude in degrees")
    parser.add_argument("--lon", type=float, required=True, help="Longitude in degrees")
    parser.add_argument(
        "--heading",
        type=float,
        default=None,
        help="Current device heading in degrees; adds turn and alignment output",
    )
    parser.add_argument("--json", action="store_true", help="Emit a JSON object")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_report(origin: GeoCoordinate, heading: float | None = None) -> dict[str, Any]:
    settings = get_settings()
    bearing = compute_qibla_bearing(origin)
    distance_km = compute_qibla_distance_km(origin)
    report: dict[str, Any] = {
        "bearingDeg": round(bearing, 2),
        "distanceKm": round(distance_km, 1),
    }
    if heading is not None:
        heading = normalize360(heading)
        detector = AlignmentDetector(tolerance_degrees=settings.align_tolerance_deg)
        update = detector.update(bearing, heading, now_ms=0.0)
        report["headingDeg"] = heading
        report["turnDeg"] = round(update.turn_degrees, 2)
        report["aligned"] = update.aligned
        report["headingLine"] = heading_status_line(bearing, heading, update.turn_degrees)
    report["accuracyLine"] = accuracy_status_line(distance_km, None)
    return report


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        origin = GeoCoordinate(latitude=args.lat, longitude=args.lon)
    except ValidationError as exc:
        print(f"invalid coordinate: {exc.errors()[0]['msg']}", file=sys.stderr)
        return 2

    report = build_report(origin, args.heading)
    if args.json:
        print(json.dumps(report, indent=2, ensure_ascii=False))
        return 0

    print(f"Qibla bearing: {report['bearingDeg']:.1f}°")
    if "headingLine" in report:
        print(report["headingLine"])
    print(report["accuracyLine"])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
