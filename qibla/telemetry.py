"""Telemetry hooks for compass session lifecycle events."""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Mapping, MutableMapping, Optional

TelemetryEmitter = Callable[[str, Mapping[str, object]], None]

_emitter: Optional[TelemetryEmitter] = None
_logger = logging.getLogger("qibla.telemetry")

_REDACTED_KEYS = {"latitude", "longitude", "location"}


def set_telemetry_emitter(candidate: TelemetryEmitter | None) -> None:
    """Register a telemetry emitter used for session instrumentation."""

    global _emitter
    _emitter = candidate if callable(candidate) else None


def _now_ms() -> int:
    return int(time.time() * 1000)


def _redact(payload: MutableMapping[str, object]) -> Dict[str, object]:
    redacted = dict(payload)
    for key in _REDACTED_KEYS & redacted.keys():
        redacted[key] = "[redacted]"
    return redacted


def _safe_emit(event: str, payload: MutableMapping[str, object]) -> None:
    if not _emitter:
        _logger.debug("telemetry emitter not configured for event %s", event)
        return
    try:
        _emitter(event, _redact(payload))
    except Exception:  # pragma: no cover - defensive logging only
        _logger.exception("failed to emit telemetry event %s", event)


def record_session_started(bearing_deg: float, distance_km: float) -> None:
    _safe_emit(
        "qibla.session.started",
        {
            "bearingDeg": round(bearing_deg, 1),
            "distanceKm": round(distance_km),
            "ts": _now_ms(),
        },
    )


def record_session_failed(kind: str, detail: str | None = None) -> None:
    payload: Dict[str, object] = {"kind": kind, "ts": _now_ms()}
    if detail:
        payload["detail"] = detail
    _safe_emit("qibla.session.failed", payload)


def record_alignment_triggered(turn_deg: float, source_kind: str) -> None:
    _safe_emit(
        "qibla.alignment.triggered",
        {"turnDeg": round(turn_deg, 1), "source": source_kind, "ts": _now_ms()},
    )


def record_frame_dropped(reason: str) -> None:
    _safe_emit("qibla.frame.dropped", {"reason": reason, "ts": _now_ms()})


__all__ = [
    "TelemetryEmitter",
    "record_alignment_triggered",
    "record_frame_dropped",
    "record_session_failed",
    "record_session_started",
    "set_telemetry_emitter",
]
