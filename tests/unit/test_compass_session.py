from __future__ import annotations

import pytest

from qibla.config import QiblaSettings
from qibla.errors import QiblaError, SessionAlreadyEstablished
from qibla.feedback import FeedbackDispatcher
from qibla.geodesy import GeoCoordinate
from qibla.sensors import AbsoluteFrame, RelativeFrame
from qibla.session import CompassSession

NEW_YORK = GeoCoordinate(latitude=40.7128, longitude=-74.0060)


class _Haptics:
    def __init__(self) -> None:
        self.pulses = 0

    def vibrate(self, duration_ms: int) -> None:
        self.pulses += 1


def test_events_before_bearing_are_dropped(captured_events) -> None:
    session = CompassSession()
    assert session.process({"alpha": 10.0}) is None
    assert session.dropped_frames == 1
    assert session.smoother.rotation == 0.0
    assert session.detector.state.last_trigger_at is None
    assert captured_events[-1][0] == "qibla.frame.dropped"
    assert captured_events[-1][1]["reason"] == "no_bearing"


def test_establish_sets_bearing_once(captured_events) -> None:
    session = CompassSession()
    bearing = session.establish(NEW_YORK)
    assert bearing == pytest.approx(58.5, abs=0.5)
    assert session.distance_km == pytest.approx(10_300, abs=100)
    assert session.is_established
    with pytest.raises(SessionAlreadyEstablished):
        session.establish(GeoCoordinate(latitude=0.0, longitude=0.0))
    assert session.bearing == bearing

    name, payload = captured_events[0]
    assert name == "qibla.session.started"
    assert "latitude" not in payload


def test_process_produces_rotation_lines_and_alignment(fake_clock) -> None:
    haptics = _Haptics()
    session = CompassSession(feedback=FeedbackDispatcher(haptics), clock=fake_clock.now)
    bearing = session.establish(NEW_YORK)

    update = session.process(AbsoluteFrame(heading=bearing - 2.0, accuracy=5.0))
    assert update is not None
    assert update.aligned
    assert update.triggered
    assert haptics.pulses == 1
    assert update.turn_deg == pytest.approx(2.0)
    # Rotation moves 18% of the way to bearing - heading (2°).
    assert update.rotation_deg == pytest.approx(0.36)
    assert update.heading_line.endswith("Turn: 2° right")
    assert update.accuracy_line == "Distance to Kaaba: 10306 km | Accuracy: 5°"

    fake_clock(500.0)
    update = session.process(AbsoluteFrame(heading=bearing - 1.0, accuracy=5.0))
    assert update is not None and update.aligned and not update.triggered
    assert haptics.pulses == 1


def test_relative_frames_are_normalised(fake_clock) -> None:
    session = CompassSession(clock=fake_clock.now)
    session.establish(NEW_YORK)
    update = session.process(RelativeFrame(alpha=90.0))
    assert update is not None
    assert update.heading_deg == pytest.approx(270.0)
    assert update.accuracy_line.endswith("Accuracy: relative")
    assert not update.aligned


def test_unrecognised_frames_are_dropped_after_establish() -> None:
    session = CompassSession()
    session.establish(NEW_YORK)
    assert session.process({"beta": 1.0}) is None
    assert session.dropped_frames == 1


def test_sessions_do_not_share_state(fake_clock) -> None:
    first = CompassSession(clock=fake_clock.now)
    first.establish(NEW_YORK)
    first.process({"heading": 0.0})

    second = CompassSession(clock=fake_clock.now)
    assert second.smoother.rotation == 0.0
    assert second.detector.state.is_aligned is False
    assert second.bearing is None


def test_from_settings_applies_configuration() -> None:
    settings = QiblaSettings(align_tolerance_deg=2.0, align_cooldown_ms=100.0, smoothing_factor=0.5)
    session = CompassSession.from_settings(settings)
    assert session.detector.tolerance_degrees == 2.0
    assert session.detector.cooldown_ms == 100.0
    assert session.smoother.factor == 0.5


def test_second_establish_is_a_qibla_error() -> None:
    session = CompassSession()
    session.establish(NEW_YORK)
    with pytest.raises(QiblaError):
        session.establish(NEW_YORK)
    assert issubclass(SessionAlreadyEstablished, RuntimeError)
