from qibla import telemetry


def test_events_are_redacted(captured_events):
    telemetry._safe_emit("qibla.test", {"latitude": 1.0, "longitude": 2.0, "kind": "x"})
    name, payload = captured_events[-1]
    assert name == "qibla.test"
    assert payload["latitude"] == "[redacted]"
    assert payload["longitude"] == "[redacted]"
    assert payload["kind"] == "x"


def test_session_failed_payload(captured_events):
    telemetry.record_session_failed("location_unavailable", "timeout")
    name, payload = captured_events[-1]
    assert name == "qibla.session.failed"
    assert payload["kind"] == "location_unavailable"
    assert payload["detail"] == "timeout"
    assert isinstance(payload["ts"], int)


def test_missing_emitter_is_noop():
    telemetry.set_telemetry_emitter(None)
    telemetry.record_frame_dropped("no_bearing")


def test_non_callable_emitter_is_ignored(captured_events):
    telemetry.set_telemetry_emitter("not-callable")  # type: ignore[arg-type]
    telemetry.record_alignment_triggered(1.0, "absolute")
    assert captured_events == []
