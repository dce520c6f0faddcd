from __future__ import annotations

import math

import pytest

from qibla.sensors import (
    AbsoluteFrame,
    RelativeFrame,
    SourceKind,
    normalize_heading,
    parse_orientation_event,
)


def test_relative_frame_is_inverted() -> None:
    sample = normalize_heading(RelativeFrame(alpha=90.0))
    assert sample is not None
    assert sample.heading_deg == pytest.approx(270.0)
    assert sample.source_kind == SourceKind.RELATIVE
    assert sample.accuracy_label == "relative"


def test_absolute_frame_keeps_heading_and_formats_accuracy() -> None:
    sample = normalize_heading(AbsoluteFrame(heading=270.4, accuracy=5.0))
    assert sample is not None
    assert sample.heading_deg == pytest.approx(270.4)
    assert sample.source_kind == SourceKind.ABSOLUTE
    assert "5" in sample.accuracy_label
    assert sample.accuracy_label == "5°"


def test_absolute_frame_without_accuracy_uses_platform_label() -> None:
    sample = normalize_heading(AbsoluteFrame(heading=-10.0))
    assert sample is not None
    assert sample.heading_deg == pytest.approx(350.0)
    assert sample.accuracy_label == "iOS"


def test_relative_zero_alpha_maps_to_north() -> None:
    sample = normalize_heading(RelativeFrame(alpha=0.0))
    assert sample is not None
    assert sample.heading_deg == 0.0


class TestRawPayloads:
    def test_webkit_payload_is_absolute(self) -> None:
        frame = parse_orientation_event({"webkitCompassHeading": 12.0, "webkitCompassAccuracy": 15, "alpha": 200.0})
        assert frame == AbsoluteFrame(heading=12.0, accuracy=15.0)

    def test_alpha_payload_is_relative(self) -> None:
        frame = parse_orientation_event({"alpha": 33.5, "beta": 1.0, "gamma": 2.0})
        assert frame == RelativeFrame(alpha=33.5)

    def test_plain_heading_key_is_absolute(self) -> None:
        sample = normalize_heading({"heading": 370.0, "accuracy": 3})
        assert sample is not None
        assert sample.heading_deg == pytest.approx(10.0)
        assert sample.accuracy_label == "3°"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"alpha": None},
            {"alpha": "90"},
            {"alpha": True},
            {"alpha": math.nan},
            {"webkitCompassHeading": math.inf},
            {"beta": 10.0, "gamma": 3.0},
        ],
    )
    def test_unrecognised_payloads_are_dropped(self, payload) -> None:
        assert parse_orientation_event(payload) is None
        assert normalize_heading(payload) is None

    def test_none_is_dropped(self) -> None:
        assert normalize_heading(None) is None

    def test_non_numeric_accuracy_falls_back_to_label(self) -> None:
        sample = normalize_heading({"webkitCompassHeading": 45.0, "webkitCompassAccuracy": "bad"})
        assert sample is not None
        assert sample.accuracy_label == "iOS"
