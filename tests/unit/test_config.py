from __future__ import annotations

import pytest
from pydantic import ValidationError

from qibla.config import get_settings, reset_settings_cache


def test_defaults() -> None:
    settings = get_settings()
    assert settings.align_tolerance_deg == 5.0
    assert settings.align_cooldown_ms == 4000.0
    assert settings.smoothing_factor == pytest.approx(0.18)
    assert settings.location_timeout_ms == 15000
    assert settings.location_high_accuracy is True
    assert settings.vibration_ms == 80


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QIBLA_ALIGN_TOLERANCE_DEG", "3")
    monkeypatch.setenv("QIBLA_SMOOTHING_FACTOR", "0.5")
    reset_settings_cache()
    settings = get_settings()
    assert settings.align_tolerance_deg == 3.0
    assert settings.smoothing_factor == 0.5
    assert get_settings() is settings


def test_invalid_factor_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QIBLA_SMOOTHING_FACTOR", "0")
    reset_settings_cache()
    with pytest.raises(ValidationError):
        get_settings()
