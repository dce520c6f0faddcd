"""Runtime settings for the compass core, read from ``QIBLA_*`` environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from qibla.constants import (
    ALIGN_COOLDOWN_MS,
    ALIGN_TOLERANCE_DEGREES,
    LOCATION_MAXIMUM_AGE_MS,
    LOCATION_TIMEOUT_MS,
    SMOOTHING_FACTOR,
    VIBRATION_PULSE_MS,
)


class QiblaSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="QIBLA_", env_file=".env", extra="ignore")

    align_tolerance_deg: float = Field(default=ALIGN_TOLERANCE_DEGREES, ge=0.0, le=180.0)
    align_cooldown_ms: float = Field(default=ALIGN_COOLDOWN_MS, ge=0.0)
    smoothing_factor: float = Field(default=SMOOTHING_FACTOR, gt=0.0, le=1.0)
    location_timeout_ms: int = Field(default=LOCATION_TIMEOUT_MS, gt=0)
    location_maximum_age_ms: int = Field(default=LOCATION_MAXIMUM_AGE_MS, ge=0)
    location_high_accuracy: bool = True
    vibration_ms: int = Field(default=VIBRATION_PULSE_MS, ge=0)


@lru_cache(maxsize=1)
def get_settings() -> QiblaSettings:
    """Return cached settings."""

    return QiblaSettings()


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


__all__ = ["QiblaSettings", "get_settings", "reset_settings_cache"]
