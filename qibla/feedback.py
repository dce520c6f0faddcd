"""Dispatch of the haptic pulse and audio tick when the device lines up."""

from __future__ import annotations

import logging
from typing import Optional

from qibla.collaborators import AudioPlayer, HapticPlayer
from qibla.constants import VIBRATION_PULSE_MS

logger = logging.getLogger(__name__)


class FeedbackDispatcher:
    """Requests playback from whichever collaborators the platform provides.

    Either player may be missing (no vibration API, no audio element). A
    player that raises is logged and skipped so the sensor stream keeps
    running.
    """

    def __init__(
        self,
        haptics: Optional[HapticPlayer] = None,
        audio: Optional[AudioPlayer] = None,
        *,
        vibration_ms: int = VIBRATION_PULSE_MS,
    ) -> None:
        if vibration_ms < 0:
            raise ValueError("vibration_ms must be non-negative")
        self._haptics = haptics
        self._audio = audio
        self.vibration_ms = vibration_ms
        self.fired = 0

    def fire(self) -> None:
        self.fired += 1
        if self._haptics is not None:
            try:
                self._haptics.vibrate(self.vibration_ms)
            except Exception:
                logger.exception("haptic feedback failed")
        if self._audio is not None:
            try:
                self._audio.play_tick()
            except Exception:
                logger.exception("audio feedback failed")


__all__ = ["FeedbackDispatcher"]
