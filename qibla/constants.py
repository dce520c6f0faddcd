"""Shared constants for the Qibla compass core."""

from __future__ import annotations

KAABA_LATITUDE = 21.4225
KAABA_LONGITUDE = 39.8262

EARTH_RADIUS_KM = 6371.0

# Alignment window; 3 is stricter, 7 is easier.
ALIGN_TOLERANCE_DEGREES = 5.0
ALIGN_COOLDOWN_MS = 4000.0

SMOOTHING_FACTOR = 0.18

# Turns below this magnitude are displayed as "0°".
TURN_DEADBAND_DEGREES = 0.5

VIBRATION_PULSE_MS = 80

LOCATION_TIMEOUT_MS = 15000
LOCATION_MAXIMUM_AGE_MS = 0

ABSOLUTE_ACCURACY_FALLBACK_LABEL = "iOS"
RELATIVE_ACCURACY_LABEL = "relative"
MISSING_VALUE_LABEL = "--"

MAP_FIT_PADDING_PX = 30
MAP_LINE_COLOR = "#ff3b3b"
MAP_LINE_WEIGHT = 3
MAP_DEFAULT_ZOOM = 15
