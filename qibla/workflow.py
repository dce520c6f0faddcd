"""Activation workflow: permission, then location fix, then sensor streams.

Each step yields a :class:`~qibla.errors.StepOutcome` instead of letting
collaborator exceptions escape. The ``active`` guard is claimed before the
first suspension point so a second, interleaved activation cannot register
the sensor listeners twice; it is released again on any failure so the user
can retry from scratch.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from qibla import telemetry
from qibla.collaborators import (
    PERMISSION_GRANTED,
    AudioPlayer,
    HapticPlayer,
    LocationProvider,
    LocationRequestPolicy,
    OrientationChannel,
    OrientationSource,
    PermissionRequester,
)
from qibla.config import QiblaSettings, get_settings
from qibla.constants import MISSING_VALUE_LABEL
from qibla.errors import ErrorKind, QiblaError, StepOutcome
from qibla.feedback import FeedbackDispatcher
from qibla.formatting import (
    GETTING_LOCATION,
    WAITING_FOR_PERMISSIONS,
    accuracy_status_line,
    failure_status_line,
    ready_status_line,
)
from qibla.geodesy import GeoCoordinate
from qibla.overlay import QiblaMapOverlay, build_map_overlay
from qibla.session import CompassSession, CompassUpdate

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[CompassUpdate], None]
StatusCallback = Callable[[str, str], None]
SessionFactory = Callable[[], CompassSession]


@dataclass(frozen=True)
class ActivationResult:
    permission: StepOutcome[str]
    location: StepOutcome[GeoCoordinate]
    heading_line: str
    accuracy_line: str
    session: Optional[CompassSession] = None
    overlay: Optional[QiblaMapOverlay] = None
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None


_SKIPPED: StepOutcome[Any] = StepOutcome()


class ActivationWorkflow:
    def __init__(
        self,
        *,
        permissions: PermissionRequester,
        location: LocationProvider,
        orientation: OrientationSource,
        on_update: UpdateCallback,
        on_status: Optional[StatusCallback] = None,
        haptics: Optional[HapticPlayer] = None,
        audio: Optional[AudioPlayer] = None,
        session_factory: Optional[SessionFactory] = None,
        policy: Optional[LocationRequestPolicy] = None,
        settings: Optional[QiblaSettings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._permissions = permissions
        self._location = location
        self._orientation = orientation
        self._on_update = on_update
        self._on_status = on_status
        self._feedback = FeedbackDispatcher(
            haptics, audio, vibration_ms=self.settings.vibration_ms
        )
        self._session_factory = session_factory or self._default_session
        self.policy = policy or LocationRequestPolicy.from_settings(self.settings)
        self._active = False
        self._session: Optional[CompassSession] = None

    @property
    def active(self) -> bool:
        return self._active

    @property
    def session(self) -> Optional[CompassSession]:
        return self._session

    @property
    def feedback(self) -> FeedbackDispatcher:
        return self._feedback

    def _default_session(self) -> CompassSession:
        return CompassSession.from_settings(self.settings, feedback=self._feedback)

    async def activate(self) -> ActivationResult:
        if self._active:
            logger.debug("activation ignored: session already active")
            return ActivationResult(
                permission=_SKIPPED,
                location=_SKIPPED,
                heading_line="",
                accuracy_line="",
                session=self._session,
                error=ErrorKind.ALREADY_ACTIVE,
            )
        self._active = True
        try:
            return await self._run()
        except BaseException:
            self._active = False
            raise

    async def _run(self) -> ActivationResult:
        self._status(GETTING_LOCATION, WAITING_FOR_PERMISSIONS)

        permission = await self._request_permission()
        if not permission.ok:
            return self._fail(permission, _SKIPPED, permission)

        location = await self._request_location()
        if not location.ok:
            return self._fail(permission, location, location)
        origin = location.value
        if origin is None:
            missing: StepOutcome[GeoCoordinate] = StepOutcome.failure(
                ErrorKind.LOCATION_UNAVAILABLE, "provider returned no position"
            )
            return self._fail(permission, missing, missing)

        session = self._session_factory()
        bearing = session.establish(origin)

        heading_line = ready_status_line(bearing)
        accuracy_line = accuracy_status_line(session.distance_km, None)
        overlay = build_map_overlay(origin)
        self._status(heading_line, accuracy_line)
        self._listen(session)
        self._session = session

        return ActivationResult(
            permission=permission,
            location=location,
            heading_line=heading_line,
            accuracy_line=accuracy_line,
            session=session,
            overlay=overlay,
        )

    async def _request_permission(self) -> StepOutcome[str]:
        try:
            response = await self._permissions.request_orientation_permission()
        except QiblaError as exc:
            return StepOutcome.failure(exc.kind, str(exc))
        if response != PERMISSION_GRANTED:
            return StepOutcome.failure(ErrorKind.PERMISSION_DENIED, f"permission {response}")
        return StepOutcome.success(response)

    async def _request_location(self) -> StepOutcome[GeoCoordinate]:
        try:
            origin = await self._location.get_current_position(self.policy)
        except QiblaError as exc:
            return StepOutcome.failure(exc.kind, str(exc))
        except asyncio.TimeoutError:
            return StepOutcome.failure(
                ErrorKind.LOCATION_UNAVAILABLE,
                f"no fix within {self.policy.timeout_ms} ms",
            )
        return StepOutcome.success(origin)

    def _fail(
        self,
        permission: StepOutcome[str],
        location: StepOutcome[GeoCoordinate],
        failed: StepOutcome[Any],
    ) -> ActivationResult:
        self._active = False
        kind = failed.error or ErrorKind.LOCATION_UNAVAILABLE
        logger.warning("compass activation failed: %s (%s)", kind.value, failed.detail)
        telemetry.record_session_failed(kind.value, failed.detail)

        heading_line = failure_status_line(kind)
        accuracy_line = MISSING_VALUE_LABEL
        self._status(heading_line, accuracy_line)
        return ActivationResult(
            permission=permission,
            location=location,
            heading_line=heading_line,
            accuracy_line=accuracy_line,
            error=kind,
        )

    def _listen(self, session: CompassSession) -> None:
        def handle(event: Mapping[str, Any]) -> None:
            update = session.process(event)
            if update is not None:
                self._on_update(update)

        for channel in OrientationChannel:
            self._orientation.subscribe(channel, handle)

    def _status(self, heading_line: str, accuracy_line: str) -> None:
        if self._on_status is not None:
            self._on_status(heading_line, accuracy_line)


__all__ = ["ActivationResult", "ActivationWorkflow"]
