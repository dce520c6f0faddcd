"""Shared pytest fixtures for the compass core tests."""

from __future__ import annotations

from typing import Callable, Dict, List, Mapping, Tuple

import pytest

from qibla import telemetry
from qibla.config import reset_settings_cache


@pytest.fixture(autouse=True)
def _isolate_process_state():
    reset_settings_cache()
    telemetry.set_telemetry_emitter(None)
    yield
    telemetry.set_telemetry_emitter(None)
    reset_settings_cache()


@pytest.fixture
def captured_events() -> List[Tuple[str, Dict[str, object]]]:
    events: List[Tuple[str, Dict[str, object]]] = []

    def emitter(name: str, payload: Mapping[str, object]) -> None:
        events.append((name, dict(payload)))

    telemetry.set_telemetry_emitter(emitter)
    return events


@pytest.fixture
def fake_clock() -> Callable[[float], float]:
    """Millisecond clock advanced explicitly by the test."""

    state = {"now": 0.0}

    def advance(ms: float = 0.0) -> float:
        state["now"] += ms
        return state["now"]

    advance.now = lambda: state["now"]  # type: ignore[attr-defined]
    return advance
