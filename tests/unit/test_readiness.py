import datetime as dt

import pytest

from app.services.readiness import LifecycleState, ReadinessGate, can_transition


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


def test_initialize_enters_starting():
    gate = ReadinessGate()
    gate.initialize()

    assert gate.state == LifecycleState.STARTING
    assert gate.is_ready() is False
    assert gate.started_at.tzinfo is not None


def test_initialize_twice_is_rejected():
    gate = ReadinessGate()
    gate.initialize()

    with pytest.raises(RuntimeError):
        gate.initialize()


def test_mark_ready_is_idempotent():
    gate = ReadinessGate()
    gate.initialize()
    started_at = gate.started_at

    assert gate.mark_ready() is True
    assert gate.mark_ready() is False
    assert gate.state == LifecycleState.READY
    assert gate.is_ready() is True
    assert gate.started_at == started_at


def test_mark_ready_requires_initialize():
    gate = ReadinessGate()

    with pytest.raises(RuntimeError):
        gate.mark_ready()
    assert gate.is_ready() is False


def test_no_transition_back_to_starting():
    assert can_transition(LifecycleState.STARTING, LifecycleState.READY)
    assert not can_transition(LifecycleState.READY, LifecycleState.STARTING)
    assert not can_transition(LifecycleState.READY, LifecycleState.READY)


def test_uptime_is_floored_and_non_decreasing():
    clock = FakeClock()
    fixed = dt.datetime(2026, 1, 1, tzinfo=dt.timezone.utc)
    gate = ReadinessGate(clock=clock, wall_clock=lambda: fixed)
    gate.initialize()

    assert gate.uptime_seconds() == 0
    clock.now += 1.9
    first = gate.uptime_seconds()
    clock.now += 0.2
    second = gate.uptime_seconds()

    assert first == 1
    assert second == 2
    assert second >= first
    assert gate.started_at == fixed


def test_started_at_iso_is_utc_with_milliseconds():
    fixed = dt.datetime(2026, 1, 1, 12, 30, 5, 123456, tzinfo=dt.timezone.utc)
    gate = ReadinessGate(wall_clock=lambda: fixed)
    gate.initialize()

    assert gate.started_at_iso == "2026-01-01T12:30:05.123Z"
