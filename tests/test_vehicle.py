from unittest.mock import MagicMock

import pytest

from car_race_simulator.core.errors import InvalidTransitionError
from car_race_simulator.core.events import (
    FinishEvent,
    PrepareEvent,
    ProgressEvent,
    RaceStartEvent,
)
from car_race_simulator.core.vehicle import Vehicle
from tests.test_utils import scripted_rng


@pytest.mark.parametrize(
    ("kind", "expected_speed"),
    [
        ("Performance", 17),
        ("Standard", 12),
        ("Cargo", 9),
        ("Transit", 10),
    ],
)
def test_prepare_applies_kind_modifier_once(kind, expected_speed):
    rng = scripted_rng(base_speed=12)
    vehicle = Vehicle("V", kind, rng=rng)

    event = vehicle.prepare()

    rng.randrange.assert_called_once_with(5, 20)
    assert vehicle.base_speed == 12
    assert vehicle.speed == expected_speed
    assert vehicle.status == "Preparing"
    assert isinstance(event, PrepareEvent)
    assert (event.vehicle_name, event.kind, event.base_speed, event.speed) == (
        "V",
        kind,
        12,
        expected_speed,
    )


def test_prepare_notes_follow_kind():
    notes = {
        kind: Vehicle("V", kind, rng=scripted_rng(10)).prepare().note
        for kind in ("Performance", "Standard", "Cargo", "Transit")
    }
    assert notes == {
        "Performance": "tunes the turbo",
        "Standard": None,
        "Cargo": "checks the cargo",
        "Transit": "closes the doors",
    }


def test_prepare_twice_is_rejected():
    vehicle = Vehicle("V", rng=scripted_rng(10))
    vehicle.prepare()

    with pytest.raises(InvalidTransitionError):
        vehicle.prepare()


def test_run_before_prepare_is_rejected():
    vehicle = Vehicle("V", rng=scripted_rng(10))

    with pytest.raises(InvalidTransitionError):
        vehicle.run()
    assert vehicle.status == "Idle"


def test_forced_performance_run_reaches_finish_in_four_ticks():
    sleep = MagicMock()
    vehicle = Vehicle(
        "A",
        "Performance",
        rng=scripted_rng(base_speed=20),
        tick_seconds=0.2,
        sleep=sleep,
    )
    vehicle.prepare()

    events = list(vehicle.run())

    assert events == [
        RaceStartEvent("A"),
        ProgressEvent("A", 1, 25),
        ProgressEvent("A", 2, 50),
        ProgressEvent("A", 3, 75),
        ProgressEvent("A", 4, 100),
        FinishEvent("A", 4),
    ]
    assert sleep.call_count == 4
    sleep.assert_called_with(0.2)
    assert vehicle.finished


def test_run_is_lazy():
    sleep = MagicMock()
    vehicle = Vehicle("A", rng=scripted_rng(10), sleep=sleep)
    vehicle.prepare()

    laps = vehicle.run()

    assert vehicle.status == "Racing"
    sleep.assert_not_called()
    assert next(laps) == RaceStartEvent("A")
    sleep.assert_not_called()


def test_position_is_clamped_at_finish_line():
    vehicle = Vehicle("A", rng=scripted_rng(19, deltas=[3] * 10), tick_seconds=0)
    vehicle.prepare()

    positions = [e.position for e in vehicle.run() if isinstance(e, ProgressEvent)]

    assert positions == [22, 44, 66, 88, 100]


def test_negative_step_leaves_position_unchanged():
    # Cargo with the lowest base speed: 5 - 3 = 2, so a -3 delta is a step of -1
    vehicle = Vehicle(
        "Slow",
        "Cargo",
        rng=scripted_rng(5, deltas=[-3, -3] + [3] * 20),
        tick_seconds=0,
    )
    vehicle.prepare()

    positions = [e.position for e in vehicle.run() if isinstance(e, ProgressEvent)]

    assert positions[:3] == [0, 0, 5]
    assert positions == sorted(positions)
    assert positions[-1] == 100


def test_unseeded_vehicles_always_finish_monotonically():
    for kind in ("Performance", "Standard", "Cargo", "Transit"):
        vehicle = Vehicle("V", kind, tick_seconds=0)
        vehicle.prepare()

        positions = [
            e.position for e in vehicle.run() if isinstance(e, ProgressEvent)
        ]

        assert positions == sorted(positions)
        assert all(0 <= p <= 100 for p in positions)
        assert positions[-1] == 100
        assert vehicle.finished


def test_vehicles_own_separate_generators():
    first = Vehicle("A")
    second = Vehicle("B")
    assert first.rng is not second.rng
