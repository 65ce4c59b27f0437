"""
Tests — Trip Metrics Calculator
"""

import pytest

from fleet_tracking.services.trip_metrics import compute_trip_metrics
from factories import BASE_MS, MINUTE, loc, speed


@pytest.fixture
def store(load_store, make_event):
    return load_store({
        "trip_1_cross_country.json": [
            make_event(0, "trip_started", planned_distance_km=200.0, distance_travelled_km=0,
                       movement=speed(0), location=loc(10.0, 20.0)),
            make_event(10 * MINUTE, distance_travelled_km=10.0, movement=speed(60), location=loc(10.1, 20.1)),
            make_event(20 * MINUTE, "speed_violation", distance_travelled_km=25.0, movement=speed(95.5),
                       location=loc(10.2, 20.2), speed_limit_kmh=80),
            make_event(30 * MINUTE, "signal_lost", distance_travelled_km=30.0, location=loc(10.3, 20.3)),
            make_event(40 * MINUTE, "device_error", distance_travelled_km=40.0, movement=speed(40),
                       location=loc(10.4, 20.4)),
            make_event(50 * MINUTE, "trip_completed", total_distance_km=50.0, movement=speed(0),
                       location=loc(11.0, 21.0)),
        ],
        "cancelled.json": [make_event(5, "trip_cancelled", trip_id="trip_c")],
    })


def at(minutes):
    return BASE_MS + minutes * MINUTE


class TestComputeTripMetrics:
    def test_unknown_trip(self, store) -> None:
        assert compute_trip_metrics(store, "missing", at(10)) is None

    def test_mid_trip_snapshot(self, store) -> None:
        m = compute_trip_metrics(store, "trip_1", at(30))
        assert m.tripId == "trip_1"
        assert m.name == "Cross-Country Long Haul"
        assert m.status == "in_progress"
        assert m.completionPercentage == 25
        assert m.totalDistance == 50.0
        assert m.plannedDistance == 200.0
        assert m.distanceRemaining == 150.0
        assert m.averageSpeed == 51.83  # (0 + 60 + 95.5) / 3
        assert m.currentSpeed == 0
        assert m.totalAlerts == 1
        assert m.signalIssues == 1
        assert m.deviceErrors == 0
        assert m.duration == 30
        assert m.currentLocation.lat == 10.3
        assert m.currentLocation.lng == 20.3
        assert m.startTime == "2023-11-14T22:13:20.000Z"
        assert m.endTime == "2023-11-14T23:03:20.000Z"

    def test_after_completion(self, store) -> None:
        m = compute_trip_metrics(store, "trip_1", at(50))
        assert m.status == "completed"
        assert m.totalAlerts == 2
        assert m.deviceErrors == 1
        assert m.averageSpeed == 39.1  # (0 + 60 + 95.5 + 40 + 0) / 5
        assert m.currentLocation.lat == 11.0

    def test_far_future_query_time(self, store) -> None:
        m = compute_trip_metrics(store, "trip_1", 10 ** 33)
        assert m.status == "completed"
        assert m.duration > 10 ** 27

    def test_before_start_uses_first_event(self, store) -> None:
        m = compute_trip_metrics(store, "trip_1", at(-5))
        assert m.status == "in_progress"
        assert m.averageSpeed == 0
        assert m.currentSpeed == 0
        assert m.totalAlerts == 0
        assert m.duration == -5
        assert m.currentLocation.lat == 10.0

    def test_completion_is_capped(self, load_store, make_event) -> None:
        store = load_store({"t.json": [
            make_event(0, planned_distance_km=100.0),
            make_event(10, distance_travelled_km=130.0),
        ]})
        m = compute_trip_metrics(store, "trip_1", BASE_MS + 10)
        assert m.completionPercentage == 100
        assert m.distanceRemaining == 0

    def test_completion_without_distances(self, load_store, make_event) -> None:
        store = load_store({
            "done.json": [make_event(0, trip_id="done"), make_event(10, "trip_completed", trip_id="done")],
            "open.json": [make_event(0, trip_id="open"), make_event(10, trip_id="open")],
        })
        done = compute_trip_metrics(store, "done", BASE_MS)
        assert done.completionPercentage == 100
        assert done.totalDistance == 0
        assert done.plannedDistance == 0
        assert compute_trip_metrics(store, "open", BASE_MS).completionPercentage == 0

    def test_end_time_only_for_completed(self, store) -> None:
        m = compute_trip_metrics(store, "trip_c", BASE_MS + 100)
        assert m.endTime is None
        assert m.currentLocation is None

    def test_cancelled_stays_cancelled(self, store) -> None:
        m = compute_trip_metrics(store, "trip_c", BASE_MS + 100)
        assert m.status == "cancelled"
        assert m.completionPercentage == 0

    def test_speeds_are_rounded(self, load_store, make_event) -> None:
        store = load_store({"t.json": [
            make_event(0, movement=speed(10.0)),
            make_event(10, movement=speed(10.0)),
            make_event(20, movement=speed(12.015)),
        ]})
        m = compute_trip_metrics(store, "trip_1", BASE_MS + 20)
        assert m.averageSpeed == 10.67  # 32.015 / 3 = 10.671666...
        assert m.currentSpeed == 12.02

    def test_defaults_to_now(self, store) -> None:
        m = compute_trip_metrics(store, "trip_1")
        assert m.status == "completed"
        assert m.duration > 0


class TestProperties:
    def test_idempotent(self, store) -> None:
        first = compute_trip_metrics(store, "trip_1", at(25))
        second = compute_trip_metrics(store, "trip_1", at(25))
        assert first == second
        assert first.model_dump() == second.model_dump()

    def test_alert_counts_never_decrease(self, store) -> None:
        previous = -1
        for minutes in range(-10, 70, 5):
            alerts = compute_trip_metrics(store, "trip_1", at(minutes)).totalAlerts
            assert alerts >= previous
            previous = alerts

    def test_cancellation_is_sticky(self, load_store, make_event) -> None:
        store = load_store({"t.json": [
            make_event(0, "trip_started"),
            make_event(10, "trip_cancelled"),
            make_event(20, "trip_completed"),
            make_event(30, "device_error"),
        ]})
        for offset in (10, 15, 20, 30, 10_000):
            assert compute_trip_metrics(store, "trip_1", BASE_MS + offset).status == "cancelled"
