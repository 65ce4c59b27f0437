"""
Tests — Settings loading and shared helpers
"""

from datetime import datetime, timezone

import pytest

from fleet_tracking.config import Settings
from fleet_tracking.schemas import Event
from fleet_tracking.utils import iso_from_ms, round_half_away, to_epoch_ms


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.JWT_ALGORITHM == "HS256"
        assert settings.TRIPS_DATA_DIR == "data/trips"
        assert settings.SIMULATION_DEFAULT_SPEED == 5

    def test_override_via_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRIPS_DATA_DIR", "/srv/trips")
        monkeypatch.setenv("FAIL_ON_MISSING_DATA", "true")
        monkeypatch.setenv("SIMULATION_DEFAULT_SPEED", "10")

        settings = Settings()
        assert settings.TRIPS_DATA_DIR == "/srv/trips"
        assert settings.FAIL_ON_MISSING_DATA is True
        assert settings.SIMULATION_DEFAULT_SPEED == 10


class TestRounding:
    @pytest.mark.parametrize("value, ndigits, expected", [
        (2.345, 2, 2.35),
        (1.005, 2, 1.01),
        (10.671666, 2, 10.67),
        (0.5, 0, 1),
        (2.5, 0, 3),
        (-2.5, 0, -3),
        (24.4, 0, 24),
    ])
    def test_half_away_from_zero(self, value, ndigits, expected) -> None:
        assert round_half_away(value, ndigits) == expected

    def test_integer_result_for_zero_digits(self) -> None:
        assert isinstance(round_half_away(12.5), int)

    def test_values_wider_than_default_precision(self) -> None:
        assert round_half_away(1.6666666666666667e28) == 16666666666666667000000000000
        assert round_half_away(1e30, 2) == 1e30

    def test_non_finite_passes_through(self) -> None:
        assert round_half_away(float("inf")) == float("inf")


class TestTime:
    def test_iso_from_ms(self) -> None:
        assert iso_from_ms(0) == "1970-01-01T00:00:00.000Z"
        assert iso_from_ms(1_700_000_000_123) == "2023-11-14T22:13:20.123Z"

    def test_epoch_round_trip(self) -> None:
        moment = datetime(2025, 11, 3, 8, 0, 0, 250_000, tzinfo=timezone.utc)
        assert iso_from_ms(to_epoch_ms(moment)) == "2025-11-03T08:00:00.250Z"

    def test_naive_event_timestamps_are_utc(self) -> None:
        event = Event.model_validate({
            "event_id": "e1",
            "event_type": "trip_started",
            "timestamp": "2025-11-03T08:00:00",
            "vehicle_id": "VH_001",
            "trip_id": "trip_1",
        })
        assert event.timestamp.tzinfo is not None
        assert event.timestamp_ms == to_epoch_ms(datetime(2025, 11, 3, 8, tzinfo=timezone.utc))

    def test_offset_timestamps_normalised(self) -> None:
        event = Event.model_validate({
            "event_id": "e1",
            "event_type": "trip_started",
            "timestamp": "2025-11-03T10:00:00+02:00",
            "vehicle_id": "VH_001",
            "trip_id": "trip_1",
        })
        assert event.timestamp_ms == to_epoch_ms(datetime(2025, 11, 3, 8, tzinfo=timezone.utc))
