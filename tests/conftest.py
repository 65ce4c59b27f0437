"""
Shared fixtures: synthetic trip files and loaded event stores
"""

import json

import pytest

from fleet_tracking.schemas import Event
from fleet_tracking.services.event_store import EventStore, build_trip
from fleet_tracking.utils import iso_from_ms
from factories import BASE_MS


@pytest.fixture
def make_event():
    """Factory for raw event dicts at BASE_MS + offset (ms)"""
    def _make(offset, event_type="vehicle_telemetry", trip_id="trip_1", **fields):
        data = {
            "event_id": f"{trip_id}-{offset}-{event_type}",
            "event_type": event_type,
            "timestamp": iso_from_ms(BASE_MS + offset),
            "vehicle_id": f"VH_{trip_id}",
            "trip_id": trip_id,
        }
        data.update(fields)
        return data
    return _make


@pytest.fixture
def make_trip():
    """Factory building a Trip straight from raw event dicts"""
    def _make(raw_events, filename="trip.json"):
        return build_trip(filename, [Event.model_validate(e) for e in raw_events])
    return _make


@pytest.fixture
def trips_dir(tmp_path):
    path = tmp_path / "trips"
    path.mkdir()
    return path


@pytest.fixture
def write_trip(trips_dir):
    """Write a JSON trip file (a list is dumped, a str written as-is)"""
    def _write(filename, content):
        path = trips_dir / filename
        if isinstance(content, str):
            path.write_text(content)
        else:
            path.write_text(json.dumps(content))
        return path
    return _write


@pytest.fixture
def load_store(trips_dir, write_trip):
    """Write {filename: events} and return a loaded EventStore"""
    def _load(files):
        for filename, content in files.items():
            write_trip(filename, content)
        store = EventStore(str(trips_dir))
        store.load()
        return store
    return _load

