"""
Event store: trip event logs loaded from JSON files at startup
"""

import logging
import os
from typing import Dict, List, Optional, Tuple

from pydantic import TypeAdapter, ValidationError

from fleet_tracking.exceptions import DirectoryNotFound, MalformedBatch
from fleet_tracking.models import Trip
from fleet_tracking.schemas import Event
from fleet_tracking.services.status_resolver import terminal_status

logger = logging.getLogger(__name__)

_event_list = TypeAdapter(List[Event])

TRIP_NAMES = {
    "trip_1_cross_country.json": "Cross-Country Long Haul",
    "trip_2_urban_dense.json": "Urban Dense Delivery",
    "trip_3_mountain_cancelled.json": "Mountain Route Cancelled",
    "trip_4_southern_technical.json": "Southern Technical Issues",
    "trip_5_regional_logistics.json": "Regional Logistics",
}


def trip_name_from_file(filename: str) -> str:
    """Human label for a trip file, e.g. 'trip_9_night_run.json' -> 'trip 9 night run'"""
    if filename in TRIP_NAMES:
        return TRIP_NAMES[filename]
    return filename.replace(".json", "").replace("_", " ")


def parse_batch(filename: str, content: bytes) -> List[Event]:
    """Parse one trip file into events, raising MalformedBatch on bad or empty content"""
    try:
        events = _event_list.validate_json(content)
    except ValidationError as e:
        raise MalformedBatch(filename, f"{e.error_count()} validation error(s)") from e
    if not events:
        raise MalformedBatch(filename, "no events")
    return events


def build_trip(filename: str, events: List[Event]) -> Trip:
    """Sort a parsed batch and derive the trip's terminal attributes"""
    ordered = tuple(sorted(events, key=lambda e: e.timestamp_ms))
    first_event = ordered[0]
    last_event = ordered[-1]

    planned_distance = first_event.planned_distance_km
    if planned_distance is not None and planned_distance < 0:
        logger.warning(
            f"Ignoring negative planned distance {planned_distance} in {filename}"
        )
        planned_distance = None

    total_distance = last_event.distance_travelled_km
    if total_distance is None:
        total_distance = next(
            (e.total_distance_km for e in ordered if e.total_distance_km is not None),
            None,
        )

    return Trip(
        id=first_event.trip_id,
        name=trip_name_from_file(filename),
        vehicle_id=first_event.vehicle_id,
        events=ordered,
        start_time=first_event.timestamp_ms,
        end_time=last_event.timestamp_ms,
        status=terminal_status(ordered),
        total_distance=total_distance,
        planned_distance=planned_distance,
    )


class EventStore:
    """
    Read-only registry of trips keyed by trip id

    Populated once by load(); never mutated afterwards.
    """

    def __init__(self, source_directory: str):
        self.source_directory = source_directory
        self._trips: Dict[str, Trip] = {}
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def __len__(self) -> int:
        return len(self._trips)

    def load(self) -> Dict[str, Trip]:
        """
        Load every *.json trip file in the source directory

        Files that cannot be parsed or hold no events are logged and skipped.

        Raises:
            DirectoryNotFound: the source directory does not exist
        """
        if not os.path.isdir(self.source_directory):
            raise DirectoryNotFound(self.source_directory)

        trips: Dict[str, Trip] = {}
        filenames = sorted(f for f in os.listdir(self.source_directory) if f.endswith(".json"))

        for filename in filenames:
            path = os.path.join(self.source_directory, filename)
            try:
                with open(path, "rb") as f:
                    content = f.read()
                events = parse_batch(filename, content)
            except OSError as e:
                logger.warning(f"Skipping unreadable trip file {filename}: {e}")
                continue
            except MalformedBatch as e:
                logger.warning(f"Skipping {e}")
                continue

            trip = build_trip(filename, events)
            if trip.id in trips:
                logger.warning(f"Trip {trip.id} from {filename} replaces an earlier file with the same id")
            trips[trip.id] = trip
            logger.debug(f"Loaded trip {trip.id} ({trip.name}) with {len(trip.events)} events")

        self._trips = trips
        self._loaded = True
        logger.info(f"Loaded {len(trips)} trips from {self.source_directory}")
        return dict(trips)

    def get_all(self) -> List[Trip]:
        return list(self._trips.values())

    def get_by_id(self, trip_id: str) -> Optional[Trip]:
        return self._trips.get(trip_id)

    def get_events(self, trip_id: str) -> Tuple[Event, ...]:
        trip = self._trips.get(trip_id)
        return trip.events if trip else ()

    def get_trip_events(
        self,
        trip_id: str,
        up_to: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Event]:
        """
        Events of a trip, optionally cut at up_to (epoch ms, inclusive)
        and then truncated to the first `limit` entries
        """
        events = list(self.get_events(trip_id))
        if up_to is not None:
            events = [e for e in events if e.timestamp_ms <= up_to]
        if limit is not None:
            events = events[:limit]
        return events

    def latest_events(self, query_time: int) -> Dict[str, Event]:
        """Last event at or before query_time for every trip that has one"""
        current: Dict[str, Event] = {}
        for trip in self._trips.values():
            relevant = trip.events_until(query_time)
            if relevant:
                current[trip.id] = relevant[-1]
        return current

    def time_bounds(self) -> Optional[Tuple[int, int]]:
        """(earliest start, latest end) across all trips, or None when empty"""
        if not self._trips:
            return None
        trips = self._trips.values()
        return min(t.start_time for t in trips), max(t.end_time for t in trips)
