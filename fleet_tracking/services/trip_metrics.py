"""
Point-in-time metrics for a single trip
"""

from typing import Iterable, Optional, Tuple

from fleet_tracking.models import Trip, TripStatus
from fleet_tracking.schemas import Coordinates, Event, TripMetrics
from fleet_tracking.services.event_store import EventStore
from fleet_tracking.services.status_resolver import (
    DEVICE_ERROR,
    SIGNAL_LOST,
    count_events,
    resolve_status,
)
from fleet_tracking.utils import iso_from_ms, now_ms, round_half_away

ALERT_EVENT_TYPES = frozenset({
    "speed_violation",
    "battery_low",
    "fuel_level_low",
    "device_error",
})

MS_PER_MINUTE = 60 * 1000


def is_alert(event: Event) -> bool:
    return event.event_type in ALERT_EVENT_TYPES


def speed_samples(events: Iterable[Event]) -> Tuple[float, int]:
    """Sum and count of the speed readings carried by events"""
    total = 0.0
    count = 0
    for event in events:
        speed = event.reported_speed
        if speed is not None:
            total += speed
            count += 1
    return total, count


def relevant_and_last(trip: Trip, query_time: int) -> Tuple[Tuple[Event, ...], Event]:
    """
    Events up to query_time and the event to read current state from

    Before the first event the trip's first event stands in as the last one.
    """
    relevant = trip.events_until(query_time)
    last_event = relevant[-1] if relevant else trip.events[0]
    return relevant, last_event


def completion_percentage(trip: Trip) -> int:
    """Completion from the trip's final distance, capped at 100"""
    if trip.planned_distance and trip.total_distance:
        return min(100, round_half_away(trip.total_distance / trip.planned_distance * 100))
    return 100 if trip.status == TripStatus.COMPLETED else 0


def calculate_trip_metrics(trip: Trip, query_time: int) -> TripMetrics:
    relevant, last_event = relevant_and_last(trip, query_time)

    status = resolve_status(trip.events, query_time, trip.end_time, trip.status)

    total_speed, speed_count = speed_samples(relevant)
    average_speed = round_half_away(total_speed / speed_count, 2) if speed_count else 0
    current_speed = last_event.reported_speed or 0

    total_distance = trip.total_distance or 0
    planned_distance = trip.planned_distance or 0

    location = None
    if last_event.location is not None:
        location = Coordinates(lat=last_event.location.lat, lng=last_event.location.lng)

    return TripMetrics(
        tripId=trip.id,
        name=trip.name,
        status=status.value,
        completionPercentage=completion_percentage(trip),
        totalDistance=round_half_away(total_distance, 2),
        plannedDistance=round_half_away(planned_distance, 2),
        distanceRemaining=round_half_away(max(0, planned_distance - total_distance), 2),
        averageSpeed=average_speed,
        currentSpeed=round_half_away(current_speed, 2),
        totalAlerts=sum(1 for e in relevant if is_alert(e)),
        signalIssues=count_events(relevant, SIGNAL_LOST),
        deviceErrors=count_events(relevant, DEVICE_ERROR),
        startTime=iso_from_ms(trip.start_time),
        endTime=iso_from_ms(trip.end_time) if trip.status == TripStatus.COMPLETED else None,
        duration=round_half_away((query_time - trip.start_time) / MS_PER_MINUTE),
        currentLocation=location,
    )


def compute_trip_metrics(
    store: EventStore,
    trip_id: str,
    query_time: Optional[int] = None,
) -> Optional[TripMetrics]:
    """
    Metrics for one trip as of query_time (epoch ms, defaults to now)

    Returns None if the trip id is unknown.
    """
    trip = store.get_by_id(trip_id)
    if trip is None:
        return None
    if query_time is None:
        query_time = now_ms()
    return calculate_trip_metrics(trip, query_time)
