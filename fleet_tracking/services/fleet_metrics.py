"""
Fleet-wide metrics at a simulation instant
"""

from typing import Optional

from fleet_tracking.models import Trip, TripStatus
from fleet_tracking.schemas import CompletionRanges, Event, FleetMetrics
from fleet_tracking.services.event_store import EventStore
from fleet_tracking.services.status_resolver import TRIP_COMPLETED, resolve_status
from fleet_tracking.services.trip_metrics import is_alert, relevant_and_last, speed_samples
from fleet_tracking.utils import now_ms, round_half_away


def current_distance(trip: Trip, last_event: Event, query_time: int) -> float:
    """
    Distance covered as of the last seen event

    A trip_completed event's total_distance_km only counts once the trip's
    end time has passed.
    """
    if last_event.distance_travelled_km is not None:
        return last_event.distance_travelled_km
    if (
        last_event.total_distance_km is not None
        and last_event.event_type == TRIP_COMPLETED
        and query_time >= trip.end_time
    ):
        return last_event.total_distance_km
    return 0


def bucket_completion(ranges: CompletionRanges, completion: float) -> None:
    """Count a completion percentage in its range; each range is closed at the top"""
    if completion <= 25:
        ranges.up_to_25 += 1
    elif completion <= 50:
        ranges.up_to_50 += 1
    elif completion <= 80:
        ranges.up_to_80 += 1
    else:
        ranges.up_to_100 += 1


def compute_fleet_metrics(store: EventStore, query_time: Optional[int] = None) -> FleetMetrics:
    """
    Aggregate per-trip state at query_time (epoch ms, defaults to now)

    Trips that have not started yet contribute to totalTrips only.
    """
    if query_time is None:
        query_time = now_ms()

    trips = store.get_all()
    status_counts = {status: 0 for status in TripStatus}
    ranges = CompletionRanges()
    total_distance = 0.0
    total_speed = 0.0
    speed_count = 0
    total_alerts = 0

    for trip in trips:
        if query_time < trip.start_time:
            continue

        relevant, last_event = relevant_and_last(trip, query_time)

        status = resolve_status(trip.events, query_time, trip.end_time, trip.status)
        status_counts[status] += 1

        if trip.planned_distance and trip.planned_distance > 0:
            distance = current_distance(trip, last_event, query_time)
            bucket_completion(ranges, distance / trip.planned_distance * 100)
            total_distance += distance

        trip_speed, trip_samples = speed_samples(relevant)
        total_speed += trip_speed
        speed_count += trip_samples
        total_alerts += sum(1 for e in relevant if is_alert(e))

    return FleetMetrics(
        totalTrips=len(trips),
        activeTrips=status_counts[TripStatus.IN_PROGRESS],
        completedTrips=status_counts[TripStatus.COMPLETED],
        cancelledTrips=status_counts[TripStatus.CANCELLED],
        technicalIssuesTrips=status_counts[TripStatus.TECHNICAL_ISSUES],
        completionRanges=ranges,
        totalDistance=round_half_away(total_distance, 2),
        averageSpeed=round_half_away(total_speed / speed_count, 2) if speed_count else 0,
        totalAlerts=total_alerts,
    )
