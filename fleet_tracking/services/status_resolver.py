"""
Trip status resolution from event logs

Two rules live here:
    terminal_status - computed once per trip at load time over the full log
    resolve_status  - recomputed per request from the events seen so far
"""

from typing import Iterable, Sequence

from fleet_tracking.models import TripStatus
from fleet_tracking.schemas import Event

TRIP_CANCELLED = "trip_cancelled"
TRIP_COMPLETED = "trip_completed"
DEVICE_ERROR = "device_error"
SIGNAL_LOST = "signal_lost"

# device_error counts above which a trip is flagged, once past its end time
# and while still running. Kept separate on purpose.
ENDED_DEVICE_ERROR_THRESHOLD = 3
RUNNING_DEVICE_ERROR_THRESHOLD = 5


def count_events(events: Iterable[Event], event_type: str) -> int:
    return sum(1 for e in events if e.event_type == event_type)


def has_event(events: Iterable[Event], event_type: str) -> bool:
    return any(e.event_type == event_type for e in events)


def terminal_status(events: Sequence[Event]) -> TripStatus:
    """
    Status of a trip judged from its complete event log

    Returns:
        CANCELLED if the log holds a trip_cancelled event
        COMPLETED if it holds a trip_completed event
        TECHNICAL_ISSUES if it holds any device_error or signal_lost event
        IN_PROGRESS otherwise
    """
    if has_event(events, TRIP_CANCELLED):
        return TripStatus.CANCELLED
    if has_event(events, TRIP_COMPLETED):
        return TripStatus.COMPLETED
    if has_event(events, DEVICE_ERROR) or has_event(events, SIGNAL_LOST):
        return TripStatus.TECHNICAL_ISSUES
    return TripStatus.IN_PROGRESS


def resolve_status(
    events: Sequence[Event],
    query_time: int,
    trip_end_time: int,
    stored_status: TripStatus,
) -> TripStatus:
    """
    Status of a trip as observed at query_time (epoch ms)

    Only events with timestamp <= query_time are considered. A cancellation
    wins over everything. Once the trip's end time has passed, a completion
    event decides; failing that, more than 3 device errors mean technical
    issues and otherwise the stored terminal status applies. Before the end
    time, more than 5 device errors mean technical issues.

    Queries before the trip's first event are the caller's business.
    """
    relevant = [e for e in events if e.timestamp_ms <= query_time]

    if has_event(relevant, TRIP_CANCELLED):
        return TripStatus.CANCELLED

    device_errors = count_events(relevant, DEVICE_ERROR)

    if query_time >= trip_end_time:
        if has_event(relevant, TRIP_COMPLETED):
            return TripStatus.COMPLETED
        if device_errors > ENDED_DEVICE_ERROR_THRESHOLD:
            return TripStatus.TECHNICAL_ISSUES
        return stored_status

    if device_errors > RUNNING_DEVICE_ERROR_THRESHOLD:
        return TripStatus.TECHNICAL_ISSUES
    return TripStatus.IN_PROGRESS
