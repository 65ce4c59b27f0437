"""
In-memory trip records built from event logs
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from fleet_tracking.schemas import Event, TripSummary
from fleet_tracking.utils import iso_from_ms


class TripStatus(str, Enum):
    """Trip lifecycle status"""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    TECHNICAL_ISSUES = "technical_issues"


@dataclass(frozen=True)
class Trip:
    """A trip and its time-ordered event log"""
    id: str
    name: str
    vehicle_id: str
    events: Tuple[Event, ...]
    start_time: int  # epoch ms of first event
    end_time: int  # epoch ms of last event
    status: TripStatus  # terminal status over the full log
    total_distance: Optional[float] = None
    planned_distance: Optional[float] = None

    def events_until(self, query_time: int) -> Tuple[Event, ...]:
        """Events with timestamp <= query_time"""
        return tuple(e for e in self.events if e.timestamp_ms <= query_time)

    def to_summary(self) -> TripSummary:
        return TripSummary(
            id=self.id,
            name=self.name,
            vehicle_id=self.vehicle_id,
            status=self.status.value,
            startTime=iso_from_ms(self.start_time),
            endTime=iso_from_ms(self.end_time),
            totalDistance=self.total_distance,
            plannedDistance=self.planned_distance,
            eventCount=len(self.events),
        )
