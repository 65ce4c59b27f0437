"""
Pydantic schemas for trip events and API responses
"""

from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional
from datetime import datetime, timezone

from fleet_tracking.utils import to_epoch_ms


# Event payload schemas
class Location(BaseModel):
    """GPS fix attached to an event"""
    lat: float
    lng: float
    accuracy_meters: Optional[float] = None
    altitude_meters: Optional[float] = None

    class Config:
        extra = "allow"
        frozen = True


class Movement(BaseModel):
    """Movement reading attached to an event"""
    speed_kmh: Optional[float] = None
    heading_degrees: Optional[float] = None
    moving: Optional[bool] = None

    class Config:
        extra = "allow"
        frozen = True


class Device(BaseModel):
    """Tracker device state attached to an event"""
    battery_level: Optional[float] = None
    charging: Optional[bool] = None

    class Config:
        extra = "allow"
        frozen = True


class Event(BaseModel):
    """
    A single entry of a trip event log

    Type-specific fields (speed_limit_kmh, severity, error_message, ...)
    are kept as extra attributes and passed through untouched.
    """
    event_id: str
    event_type: str
    timestamp: datetime
    vehicle_id: str
    trip_id: str
    device_id: Optional[str] = None
    location: Optional[Location] = None
    movement: Optional[Movement] = None
    device: Optional[Device] = None
    distance_travelled_km: Optional[float] = None
    total_distance_km: Optional[float] = None
    planned_distance_km: Optional[float] = None
    signal_quality: Optional[Any] = None
    overspeed: Optional[Any] = None

    class Config:
        extra = "allow"
        frozen = True
        coerce_numbers_to_str = True

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def timestamp_ms(self) -> int:
        return to_epoch_ms(self.timestamp)

    @property
    def reported_speed(self) -> Optional[float]:
        """Speed reading, if the event carries one"""
        if self.movement is None:
            return None
        return self.movement.speed_kmh


# Trip schemas
class TripSummary(BaseModel):
    """Trip listing entry"""
    id: str
    name: str
    vehicle_id: str
    status: str
    startTime: str
    endTime: str
    totalDistance: Optional[float] = None
    plannedDistance: Optional[float] = None
    eventCount: int


class Coordinates(BaseModel):
    lat: float
    lng: float


class TripMetrics(BaseModel):
    """Point-in-time metrics for one trip"""
    tripId: str
    name: str
    status: str
    completionPercentage: int
    totalDistance: float
    plannedDistance: float
    distanceRemaining: float
    averageSpeed: float
    currentSpeed: float
    totalAlerts: int
    signalIssues: int
    deviceErrors: int
    startTime: str
    endTime: Optional[str] = None
    duration: int  # minutes
    currentLocation: Optional[Coordinates] = None


# Fleet schemas
class CompletionRanges(BaseModel):
    """Trip counts per completion bucket"""
    up_to_25: int = Field(0, alias="0-25%")
    up_to_50: int = Field(0, alias="25-50%")
    up_to_80: int = Field(0, alias="50-80%")
    up_to_100: int = Field(0, alias="80-100%")

    class Config:
        populate_by_name = True


class FleetMetrics(BaseModel):
    """Fleet-wide metrics at a simulation instant"""
    totalTrips: int
    activeTrips: int
    completedTrips: int
    cancelledTrips: int
    technicalIssuesTrips: int
    completionRanges: CompletionRanges
    totalDistance: float
    averageSpeed: float
    totalAlerts: int


class SimulationWindow(BaseModel):
    """Time span covered by the loaded trips (epoch ms)"""
    startTime: int
    endTime: int
    tripCount: int
    defaultSpeed: int


# Auth schemas
class LoginResponse(BaseModel):
    """Login response"""
    access_token: str
    token_type: str = "bearer"


class HealthResponse(BaseModel):
    status: str
    trips_loaded: bool
    trip_count: int
