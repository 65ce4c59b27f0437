"""
Trips API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional, List

from fleet_tracking.schemas import TripSummary, TripMetrics
from fleet_tracking.services.event_store import EventStore
from fleet_tracking.services.trip_metrics import compute_trip_metrics
from fleet_tracking.store import get_store

router = APIRouter()


@router.get("", response_model=List[TripSummary])
async def list_trips(store: EventStore = Depends(get_store)):
    """
    List all trips in discovery order
    """
    return [trip.to_summary() for trip in store.get_all()]


@router.get("/{trip_id}", response_model=TripSummary)
async def get_trip(trip_id: str, store: EventStore = Depends(get_store)):
    """
    Get trip details
    """
    trip = store.get_by_id(trip_id)
    if not trip:
        raise HTTPException(status_code=404, detail="Trip not found")
    return trip.to_summary()


@router.get("/{trip_id}/metrics", response_model=TripMetrics, response_model_exclude_none=True)
async def get_trip_metrics(
    trip_id: str,
    simTime: Optional[int] = Query(None, ge=0),
    store: EventStore = Depends(get_store),
):
    """
    Get trip metrics as of simTime (epoch ms, defaults to now)
    """
    metrics = compute_trip_metrics(store, trip_id, simTime)
    if metrics is None:
        raise HTTPException(status_code=404, detail="Trip not found")
    return metrics
