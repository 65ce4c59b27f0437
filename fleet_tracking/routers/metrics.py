"""
Metrics API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from fleet_tracking.schemas import FleetMetrics, TripMetrics
from fleet_tracking.services.event_store import EventStore
from fleet_tracking.services.fleet_metrics import compute_fleet_metrics
from fleet_tracking.services.trip_metrics import compute_trip_metrics
from fleet_tracking.store import get_store

router = APIRouter()


@router.get("/fleet", response_model=FleetMetrics)
async def fleet_metrics(
    simTime: Optional[int] = Query(None, ge=0),
    store: EventStore = Depends(get_store),
):
    """
    Fleet-wide metrics as of simTime (epoch ms, defaults to now)
    """
    return compute_fleet_metrics(store, simTime)


@router.get("/trip/{trip_id}", response_model=TripMetrics, response_model_exclude_none=True)
async def trip_metrics(
    trip_id: str,
    simTime: Optional[int] = Query(None, ge=0),
    store: EventStore = Depends(get_store),
):
    """
    Metrics for a specific trip as of simTime
    """
    metrics = compute_trip_metrics(store, trip_id, simTime)
    if metrics is None:
        raise HTTPException(status_code=404, detail="Trip not found")
    return metrics
