"""
Events API endpoints
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional, List, Dict

from fleet_tracking.schemas import Event
from fleet_tracking.services.event_store import EventStore
from fleet_tracking.store import get_store

router = APIRouter()


@router.get("/trips/{trip_id}/events", response_model=List[Event], response_model_exclude_none=True)
async def list_trip_events(
    trip_id: str,
    upTo: Optional[int] = Query(None, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    store: EventStore = Depends(get_store),
):
    """
    Events of a trip up to upTo (epoch ms, inclusive), then truncated to limit

    Unknown trips yield an empty list.
    """
    return store.get_trip_events(trip_id, up_to=upTo, limit=limit)


@router.get("/current", response_model=Dict[str, Event], response_model_exclude_none=True)
async def current_events(
    simTime: int = Query(..., ge=0),
    store: EventStore = Depends(get_store),
):
    """
    Latest event of every trip at simTime
    """
    return store.latest_events(simTime)
