"""
Simulation timeline endpoints
"""

from fastapi import APIRouter, Depends, HTTPException

from fleet_tracking.config import settings
from fleet_tracking.schemas import SimulationWindow
from fleet_tracking.services.event_store import EventStore
from fleet_tracking.store import get_store

router = APIRouter()


@router.get("/window", response_model=SimulationWindow)
async def simulation_window(store: EventStore = Depends(get_store)):
    """
    Time span a dashboard can scrub through, from the earliest trip start
    to the latest trip end
    """
    bounds = store.time_bounds()
    if bounds is None:
        raise HTTPException(status_code=404, detail="No trips loaded")
    start, end = bounds
    return SimulationWindow(
        startTime=start,
        endTime=end,
        tripCount=len(store),
        defaultSpeed=settings.SIMULATION_DEFAULT_SPEED,
    )
