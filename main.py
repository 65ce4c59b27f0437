"""
Fleet Tracking FastAPI Application
Serves trip event logs and point-in-time fleet metrics
"""

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import uvicorn

from fleet_tracking.auth import get_current_user
from fleet_tracking.config import settings
from fleet_tracking.logging_config import configure_logging
from fleet_tracking.routers import auth, events, metrics, simulation, trips
from fleet_tracking.schemas import HealthResponse
from fleet_tracking.store import init_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    configure_logging(settings.LOG_LEVEL)
    logger.info("Starting Fleet Tracking API...")
    app.state.event_store = init_store()
    logger.info(f"Serving {len(app.state.event_store)} trips")
    yield
    logger.info("Application shut down")


app = FastAPI(
    title="Fleet Tracking API",
    description="Trip event logs and time-windowed fleet metrics",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Public routes
app.include_router(auth.router, prefix="/api/auth", tags=["authentication"])

# Protected routes
protected = [Depends(get_current_user)]
app.include_router(trips.router, prefix="/api/trips", tags=["trips"], dependencies=protected)
app.include_router(events.router, prefix="/api/events", tags=["events"], dependencies=protected)
app.include_router(metrics.router, prefix="/api/metrics", tags=["metrics"], dependencies=protected)
app.include_router(simulation.router, prefix="/api/simulation", tags=["simulation"], dependencies=protected)


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "status": "ok",
        "message": "Fleet Tracking API is running",
        "version": "1.0.0"
    }


@app.get("/health", response_model=HealthResponse)
async def health(request: Request):
    """Detailed health check"""
    store = request.app.state.event_store
    return HealthResponse(
        status="healthy" if store.is_loaded else "degraded",
        trips_loaded=store.is_loaded,
        trip_count=len(store),
    )


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
