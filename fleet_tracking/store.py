"""
Event store lifecycle and request dependency
"""

import logging

from fastapi import Request

from fleet_tracking.config import settings
from fleet_tracking.exceptions import DirectoryNotFound
from fleet_tracking.services.event_store import EventStore

logger = logging.getLogger(__name__)


def init_store(data_dir: str = None, fail_on_missing: bool = None) -> EventStore:
    """
    Build and load the event store

    A missing data directory leaves the store empty (degraded mode) unless
    fail_on_missing is set, in which case DirectoryNotFound propagates.
    """
    if data_dir is None:
        data_dir = settings.TRIPS_DATA_DIR
    if fail_on_missing is None:
        fail_on_missing = settings.FAIL_ON_MISSING_DATA

    store = EventStore(data_dir)
    try:
        store.load()
    except DirectoryNotFound as e:
        if fail_on_missing:
            raise
        logger.error(f"{e}; serving zero trips")
    return store


def get_store(request: Request) -> EventStore:
    """Dependency for getting the application's event store"""
    return request.app.state.event_store
