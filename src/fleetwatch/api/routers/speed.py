import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from fleetwatch.api.deps import get_fleet_service, get_view_loader
from fleetwatch.api.responses import failure, preflight, success
from fleetwatch.services import FleetDataService, ViewLoader, speed_analytics

logger = logging.getLogger("fleetwatch.api.speed")
router = APIRouter(prefix="/api", tags=["speed"])


@router.get("/speed")
def get_speed(
    date: Optional[str] = Query(None),
    fleet: FleetDataService = Depends(get_fleet_service),
    loader: ViewLoader = Depends(get_view_loader),
):
    date = date or fleet.sheets.default_date
    ticket = loader.begin("speed")
    try:
        data = fleet.fetch_speed_events(date)
        body = {
            "data": [event.to_json() for event in data],
            "date": date,
            "analytics": speed_analytics(
                data,
                warning=fleet.thresholds.speed_warning,
                alarm=fleet.thresholds.speed_alarm,
            ),
        }
    except Exception:
        logger.exception("Error in speed API")
        return failure("Failed to fetch speed alarm data")
    loader.complete(ticket, body)
    return success(**body)


@router.options("/speed")
def speed_preflight():
    return preflight()
