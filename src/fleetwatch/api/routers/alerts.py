import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from fleetwatch.api.deps import get_fleet_service, get_view_loader
from fleetwatch.api.responses import failure, preflight, success
from fleetwatch.services import FleetDataService, ViewLoader, alert_analytics

logger = logging.getLogger("fleetwatch.api.alerts")
router = APIRouter(prefix="/api", tags=["alerts"])


@router.get("/alerts")
def get_alerts(
    date: Optional[str] = Query(None),
    fleet: FleetDataService = Depends(get_fleet_service),
    loader: ViewLoader = Depends(get_view_loader),
):
    date = date or fleet.sheets.default_date
    ticket = loader.begin("alerts")
    try:
        data = fleet.fetch_ai_alerts(date)
        body = {
            "data": [alert.to_json() for alert in data],
            "date": date,
            "analytics": alert_analytics(data),
        }
    except Exception:
        logger.exception("Error in alerts API")
        return failure("Failed to fetch AI alerts data")
    loader.complete(ticket, body)
    return success(**body)


@router.options("/alerts")
def alerts_preflight():
    return preflight()
