import logging
from datetime import date as date_cls
from typing import Optional

from fastapi import APIRouter, Depends, Query

from fleetwatch.api.deps import get_fleet_service, get_status_overlay, get_view_loader
from fleetwatch.api.responses import failure, preflight, success
from fleetwatch.data.records import StatusUpdate
from fleetwatch.exceptions import StatusStoreError
from fleetwatch.services import FleetDataService, ViewLoader, offline_analytics
from fleetwatch.sheets import format_date_label
from fleetwatch.status import StatusOverlay

logger = logging.getLogger("fleetwatch.api.offline")
router = APIRouter(prefix="/api", tags=["offline"])


@router.get("/offline")
def get_offline(
    date: Optional[str] = Query(None),
    fleet: FleetDataService = Depends(get_fleet_service),
    overlay: StatusOverlay = Depends(get_status_overlay),
    loader: ViewLoader = Depends(get_view_loader),
):
    # Offline reports have a single tab; the date is only echoed back.
    date = date or format_date_label(date_cls.today())
    ticket = loader.begin("offline")
    try:
        data = fleet.fetch_offline_reports()
        try:
            overrides = overlay.load()
        except StatusStoreError:
            logger.exception("Error loading status updates; using cached overrides")
            overrides = overlay.overrides()
        body = {
            "data": overlay.merge(data),
            "date": date,
            "count": len(data),
            "analytics": offline_analytics(
                data,
                overrides,
                critical_hours=fleet.thresholds.offline_critical_hours,
            ),
        }
    except Exception:
        logger.exception("Error in offline API")
        return failure("Failed to fetch offline reports")
    loader.complete(ticket, body)
    return success(**body)


@router.options("/offline")
def offline_preflight():
    return preflight()


@router.get("/offline/status")
def list_statuses(overlay: StatusOverlay = Depends(get_status_overlay)):
    overrides = overlay.load()
    return success(data={vehicle: o.model_dump(mode="json") for vehicle, o in overrides.items()})


@router.put("/offline/status/{vehicle_number}")
def update_status(
    vehicle_number: str,
    update: StatusUpdate,
    overlay: StatusOverlay = Depends(get_status_overlay),
):
    saved = overlay.update_status(vehicle_number, update.status, update.reason)
    return success(data=saved.model_dump(mode="json"))
