from fastapi import APIRouter, Depends, HTTPException, Query

from fleetwatch.api.deps import get_tab_directory, get_view_loader
from fleetwatch.api.responses import success
from fleetwatch.config import settings
from fleetwatch.services import ViewLoader
from fleetwatch.sheets import TabDirectory

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok", "version": settings.app.version}


@router.get("/api/dates")
def available_dates(
    days: int = Query(30, ge=1, le=366),
    tabs: TabDirectory = Depends(get_tab_directory),
):
    return success(data=tabs.available_dates(days=days))


@router.post("/api/refresh")
def refresh(loader: ViewLoader = Depends(get_view_loader)):
    refreshed_at = loader.refresh()
    return success(refreshed_at=refreshed_at.isoformat())


@router.get("/api/views/{view}")
def latest_view(view: str, loader: ViewLoader = Depends(get_view_loader)):
    """Last published payload of a view (alerts, speed, offline)."""
    payload = loader.latest(view)
    if payload is None:
        raise HTTPException(status_code=404, detail=f"No loaded data for view '{view}'")
    return success(**payload, refreshed_at=loader.refreshed_at.isoformat())
