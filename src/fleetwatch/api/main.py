import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fleetwatch.config import Settings, settings
from fleetwatch.exceptions import StatusStoreError
from fleetwatch.api.deps import build_state
from fleetwatch.api.middleware import add_request_id, log_requests
from fleetwatch.api.responses import failure, timestamp
from fleetwatch.sheets import SheetsProvider, TabDirectory
from fleetwatch.status import StatusStore

# Routers
from fleetwatch.api.routers import alerts, offline, speed, system

# Configure logging
logging.basicConfig(level=getattr(logging, settings.logging.level.upper(), logging.INFO))
logger = logging.getLogger("fleetwatch.api")

def create_app(
    cfg: Optional[Settings] = None,
    provider: Optional[SheetsProvider] = None,
    status_store: Optional[StatusStore] = None,
    tabs: Optional[TabDirectory] = None,
) -> FastAPI:
    """
    Factory to build the FastAPI application.
    Collaborators default to the configured ones; tests pass fakes for the sheets provider and status store.
    """
    cfg = cfg or settings
    app = FastAPI(title="Fleetwatch API", version=cfg.app.version)

    for name, value in build_state(cfg, provider=provider, status_store=status_store, tabs=tabs).items():
        setattr(app.state, name, value)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.middleware("http")(add_request_id)
    if cfg.logging.log_requests:
        app.middleware("http")(log_requests)

    app.include_router(system.router)
    app.include_router(alerts.router)
    app.include_router(speed.router)
    app.include_router(offline.router)

    @app.exception_handler(StatusStoreError)
    async def status_store_exception_handler(request: Request, exc: StatusStoreError):
        rid = getattr(request.state, "request_id", None)
        logger.error("Status store failure: %s", exc, extra={"request_id": rid})
        return failure("Status store unavailable", status_code=502)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        from starlette.exceptions import HTTPException as StarletteHTTPException
        if isinstance(exc, StarletteHTTPException):
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

        rid = getattr(request.state, "request_id", None)
        logger.exception("Unhandled error", extra={"path": str(request.url), "request_id": rid})
        payload = {"success": False, "error": "Unexpected server error", "timestamp": timestamp()}
        if rid:
            payload["request_id"] = rid
        return JSONResponse(status_code=500, content=payload)

    return app

# Module-level app for uvicorn entrypoint
app = create_app()
