from __future__ import annotations

from typing import Optional

from fastapi import Request

from fleetwatch.config import Settings, settings
from fleetwatch.data.storage import Database
from fleetwatch.services import FleetDataService, ViewLoader
from fleetwatch.sheets import GoogleSheetsProvider, SheetsProvider, StaticTabDirectory, TabDirectory
from fleetwatch.status import SqliteStatusStore, StatusOverlay, StatusStore


def build_provider(cfg: Settings = settings) -> SheetsProvider:
    return GoogleSheetsProvider(
        service_account_file=cfg.sheets.service_account_file,
        api_key=cfg.sheets.api_key,
        timeout_seconds=cfg.sheets.timeout_seconds,
        max_attempts=cfg.sheets.max_attempts,
        backoff_seconds=cfg.sheets.backoff_seconds,
    )


def build_tab_directory(cfg: Settings = settings) -> TabDirectory:
    return StaticTabDirectory(default_gid=cfg.sheets.default_gid, date_gids=cfg.sheets.date_gids)


def build_status_store(cfg: Settings = settings) -> StatusStore:
    backend = (cfg.storage.backend or "sqlite").strip().lower()
    if backend == "supabase":
        from fleetwatch.status.store_supabase import SupabaseStatusStore

        return SupabaseStatusStore(
            url=cfg.storage.supabase_url,
            api_key=cfg.storage.supabase_key,
            table=cfg.storage.table,
            timeout_seconds=cfg.storage.timeout_seconds,
        )
    if backend == "firestore":
        from fleetwatch.status.store_firestore import FirestoreStatusStore

        return FirestoreStatusStore(
            project_id=cfg.storage.firestore_project_id,
            database=cfg.storage.firestore_database,
            collection=cfg.storage.firestore_collection,
        )
    return SqliteStatusStore(Database(cfg.storage.db_path, table=cfg.storage.table))


def build_state(
    cfg: Settings = settings,
    provider: Optional[SheetsProvider] = None,
    status_store: Optional[StatusStore] = None,
    tabs: Optional[TabDirectory] = None,
) -> dict:
    """Construct the long-lived services once; handlers receive them through app.state."""
    tabs = tabs or build_tab_directory(cfg)
    fleet = FleetDataService(
        provider=provider or build_provider(cfg),
        tabs=tabs,
        sheets=cfg.sheets,
        thresholds=cfg.thresholds,
    )
    overlay = StatusOverlay(store=status_store or build_status_store(cfg), author_tag=cfg.storage.author_tag)
    return {"fleet": fleet, "overlay": overlay, "tabs": tabs, "loader": ViewLoader()}


def get_fleet_service(request: Request) -> FleetDataService:
    return request.app.state.fleet


def get_status_overlay(request: Request) -> StatusOverlay:
    return request.app.state.overlay


def get_tab_directory(request: Request) -> TabDirectory:
    return request.app.state.tabs


def get_view_loader(request: Request) -> ViewLoader:
    return request.app.state.loader
