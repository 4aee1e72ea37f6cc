from __future__ import annotations

import logging
from typing import Any, Optional

import requests
from pydantic import ValidationError

from fleetwatch.data.records import VehicleStatusOverride
from fleetwatch.exceptions import ConfigError, StatusStoreError
from fleetwatch.status.store import valid_overrides

logger = logging.getLogger(__name__)


class SupabaseStatusStore:
    """
    Status overlay backed by a hosted Postgres table through the Supabase REST (PostgREST) API.
    Mirrors the StatusStore interface used by the overlay service.
    """

    def __init__(
        self,
        *,
        url: Optional[str],
        api_key: Optional[str],
        table: str = "offline_status",
        timeout_seconds: float = 15.0,
        session: Optional[requests.Session] = None,
    ):
        if not url or not api_key:
            raise ConfigError("Supabase backend requested but STORAGE__SUPABASE_URL / STORAGE__SUPABASE_KEY are not set")
        self.endpoint = f"{url.rstrip('/')}/rest/v1/{table}"
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            }
        )

    def _request(self, method: str, **kwargs) -> Any:
        try:
            resp = self.session.request(method, self.endpoint, timeout=self.timeout_seconds, **kwargs)
        except requests.RequestException as exc:
            raise StatusStoreError(f"Supabase request failed: {exc}") from exc
        if resp.status_code >= 400:
            raise StatusStoreError(f"Supabase {method} {resp.status_code}: {resp.text[:200]}")
        return resp.json() if resp.content else None

    def list_all(self) -> list[VehicleStatusOverride]:
        rows = self._request("GET", params={"select": "*"}) or []
        return valid_overrides(rows, self._as_override)

    def upsert(self, override: VehicleStatusOverride) -> VehicleStatusOverride:
        rows = self._request(
            "POST",
            params={"on_conflict": "vehicle_number"},
            headers={"Prefer": "resolution=merge-duplicates,return=representation"},
            json=override.to_row(),
        )
        if isinstance(rows, list) and rows:
            try:
                return self._as_override(rows[0])
            except ValidationError:
                logger.warning("Upserted row for %s came back invalid; keeping submitted values", override.vehicle_number)
        return override

    @staticmethod
    def _as_override(row: dict[str, Any]) -> VehicleStatusOverride:
        return VehicleStatusOverride(
            vehicle_number=row.get("vehicle_number"),
            current_status=row.get("current_status"),
            reason=row.get("reason") or "",
            updated_at=row.get("updated_at"),
            updated_by=row.get("updated_by"),
        )
