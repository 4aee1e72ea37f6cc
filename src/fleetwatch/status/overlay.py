from __future__ import annotations

import logging
import threading
from datetime import UTC, datetime
from typing import Any, Optional, Sequence

from fleetwatch.data.records import OfflineReport, VehicleStatusOverride
from fleetwatch.status.store import StatusStore

logger = logging.getLogger(__name__)


class StatusOverlay:
    """
    In-memory view of vehicle status overrides, kept in sync with a StatusStore.
    Built once at startup and shared by request handlers.
    """

    def __init__(self, store: StatusStore, author_tag: str = "Admin"):
        self.store = store
        self.author_tag = author_tag
        self._overrides: dict[str, VehicleStatusOverride] = {}
        self._lock = threading.Lock()

    def load(self) -> dict[str, VehicleStatusOverride]:
        """Reload every override from the store."""
        rows = self.store.list_all()
        mapping = {row.vehicle_number: row for row in rows}
        with self._lock:
            self._overrides = mapping
            return dict(self._overrides)

    def overrides(self) -> dict[str, VehicleStatusOverride]:
        with self._lock:
            return dict(self._overrides)

    def update_status(self, vehicle_number: str, status: str, reason: Optional[str] = "") -> VehicleStatusOverride:
        override = VehicleStatusOverride(
            vehicle_number=vehicle_number,
            current_status=status,
            reason=reason or "",
            updated_at=datetime.now(UTC),
            updated_by=self.author_tag,
        )
        saved = self.store.upsert(override)
        with self._lock:
            self._overrides[saved.vehicle_number] = saved
        logger.info("Vehicle %s marked %s", saved.vehicle_number, saved.current_status)
        return saved

    def merge(self, reports: Sequence[OfflineReport]) -> list[dict[str, Any]]:
        """Offline rows as JSON dicts, each with its override under 'status' (or None)."""
        current = self.overrides()
        merged = []
        for report in reports:
            row = report.to_json()
            override = current.get(report.vehicle_number)
            row["status"] = override.model_dump(mode="json") if override else None
            merged.append(row)
        return merged
