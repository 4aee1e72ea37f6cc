from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional, Protocol

from fleetwatch.data.records import VehicleStatusOverride
from fleetwatch.data.storage import Database

logger = logging.getLogger(__name__)


class StatusStore(Protocol):
    def list_all(self) -> list[VehicleStatusOverride]:
        ...

    def upsert(self, override: VehicleStatusOverride) -> VehicleStatusOverride:
        ...


def valid_overrides(rows: Iterable[Any], build: Callable[[Any], VehicleStatusOverride]) -> list[VehicleStatusOverride]:
    """Build overrides from stored rows, logging and skipping rows that fail validation."""
    overrides = []
    for row in rows:
        try:
            overrides.append(build(row))
        except ValueError as exc:
            logger.warning("Skipping invalid status row %r: %s", row, exc)
    return overrides


class SqliteStatusStore:
    """
    Local status overlay table. Upsert replaces the row for a vehicle number (last write wins).
    """

    def __init__(self, db: Database):
        self.db = db

    def list_all(self) -> list[VehicleStatusOverride]:
        with self.db._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"SELECT vehicle_number, current_status, reason, updated_at, updated_by "
                f"FROM {self.db.table} ORDER BY id"
            )
            return valid_overrides(cur.fetchall(), lambda row: VehicleStatusOverride(**dict(row)))

    def upsert(self, override: VehicleStatusOverride) -> VehicleStatusOverride:
        row = override.to_row()
        with self.db._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"""
                INSERT INTO {self.db.table}
                    (vehicle_number, current_status, reason, updated_at, updated_by)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(vehicle_number) DO UPDATE SET
                    current_status = excluded.current_status,
                    reason = excluded.reason,
                    updated_at = excluded.updated_at,
                    updated_by = excluded.updated_by
                """,
                (
                    row["vehicle_number"],
                    row["current_status"],
                    row["reason"],
                    row["updated_at"],
                    row["updated_by"],
                ),
            )
            conn.commit()
        return self.get(override.vehicle_number) or override

    def get(self, vehicle_number: str) -> Optional[VehicleStatusOverride]:
        with self.db._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"SELECT vehicle_number, current_status, reason, updated_at, updated_by "
                f"FROM {self.db.table} WHERE vehicle_number = ?",
                (vehicle_number,),
            )
            row = cur.fetchone()
        return VehicleStatusOverride(**dict(row)) if row else None
