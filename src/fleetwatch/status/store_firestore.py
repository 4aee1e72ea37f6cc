from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Optional

from fleetwatch.data.records import VehicleStatusOverride
from fleetwatch.status.store import valid_overrides


class FirestoreStatusStore:
    """
    Firestore-backed status overlay, one document per vehicle number.
    Mirrors the StatusStore interface used by the overlay service.
    """

    def __init__(
        self,
        *,
        project_id: Optional[str] = None,
        database: str = "(default)",
        collection: str = "offline_status",
        client: Optional[Any] = None,
    ):
        if client is None:
            client = self._build_client(project_id, database)
        self._client = client
        self._collection_name = str(collection).strip() or "offline_status"

    @staticmethod
    def _build_client(project_id: Optional[str], database: str):
        try:
            from google.cloud import firestore
        except Exception as exc:  # pragma: no cover - depends on optional runtime deps
            raise RuntimeError(
                "Firestore backend requested but google-cloud-firestore is not installed"
            ) from exc

        client_kwargs: dict[str, Any] = {}
        if project_id:
            client_kwargs["project"] = project_id
        if database and database != "(default)":
            client_kwargs["database"] = database

        try:
            return firestore.Client(**client_kwargs)
        except TypeError:
            client_kwargs.pop("database", None)
            return firestore.Client(**client_kwargs)

    def _collection(self):
        return self._client.collection(self._collection_name)

    @staticmethod
    def document_id(vehicle_number: str) -> str:
        # Firestore document ids cannot contain '/'.
        return vehicle_number.replace("/", "_")

    def list_all(self) -> list[VehicleStatusOverride]:
        return valid_overrides(self._collection().stream(), self._as_override)

    def upsert(self, override: VehicleStatusOverride) -> VehicleStatusOverride:
        self._collection().document(self.document_id(override.vehicle_number)).set(override.to_row())
        return override

    @classmethod
    def _as_override(cls, doc) -> VehicleStatusOverride:
        data = doc.to_dict() or {}
        return VehicleStatusOverride(
            vehicle_number=data.get("vehicle_number") or doc.id,
            current_status=data.get("current_status"),
            reason=data.get("reason") or "",
            updated_at=cls._as_datetime(data.get("updated_at")),
            updated_by=data.get("updated_by"),
        )

    @staticmethod
    def _as_datetime(value: Any) -> datetime:
        if value is None:
            return datetime.now(UTC)
        if isinstance(value, datetime):
            return value if value.tzinfo else value.replace(tzinfo=UTC)
        parsed = datetime.fromisoformat(str(value))
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
