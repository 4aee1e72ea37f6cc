from fleetwatch.status.overlay import StatusOverlay
from fleetwatch.status.store import SqliteStatusStore, StatusStore

__all__ = ["SqliteStatusStore", "StatusOverlay", "StatusStore"]
