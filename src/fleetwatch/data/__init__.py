from fleetwatch.data.mappers import map_ai_alerts, map_offline_reports, map_speed_events, parse_number
from fleetwatch.data.records import (
    STATUS_VALUES,
    AIAlert,
    OfflineReport,
    SpeedEvent,
    StatusUpdate,
    VehicleStatusOverride,
)

__all__ = [
    "AIAlert",
    "OfflineReport",
    "STATUS_VALUES",
    "SpeedEvent",
    "StatusUpdate",
    "VehicleStatusOverride",
    "map_ai_alerts",
    "map_offline_reports",
    "map_speed_events",
    "parse_number",
]
