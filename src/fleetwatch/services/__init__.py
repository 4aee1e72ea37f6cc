from fleetwatch.services.analytics import alert_analytics, offline_analytics, speed_analytics
from fleetwatch.services.fleet import FleetDataService
from fleetwatch.services.views import LoadTicket, ViewLoader

__all__ = [
    "FleetDataService",
    "LoadTicket",
    "ViewLoader",
    "alert_analytics",
    "offline_analytics",
    "speed_analytics",
]
