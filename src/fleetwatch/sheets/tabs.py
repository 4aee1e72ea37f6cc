import logging
from datetime import date, timedelta
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class TabDirectory(Protocol):
    def resolve(self, kind: str, date_label: Optional[str] = None) -> str:
        ...

    def available_dates(self, days: int = 30, today: Optional[date] = None) -> list[str]:
        ...


def format_date_label(value: date) -> str:
    """Render a date the way sheet tabs are named, e.g. '25 August'."""
    return f"{value.day} {value.strftime('%B')}"


class StaticTabDirectory:
    """
    Resolves a reporting date label to a sheet tab id from a fixed mapping.
    Labels without an entry resolve to the default tab for that data kind.
    """

    def __init__(self, default_gid: dict[str, str], date_gids: Optional[dict[str, dict[str, str]]] = None):
        self.default_gid = dict(default_gid)
        self.date_gids = {kind: dict(mapping) for kind, mapping in (date_gids or {}).items()}

    def resolve(self, kind: str, date_label: Optional[str] = None) -> str:
        default = self.default_gid.get(kind, "0")
        if not date_label:
            return default
        gid = self.date_gids.get(kind, {}).get(date_label.strip())
        if gid is None:
            logger.warning("No tab mapped for %s on '%s'; using default tab %s", kind, date_label, default)
            return default
        return gid

    def available_dates(self, days: int = 30, today: Optional[date] = None) -> list[str]:
        start = today or date.today()
        return [format_date_label(start - timedelta(days=offset)) for offset in range(days)]
