import logging
from typing import List, Optional

from fleetwatch.config import SheetSettings, ThresholdSettings, settings
from fleetwatch.data.mappers import map_ai_alerts, map_offline_reports, map_speed_events
from fleetwatch.data.records import AIAlert, OfflineReport, SpeedEvent
from fleetwatch.sheets.csv_parser import parse_csv
from fleetwatch.sheets.provider import SheetsProvider
from fleetwatch.sheets.tabs import TabDirectory

logger = logging.getLogger(__name__)


class FleetDataService:
    """
    Loads the three sheet-backed views.
    Every failure is logged and turned into an empty list; callers see "no data".
    """

    def __init__(
        self,
        provider: SheetsProvider,
        tabs: TabDirectory,
        sheets: Optional[SheetSettings] = None,
        thresholds: Optional[ThresholdSettings] = None,
    ):
        self.provider = provider
        self.tabs = tabs
        self.sheets = sheets or settings.sheets
        self.thresholds = thresholds or settings.thresholds

    def _rows(self, kind: str, sheet_id: str, date_label: Optional[str]) -> List[List[str]]:
        gid = self.tabs.resolve(kind, date_label)
        text = self.provider.fetch_csv(sheet_id, gid)
        return parse_csv(text)

    def fetch_offline_reports(self) -> List[OfflineReport]:
        try:
            rows = self._rows("offline", self.sheets.offline_sheet_id, None)
            return map_offline_reports(
                rows,
                client_token=self.thresholds.offline_client_token,
                min_hours=self.thresholds.offline_min_hours,
            )
        except Exception:
            logger.exception("Error fetching offline reports")
            return []

    def fetch_speed_events(self, date: Optional[str] = None) -> List[SpeedEvent]:
        date = date or self.sheets.default_date
        try:
            return map_speed_events(self._rows("speed", self.sheets.speed_sheet_id, date))
        except Exception:
            logger.exception("Error fetching speed alarms for %s", date)
            return []

    def fetch_ai_alerts(self, date: Optional[str] = None) -> List[AIAlert]:
        date = date or self.sheets.default_date
        try:
            return map_ai_alerts(self._rows("alerts", self.sheets.alerts_sheet_id, date))
        except Exception:
            logger.exception("Error fetching AI alerts for %s", date)
            return []
