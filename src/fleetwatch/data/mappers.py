import re
from typing import Callable, List, Optional, Sequence, TypeVar

from fleetwatch.data.records import AIAlert, OfflineReport, SpeedEvent

T = TypeVar("T")

_LEADING_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_number(value: Optional[str]) -> float:
    """
    Best-effort numeric parse: reads the leading number of the string ("30h" -> 30.0).
    Anything without a leading number yields 0.0.
    """
    if value is None:
        return 0.0
    match = _LEADING_NUMBER.match(str(value).strip())
    if not match:
        return 0.0
    try:
        return float(match.group(0))
    except ValueError:
        return 0.0


def _cell(row: Sequence[str], index: int) -> str:
    if index < len(row) and row[index] is not None:
        return row[index]
    return ""


def _map_rows(rows: Sequence[Sequence[str]], build: Callable[[Sequence[str]], T], keep: Callable[[T], bool]) -> List[T]:
    # Row 0 is the header.
    records = []
    for row in rows[1:]:
        record = build(row)
        if keep(record):
            records.append(record)
    return records


def map_offline_reports(
    rows: Sequence[Sequence[str]],
    client_token: str = "g4s",
    min_hours: float = 24.0,
) -> List[OfflineReport]:
    token = client_token.lower()

    def build(row: Sequence[str]) -> OfflineReport:
        return OfflineReport(
            client=_cell(row, 0),
            vehicle_number=_cell(row, 1),
            last_online=_cell(row, 2),
            offline_since=parse_number(_cell(row, 3)),
            rn=_cell(row, 4),
            remarks=_cell(row, 5),
        )

    def keep(report: OfflineReport) -> bool:
        return token in report.client.lower() and report.offline_since >= min_hours

    return _map_rows(rows, build, keep)


def map_speed_events(rows: Sequence[Sequence[str]]) -> List[SpeedEvent]:
    def build(row: Sequence[str]) -> SpeedEvent:
        return SpeedEvent(
            plate_no=_cell(row, 1),
            company=_cell(row, 2),
            starting_time=_cell(row, 3),
            speed=parse_number(_cell(row, 6)),
        )

    return _map_rows(rows, build, lambda event: bool(event.plate_no) and event.speed > 0)


def map_ai_alerts(rows: Sequence[Sequence[str]]) -> List[AIAlert]:
    def build(row: Sequence[str]) -> AIAlert:
        return AIAlert(
            plate_no=_cell(row, 1),
            company=_cell(row, 2),
            alarm_type=_cell(row, 3),
            starting_time=_cell(row, 4),
            image_link=_cell(row, 8),
        )

    return _map_rows(rows, build, lambda alert: bool(alert.plate_no) and bool(alert.alarm_type))
