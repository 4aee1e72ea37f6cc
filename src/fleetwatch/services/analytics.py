import math
import re
from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from fleetwatch.config import settings
from fleetwatch.data.records import STATUS_VALUES, AIAlert, OfflineReport, SpeedEvent, VehicleStatusOverride

_LEADING_DIGITS = re.compile(r"\d+")

SPEED_RANGES: Tuple[Tuple[str, float, Optional[float]], ...] = (
    ("75-79", 75, 80),
    ("80-84", 80, 85),
    ("85-89", 85, 90),
    ("90-94", 90, 95),
    ("95-99", 95, 100),
    ("100+", 100, None),
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def count_by(records: Iterable[Any], key: Callable[[Any], str]) -> Dict[str, int]:
    """Counts per key, ordered by first appearance."""
    counts: Dict[str, int] = {}
    for record in records:
        k = key(record)
        counts[k] = counts.get(k, 0) + 1
    return counts


def top_entry(counts: Mapping[str, int]) -> Optional[Tuple[str, int]]:
    """Highest count; among equal counts the first encountered wins (stable sort)."""
    ranked = sorted(counts.items(), key=lambda kv: -kv[1])
    return ranked[0] if ranked else None


def bottom_entry(counts: Mapping[str, int]) -> Optional[Tuple[str, int]]:
    ranked = sorted(counts.items(), key=lambda kv: kv[1])
    return ranked[0] if ranked else None


def top_n(counts: Mapping[str, int], n: int = 10) -> List[Tuple[str, int]]:
    return sorted(counts.items(), key=lambda kv: -kv[1])[:n]


def _leading_int(text: str) -> Optional[int]:
    match = _LEADING_DIGITS.match(text)
    return int(match.group(0)) if match else None


def hour_of(time_value: Optional[str]) -> int:
    """
    Hour of day from the leading digits of the text before the first ':'
    ("07:45" -> 7, "7h30" -> 7, "07 :45" -> 7).

    For full timestamps such as "2025-08-25 07:45" or "12/08/2025 07:45" the
    date comes first, so the last whitespace-separated token is the one read.
    Anything unparseable or outside 0-23 buckets to 0.
    """
    head = (time_value or "").split(":", 1)[0].strip()
    if not head:
        return 0
    hour = _leading_int(head.split()[-1])
    return hour if hour is not None and hour < 24 else 0


def hourly_histogram(records: Iterable[Any], time_of: Callable[[Any], str]) -> List[int]:
    buckets = [0] * 24
    for record in records:
        buckets[hour_of(time_of(record))] += 1
    return buckets


def _entry(pair: Optional[Tuple[str, int]]) -> Optional[Dict[str, Any]]:
    if pair is None:
        return None
    return {"vehicle": pair[0], "count": pair[1]}


def alert_analytics(alerts: Sequence[AIAlert]) -> Dict[str, Any]:
    total = len(alerts)
    by_vehicle = count_by(alerts, lambda a: a.plate_no)
    unique_vehicles = len(by_vehicle)
    hourly = hourly_histogram(alerts, lambda a: a.starting_time)

    return {
        "totalAlerts": total,
        "uniqueVehicles": unique_vehicles,
        "topVehicle": _entry(top_entry(by_vehicle)),
        "leastAlertVehicle": _entry(bottom_entry(by_vehicle)),
        "topVehicles": [_entry(pair) for pair in top_n(by_vehicle, 10)],
        "alertTypes": count_by(alerts, lambda a: a.alarm_type or "Unknown"),
        "companyDistribution": count_by(alerts, lambda a: a.company),
        "hourlyDistribution": [
            {"hour": hour, "alerts": count} for hour, count in enumerate(hourly) if count > 0
        ],
        "avgAlertsPerVehicle": round_half_up(total / unique_vehicles) if unique_vehicles else 0,
    }


def speed_analytics(
    events: Sequence[SpeedEvent],
    warning: Optional[float] = None,
    alarm: Optional[float] = None,
) -> Dict[str, Any]:
    warning = settings.thresholds.speed_warning if warning is None else warning
    alarm = settings.thresholds.speed_alarm if alarm is None else alarm

    total = len(events)
    max_speed = max((e.speed for e in events), default=0)
    highest = next((e for e in events if e.speed == max_speed), None) if events else None

    vehicle_stats: Dict[str, Dict[str, Any]] = {}
    hourly_speeds: Dict[int, List[float]] = defaultdict(list)
    for event in events:
        stats = vehicle_stats.setdefault(
            event.plate_no,
            {"company": event.company, "violations": 0, "maxSpeed": 0, "warnings": 0, "alarms": 0},
        )
        stats["violations"] += 1
        stats["maxSpeed"] = max(stats["maxSpeed"], event.speed)
        if event.speed >= alarm:
            stats["alarms"] += 1
        elif event.speed >= warning:
            stats["warnings"] += 1
        hourly_speeds[hour_of(event.starting_time)].append(event.speed)

    violations = {plate: stats["violations"] for plate, stats in vehicle_stats.items()}
    top = top_entry(violations)

    ranges = []
    for label, low, high in SPEED_RANGES:
        count = sum(1 for e in events if e.speed >= low and (high is None or e.speed < high))
        if count:
            ranges.append({"range": label, "count": count})

    hourly_pattern = []
    for hour in range(24):
        speeds = hourly_speeds.get(hour, [])
        hourly_pattern.append(
            {
                "hour": hour,
                "violations": len(speeds),
                "avgSpeed": round_half_up(sum(speeds) / len(speeds)) if speeds else 0,
            }
        )

    return {
        "totalViolations": total,
        "warnings": sum(1 for e in events if warning <= e.speed < alarm),
        "alarms": sum(1 for e in events if e.speed >= alarm),
        "maxSpeed": max_speed,
        "avgSpeed": round_half_up(sum(e.speed for e in events) / total) if total else 0,
        "uniqueVehicles": len(vehicle_stats),
        "topViolator": top[0] if top else None,
        "highestSpeedVehicle": highest.plate_no if highest else None,
        "vehicleStats": vehicle_stats,
        "companyDistribution": count_by(events, lambda e: e.company),
        "speedRanges": ranges,
        "hourlyPattern": hourly_pattern,
    }


def offline_analytics(
    reports: Sequence[OfflineReport],
    overrides: Optional[Mapping[str, VehicleStatusOverride]] = None,
    critical_hours: Optional[float] = None,
) -> Dict[str, Any]:
    overrides = overrides or {}
    critical_hours = settings.thresholds.offline_critical_hours if critical_hours is None else critical_hours
    total = len(reports)

    status_distribution = {status: 0 for status in STATUS_VALUES}
    unannotated = 0
    for report in reports:
        override = overrides.get(report.vehicle_number)
        if override is None:
            unannotated += 1
        else:
            status_distribution[override.current_status] += 1

    return {
        "totalOffline": total,
        "avgOfflineHours": round_half_up(sum(r.offline_since for r in reports) / total) if total else 0,
        "criticalCount": sum(1 for r in reports if r.offline_since > critical_hours),
        "statusDistribution": status_distribution,
        "unannotated": unannotated,
        "regionDistribution": count_by(reports, lambda r: r.vehicle_number[:2]),
    }
