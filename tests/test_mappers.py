from conftest import ALERTS_CSV, OFFLINE_CSV, SPEED_CSV

from fleetwatch.data import map_ai_alerts, map_offline_reports, map_speed_events, parse_number
from fleetwatch.sheets import parse_csv

HEADER = ["Client", "Vehicle Number", "Last Online", "Offline Since", "RN", "Remarks"]


def test_parse_number_reads_leading_number():
    assert parse_number("30") == 30.0
    assert parse_number("72h") == 72.0
    assert parse_number(" 12.5 km/h") == 12.5
    assert parse_number("-3") == -3.0
    assert parse_number("abc") == 0.0
    assert parse_number("") == 0.0
    assert parse_number(None) == 0.0


def test_offline_filter_by_client_and_hours():
    rows = [
        HEADER,
        ["G4S Transport", "A1", "", "30", "", ""],
        ["G4S Transport", "A2", "", "10", "", ""],
        ["Other Co", "A3", "", "500", "", ""],
    ]
    reports = map_offline_reports(rows)
    assert [r.vehicle_number for r in reports] == ["A1"]
    assert reports[0].offline_since == 30.0


def test_offline_mapping_keeps_source_order_and_defaults():
    reports = map_offline_reports(parse_csv(OFFLINE_CSV))
    assert [r.vehicle_number for r in reports] == ["KA01AB1234", "TN09QQ4321"]
    assert reports[0].remarks == ""
    assert reports[1].remarks == "Battery, removed"
    assert reports[1].offline_since == 72.0


def test_offline_short_row_defaults_missing_columns():
    reports = map_offline_reports([HEADER, ["G4S", "B1", "yesterday", "24"]])
    assert len(reports) == 1
    assert reports[0].rn == ""
    assert reports[0].remarks == ""


def test_offline_threshold_is_configurable():
    rows = [HEADER, ["Fleet One", "C1", "", "12", "", ""]]
    assert map_offline_reports(rows) == []
    reports = map_offline_reports(rows, client_token="fleet", min_hours=12)
    assert [r.vehicle_number for r in reports] == ["C1"]


def test_speed_events_drop_missing_plate_and_zero_speed():
    events = map_speed_events(parse_csv(SPEED_CSV))
    assert [e.speed for e in events] == [70.0, 80.0, 95.0, 95.0]
    assert events[2].company == "Acme, Ltd"
    assert events[0].starting_time == "07:45:10"


def test_ai_alerts_require_plate_and_type():
    alerts = map_ai_alerts(parse_csv(ALERTS_CSV))
    assert len(alerts) == 7
    assert alerts[0].image_link == "http://img/1"
    assert alerts[2].image_link == ""
    assert all(a.alarm_type for a in alerts)


def test_records_serialize_with_camel_case_keys():
    alert = map_ai_alerts(parse_csv(ALERTS_CSV))[0]
    assert alert.to_json() == {
        "plateNo": "V1",
        "company": "CoA",
        "alarmType": "Drowsiness",
        "startingTime": "07:10:00",
        "imageLink": "http://img/1",
    }
