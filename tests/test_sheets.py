from datetime import date

import pytest

from fleetwatch.exceptions import ConfigError, DataSourceError
from fleetwatch.sheets import GoogleSheetsProvider, StaticTabDirectory, format_date_label


class FakeResp:
    def __init__(self, status_code: int, content: bytes = b""):
        self.status_code = status_code
        self.content = content


def test_provider_requests_csv_export(monkeypatch):
    seen = {}

    def fake_get(url, params=None, timeout=None):
        seen.update(url=url, params=params, timeout=timeout)
        return FakeResp(200, "a,b\n1,2\n".encode("utf-8"))

    monkeypatch.setattr("fleetwatch.sheets.provider.requests.get", fake_get)
    provider = GoogleSheetsProvider(api_key="key123", timeout_seconds=5)

    text = provider.fetch_csv("sheet1", "42")
    assert text == "a,b\n1,2\n"
    assert seen["url"] == "https://docs.google.com/spreadsheets/d/sheet1/export"
    assert seen["params"] == {"format": "csv", "gid": "42", "key": "key123"}
    assert seen["timeout"] == 5


def test_provider_single_attempt_by_default(monkeypatch):
    calls = {"count": 0}

    def fake_get(url, params=None, timeout=None):
        calls["count"] += 1
        return FakeResp(500)

    monkeypatch.setattr("fleetwatch.sheets.provider.requests.get", fake_get)
    provider = GoogleSheetsProvider()

    with pytest.raises(DataSourceError):
        provider.fetch_csv("sheet1")
    assert calls["count"] == 1


def test_provider_retries_when_configured(monkeypatch):
    calls = {"count": 0}

    def fake_get(url, params=None, timeout=None):
        calls["count"] += 1
        if calls["count"] == 1:
            return FakeResp(503)
        return FakeResp(200, b"ok")

    monkeypatch.setattr("fleetwatch.sheets.provider.requests.get", fake_get)
    provider = GoogleSheetsProvider(max_attempts=3, backoff_seconds=0)

    assert provider.fetch_csv("sheet1") == "ok"
    assert calls["count"] == 2


def test_provider_requires_sheet_id():
    with pytest.raises(ConfigError):
        GoogleSheetsProvider().fetch_csv("")


def test_tab_directory_resolves_known_dates_and_falls_back():
    tabs = StaticTabDirectory(
        default_gid={"speed": "293366971", "offline": "0"},
        date_gids={"speed": {"25 August": "293366971", "24 August": "0", "23 August": "1"}},
    )
    assert tabs.resolve("speed", "23 August") == "1"
    assert tabs.resolve("speed", " 24 August ") == "0"
    assert tabs.resolve("speed", "1 January") == "293366971"
    assert tabs.resolve("speed") == "293366971"
    assert tabs.resolve("offline", "25 August") == "0"
    assert tabs.resolve("unknown-kind") == "0"


def test_available_dates_newest_first():
    tabs = StaticTabDirectory(default_gid={})
    labels = tabs.available_dates(days=3, today=date(2025, 9, 1))
    assert labels == ["1 September", "31 August", "30 August"]
    assert format_date_label(date(2025, 8, 5)) == "5 August"
