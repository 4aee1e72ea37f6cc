import json
import os
import tempfile
from pathlib import Path

# Keep the module-level app away from the working tree.
os.environ.setdefault("STORAGE__DB_PATH", str(Path(tempfile.gettempdir()) / "fleetwatch-test.db"))
os.environ.setdefault("LOGGING__LOG_REQUESTS", "false")

import pytest
from fastapi.testclient import TestClient

from fleetwatch.api.main import create_app
from fleetwatch.config import Settings, SheetSettings
from fleetwatch.data.storage import Database
from fleetwatch.status import SqliteStatusStore, StatusOverlay

OFFLINE_CSV = """Client,Vehicle Number,Last Online,Offline Since,RN,Remarks
G4S Transport,KA01AB1234,2025-08-23 10:00,30,RN1,
G4S Transport,KA05XY0001,2025-08-24 10:00,10,RN2,
Other Co,KA06ZZ0002,2025-08-20 10:00,120,RN3,
g4s security,TN09QQ4321,2025-08-21 10:00,72h,RN4,"Battery, removed"
"""

SPEED_CSV = """No,Plate No,Company,Starting Time,End Time,Duration,Speed
1,KA01AB1234,G4S Transport,07:45:10,07:46:00,50,70
2,KA01AB1234,G4S Transport,08:10:00,08:11:00,60,80
3,KA02CD5678,"Acme, Ltd",08:30:00,08:31:00,60,95
4,KA02CD5678,"Acme, Ltd",bad,,,95
5,,G4S Transport,09:00:00,,,100
6,KA03EF9999,G4S Transport,09:00:00,,,0
"""

ALERTS_CSV = """No,Plate No,Company,Alarm Type,Starting Time,End Time,Location,Speed,Image
1,V1,CoA,Drowsiness,07:10:00,,,,http://img/1
2,V2,CoB,Distraction,07:20:00,,,,http://img/2
3,V1,CoA,Smoking,08:00:00,,,,
4,V2,CoB,Drowsiness,09:00:00,,,,
5,V1,CoA,Drowsiness,10:00:00,,,,
6,V2,CoB,Phone,11:00:00,,,,
7,V3,CoA,Phone,11:30:00,,,,
8,V4,CoA,,12:00:00,,,,
"""


class FakeSheetsProvider:
    """Serves CSV text per sheet id and records every (sheet_id, gid) requested."""

    def __init__(self, sheets: dict[str, str]):
        self.sheets = sheets
        self.calls: list[tuple[str, str]] = []

    def fetch_csv(self, sheet_id: str, gid: str = "0") -> str:
        self.calls.append((sheet_id, gid))
        if sheet_id not in self.sheets:
            raise ConnectionError(f"unknown sheet {sheet_id}")
        return self.sheets[sheet_id]


class FakeResp:
    def __init__(self, status_code: int, payload=None):
        self.status_code = status_code
        self._payload = payload
        self.content = b"" if payload is None else json.dumps(payload).encode()
        self.text = self.content.decode()

    def json(self):
        return self._payload


class FakeSession:
    """Stands in for requests.Session; replays canned responses in order."""

    def __init__(self, responses):
        self.headers = {}
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        return self.responses.pop(0)


@pytest.fixture
def test_settings():
    return Settings(
        sheets=SheetSettings(
            offline_sheet_id="offline-sheet",
            speed_sheet_id="speed-sheet",
            alerts_sheet_id="alerts-sheet",
        )
    )


@pytest.fixture
def provider():
    return FakeSheetsProvider(
        {
            "offline-sheet": OFFLINE_CSV,
            "speed-sheet": SPEED_CSV,
            "alerts-sheet": ALERTS_CSV,
        }
    )


@pytest.fixture
def status_store(tmp_path):
    return SqliteStatusStore(Database(tmp_path / "fleetwatch.db"))


@pytest.fixture
def overlay(status_store):
    return StatusOverlay(status_store, author_tag="Admin")


@pytest.fixture
def client(test_settings, provider, status_store):
    app = create_app(cfg=test_settings, provider=provider, status_store=status_store)
    return TestClient(app)
