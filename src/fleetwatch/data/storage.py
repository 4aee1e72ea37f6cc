import sqlite3
from pathlib import Path


class Database:
    """
    Thin wrapper over sqlite3 for local Fleetwatch persistence.
    Keeps schema creation in one place.
    """

    def __init__(self, db_path: Path, table: str = "offline_status"):
        self.db_path = Path(db_path)
        self.table = table
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self):
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self):
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self.table} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    vehicle_number TEXT NOT NULL UNIQUE,
                    current_status TEXT NOT NULL,
                    reason TEXT,
                    updated_at TEXT NOT NULL,
                    updated_by TEXT
                );
                """
            )
            conn.commit()
