from fleetwatch.api.deps import build_state
from fleetwatch.config import settings
from fleetwatch.data.storage import Database

if __name__ == "__main__":
    if settings.storage.backend == "sqlite":
        print("Initializing status database...")
        db = Database(settings.storage.db_path, table=settings.storage.table)
        print(f"Database initialized at: {db.db_path.resolve()}")
    else:
        print(f"Status backend is '{settings.storage.backend}'; see scripts/offline_status.sql for the table.")

    # Smoke-check every sheet source
    print("Fetching sheets...")
    state = build_state(settings)
    fleet = state["fleet"]
    report = {
        "offline": len(fleet.fetch_offline_reports()),
        "speed": len(fleet.fetch_speed_events()),
        "alerts": len(fleet.fetch_ai_alerts()),
        "overrides": len(state["overlay"].load()),
    }
    print("Fetch Report:", report)

    print("Done.")
