from __future__ import annotations

import json
from typing import Optional

import typer
import uvicorn
from pydantic import ValidationError

from fleetwatch.api.deps import build_state
from fleetwatch.config import settings
from fleetwatch.services import alert_analytics, offline_analytics, speed_analytics

cli = typer.Typer(help="Fleetwatch CLI")


@cli.command()
def version() -> None:
    """Print runtime version."""
    typer.echo(f"Fleetwatch {settings.app.version}")


@cli.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host to bind"),
    port: int = typer.Option(8000, help="Port to bind"),
    reload: bool = typer.Option(False, help="Enable autoreload for local development"),
) -> None:
    """Run the Fleetwatch API server."""
    uvicorn.run(
        "fleetwatch.api.main:app",
        host=host,
        port=port,
        reload=reload,
        app_dir="src",
    )


@cli.command()
def summary(
    view: str = typer.Argument(..., help="alerts | speed | offline"),
    date: Optional[str] = typer.Option(None, help="Reporting date label, e.g. '25 August'"),
) -> None:
    """Fetch one view from the sheets and print its analytics as JSON."""
    state = build_state(settings)
    fleet = state["fleet"]
    if view == "alerts":
        result = alert_analytics(fleet.fetch_ai_alerts(date))
    elif view == "speed":
        result = speed_analytics(fleet.fetch_speed_events(date))
    elif view == "offline":
        result = offline_analytics(fleet.fetch_offline_reports(), state["overlay"].load())
    else:
        raise typer.BadParameter("view must be one of: alerts, speed, offline")
    typer.echo(json.dumps(result, ensure_ascii=False, indent=2))


@cli.command("set-status")
def set_status(
    vehicle_number: str = typer.Argument(...),
    status: str = typer.Argument(..., help="Online | Parking/Garage | Dashcam Issue | Technical Problem"),
    reason: str = typer.Option("", help="Free-text reason"),
) -> None:
    """Upsert a status override for one vehicle."""
    overlay = build_state(settings)["overlay"]
    try:
        saved = overlay.update_status(vehicle_number, status, reason)
    except ValidationError as exc:
        raise typer.BadParameter(f"invalid status '{status}': {exc.errors()[0]['msg']}")
    typer.echo(json.dumps(saved.model_dump(mode="json"), ensure_ascii=False))


if __name__ == "__main__":
    cli()
