from datetime import UTC, datetime
from typing import Any

from fastapi.responses import JSONResponse, Response

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def success(**body: Any) -> dict:
    return {"success": True, **body, "timestamp": timestamp()}


def failure(message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, "timestamp": timestamp()},
    )


def preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)
