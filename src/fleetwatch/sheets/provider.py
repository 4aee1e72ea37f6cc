import logging
import time
from pathlib import Path
from typing import Optional, Protocol

import requests
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account

from fleetwatch.exceptions import ConfigError, DataSourceError

logger = logging.getLogger(__name__)


class SheetsProvider(Protocol):
    def fetch_csv(self, sheet_id: str, gid: str = "0") -> str:
        ...


class GoogleSheetsProvider:
    """
    Downloads a single spreadsheet tab as CSV text using either a service account or API key.
    Published sheets also work without credentials.
    """

    EXPORT_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/export"

    def __init__(
        self,
        service_account_file: Optional[Path] = None,
        api_key: Optional[str] = None,
        timeout_seconds: float = 30.0,
        max_attempts: int = 1,
        backoff_seconds: float = 1.0,
    ):
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.max_attempts = max(1, max_attempts)
        self.backoff_seconds = backoff_seconds
        self.creds = None
        if service_account_file and Path(service_account_file).exists():
            self.creds = service_account.Credentials.from_service_account_file(
                service_account_file,
                scopes=["https://www.googleapis.com/auth/drive.readonly"],
            )

    @classmethod
    def export_url(cls, sheet_id: str) -> str:
        return cls.EXPORT_URL.format(sheet_id=sheet_id)

    def fetch_csv(self, sheet_id: str, gid: str = "0") -> str:
        if not sheet_id:
            raise ConfigError("Spreadsheet id is not configured.")

        url = self.export_url(sheet_id)
        params = {"format": "csv", "gid": gid or "0"}

        if self.creds:
            session = AuthorizedSession(self.creds)
            requester = lambda: session.get(url, params=params, timeout=self.timeout_seconds)
        else:
            if self.api_key:
                params["key"] = self.api_key
            requester = lambda: requests.get(url, params=params, timeout=self.timeout_seconds)

        last_error: Optional[Exception] = None
        for attempt in range(self.max_attempts):
            try:
                resp = requester()
            except requests.RequestException as exc:  # network failure
                last_error = DataSourceError(f"Failed to download sheet {sheet_id} (gid {gid}): {exc}")
                if attempt < self.max_attempts - 1:
                    time.sleep(self.backoff_seconds * (2**attempt))
                    continue
                break

            if resp.status_code == 200:
                return resp.content.decode("utf-8", errors="replace")

            last_error = DataSourceError(
                f"Failed to download sheet {sheet_id} (gid {gid}): {resp.status_code}"
            )
            is_retryable = resp.status_code in {429, 500, 502, 503, 504}
            if attempt < self.max_attempts - 1 and is_retryable:
                logger.warning("Retrying sheet %s gid %s after %s", sheet_id, gid, resp.status_code)
                time.sleep(self.backoff_seconds * (2**attempt))
                continue
            break

        raise last_error or DataSourceError(f"Failed to download sheet {sheet_id}")
