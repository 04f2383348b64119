import logging
from typing import Any, Optional, Protocol
from urllib.parse import quote

import requests
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account

from kits_api.config import GoogleSettings
from kits_api.exceptions import ConfigError, IntegrationError

logger = logging.getLogger("kits_api.sheets")


class SpreadsheetClient(Protocol):
    def list_sheet_titles(self) -> list[str]:
        ...

    def add_sheet(self, title: str) -> None:
        ...

    def update_values(self, range_a1: str, values: list[list[Any]]) -> None:
        ...

    def get_values(self, range_a1: str) -> list[list[str]]:
        ...


class GoogleSheetsClient:
    """
    Thin binding over the Sheets REST API (v4) for a single spreadsheet.
    Failures are surfaced as IntegrationError and never retried here.
    """

    BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets/{spreadsheet_id}"

    def __init__(
        self,
        spreadsheet_id: str,
        session: requests.Session,
        timeout_seconds: float = 30.0,
    ):
        if not spreadsheet_id:
            raise ConfigError("Google Sheets spreadsheet_id is not configured.")
        self.spreadsheet_id = spreadsheet_id
        self.session = session
        self.timeout_seconds = timeout_seconds
        self.base_url = self.BASE_URL.format(spreadsheet_id=quote(spreadsheet_id, safe=""))

    @classmethod
    def from_settings(cls, google: GoogleSettings) -> "GoogleSheetsClient":
        info = google.credentials_info()
        try:
            creds = service_account.Credentials.from_service_account_info(info, scopes=google.scopes)
        except (ValueError, GoogleAuthError) as exc:
            raise ConfigError(f"Invalid service account credentials: {exc}") from exc
        return cls(
            spreadsheet_id=google.spreadsheet_id or "",
            session=AuthorizedSession(creds),
            timeout_seconds=google.timeout_seconds,
        )

    def list_sheet_titles(self) -> list[str]:
        data = self._request("GET", self.base_url, params={"fields": "sheets.properties.title"})
        titles = []
        for sheet in data.get("sheets") or []:
            title = (sheet.get("properties") or {}).get("title")
            if title is not None:
                titles.append(title)
        return titles

    def add_sheet(self, title: str) -> None:
        body = {"requests": [{"addSheet": {"properties": {"title": title}}}]}
        self._request("POST", f"{self.base_url}:batchUpdate", json=body)

    def update_values(self, range_a1: str, values: list[list[Any]]) -> None:
        self._request(
            "PUT",
            self._values_url(range_a1),
            params={"valueInputOption": "RAW"},
            json={"range": range_a1, "majorDimension": "ROWS", "values": values},
        )

    def get_values(self, range_a1: str) -> list[list[str]]:
        data = self._request("GET", self._values_url(range_a1))
        return data.get("values") or []

    def _values_url(self, range_a1: str) -> str:
        return f"{self.base_url}/values/{quote(range_a1, safe='')}"

    def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        logger.debug(f"{method} {url}")
        try:
            resp = self.session.request(method, url, timeout=self.timeout_seconds, **kwargs)
        except (requests.RequestException, GoogleAuthError) as exc:
            raise IntegrationError(f"Google Sheets request failed: {exc}") from exc

        if resp.status_code >= 400:
            raise IntegrationError(
                f"Google Sheets returned {resp.status_code}: {self._error_message(resp)}",
                status_code=resp.status_code,
            )

        if not resp.content:
            return {}
        try:
            data = resp.json()
        except ValueError as exc:
            raise IntegrationError(f"Malformed response from Google Sheets: {exc}") from exc
        if not isinstance(data, dict):
            raise IntegrationError("Malformed response from Google Sheets: expected a JSON object")
        return data

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        try:
            payload = resp.json()
        except ValueError:
            return resp.text or resp.reason or "unknown error"
        error = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        return resp.text or "unknown error"
