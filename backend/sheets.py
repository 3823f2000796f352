"""
Read-only client for the Google Sheets values API.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

import requests

from backend.credentials import SignedAssertion
from backend.errors import UpstreamFailure

DEFAULT_BASE_URL = "https://sheets.googleapis.com"
REQUEST_TIMEOUT = 30  # seconds


class SheetsClient:
    """Fetches a value range with a bearer token. No retries."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def values_url(self, spreadsheet_id: str, sheet_range: str) -> str:
        return (
            f"{self.base_url}/v4/spreadsheets/{quote(spreadsheet_id, safe='')}"
            f"/values/{quote(sheet_range, safe='')}"
        )

    def fetch_range(
        self, assertion: SignedAssertion, spreadsheet_id: str, sheet_range: str
    ) -> dict:
        """
        Returns the upstream JSON payload unchanged.

        Raises:
            UpstreamFailure: With the upstream status code (500 when there is
                no response) and the upstream error message.
        """
        url = self.values_url(spreadsheet_id, sheet_range)
        try:
            response = self.session.get(
                url,
                headers={"Authorization": assertion.authorization_header},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise UpstreamFailure(None, str(exc)) from exc

        if not response.ok:
            status_code, message = _parse_error(response)
            raise UpstreamFailure(status_code, message)

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamFailure(502, "Invalid JSON from Google Sheets") from exc


def _parse_error(response: requests.Response) -> tuple[int, str]:
    """Pull `error.code` / `error.message` out of a Google API error body."""
    status_code = response.status_code or 500
    message = response.reason or f"HTTP {status_code}"
    try:
        body = response.json()
    except ValueError:
        return status_code, message

    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        status_code = error.get("code") or status_code
        message = error.get("message") or message
    elif isinstance(error, str):
        message = body.get("error_description") or error
    return status_code, message
