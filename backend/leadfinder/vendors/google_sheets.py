"""Minimal Google Sheets v4 client used for lead exports.

Requests are made with the end user's own OAuth access token, which is
separate from the application's identity-provider session.
"""

import logging
from typing import Any, Dict, List

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"


class GoogleSheetsError(RuntimeError):
    """Raised when the Sheets API rejects a request."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(message)


def _headers(access_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {access_token}", "Content-Type": "application/json"}


def _checked(response: requests.Response, operation: str) -> Dict[str, Any]:
    if response.status_code >= 400:
        try:
            message = response.json().get("error", {}).get("message")
        except ValueError:
            message = None
        logger.error("%s failed: status=%s, message=%s", operation, response.status_code, message)
        raise GoogleSheetsError(response.status_code, message or f"{operation} failed")
    return response.json()


def create_spreadsheet(title: str, access_token: str) -> Dict[str, Any]:
    response = _SESSION.post(
        _BASE_URL,
        json={"properties": {"title": title}},
        headers=_headers(access_token),
        timeout=10,
    )
    return _checked(response, "create_spreadsheet")


def write_values(
    spreadsheet_id: str,
    values: List[List[Any]],
    access_token: str,
    range_: str = "Sheet1!A1",
) -> Dict[str, Any]:
    response = _SESSION.put(
        f"{_BASE_URL}/{spreadsheet_id}/values/{range_}",
        params={"valueInputOption": "RAW"},
        json={"range": range_, "majorDimension": "ROWS", "values": values},
        headers=_headers(access_token),
        timeout=10,
    )
    return _checked(response, "write_values")
