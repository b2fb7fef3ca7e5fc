"""Pass-through client for the Supabase (GoTrue) auth REST API."""

import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()


class SupabaseAuthError(RuntimeError):
    """Raised when the identity provider rejects a request."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(message)


def _headers(anon_key: str, access_token: Optional[str] = None) -> Dict[str, str]:
    headers = {"apikey": anon_key, "Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    return headers


def _url(base_url: str, path: str) -> str:
    if not base_url:
        raise SupabaseAuthError(500, "Supabase URL is not configured")
    return f"{base_url}{path}"


def _payload(response: requests.Response) -> Dict[str, Any]:
    try:
        payload = response.json() if response.content else {}
    except ValueError:
        payload = {}
    if response.status_code >= 400:
        message = (
            payload.get("error_description")
            or payload.get("msg")
            or payload.get("message")
            or payload.get("error")
            or f"auth request failed with status {response.status_code}"
        )
        logger.info("Supabase auth rejected request: status=%s, message=%s", response.status_code, message)
        raise SupabaseAuthError(response.status_code, message)
    return payload


def _session_from(payload: Dict[str, Any]) -> Dict[str, Any]:
    user = payload.get("user")
    session = {key: payload[key] for key in ("access_token", "refresh_token", "expires_in", "token_type") if key in payload}
    return {"user": user, "session": session or None}


def sign_up(base_url: str, anon_key: str, email: str, password: str, name: str) -> Dict[str, Any]:
    response = _SESSION.post(
        _url(base_url, "/auth/v1/signup"),
        json={"email": email, "password": password, "data": {"name": name}},
        headers=_headers(anon_key),
        timeout=10,
    )
    payload = _payload(response)
    if "user" not in payload and payload.get("id"):
        # email confirmation pending: GoTrue returns the bare user
        return {"user": payload, "session": None}
    return _session_from(payload)


def sign_in_with_password(base_url: str, anon_key: str, email: str, password: str) -> Dict[str, Any]:
    response = _SESSION.post(
        _url(base_url, "/auth/v1/token"),
        params={"grant_type": "password"},
        json={"email": email, "password": password},
        headers=_headers(anon_key),
        timeout=10,
    )
    return _session_from(_payload(response))


def sign_in_with_id_token(base_url: str, anon_key: str, token: str, provider: str = "google") -> Dict[str, Any]:
    response = _SESSION.post(
        _url(base_url, "/auth/v1/token"),
        params={"grant_type": "id_token"},
        json={"provider": provider, "id_token": token},
        headers=_headers(anon_key),
        timeout=10,
    )
    return _session_from(_payload(response))


def get_user(base_url: str, anon_key: str, access_token: str) -> Dict[str, Any]:
    response = _SESSION.get(_url(base_url, "/auth/v1/user"), headers=_headers(anon_key, access_token), timeout=10)
    return _payload(response)


def sign_out(base_url: str, anon_key: str, access_token: str) -> None:
    response = _SESSION.post(_url(base_url, "/auth/v1/logout"), headers=_headers(anon_key, access_token), timeout=10)
    _payload(response)
