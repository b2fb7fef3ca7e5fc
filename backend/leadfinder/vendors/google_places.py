"""Client utilities for the Google Places and Geocoding APIs."""

import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://maps.googleapis.com/maps/api/place"
_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
_SUCCESS_STATUSES = {"OK", "ZERO_RESULTS"}

DETAIL_FIELDS = ",".join(
    [
        "place_id",
        "name",
        "formatted_address",
        "formatted_phone_number",
        "international_phone_number",
        "website",
        "url",
        "rating",
        "user_ratings_total",
        "opening_hours",
        "business_status",
        "price_level",
        "types",
        "photos",
    ]
)


class GooglePlacesError(RuntimeError):
    """Raised when the Places API returns a non-successful response."""

    def __init__(self, status: Optional[str], message: Optional[str] = None):
        self.status = status
        super().__init__(message or status or "unknown Places API error")


def _get(url: str, params: Dict[str, Any]) -> Dict[str, Any]:
    response = _SESSION.get(url, params=params, timeout=10)
    response.raise_for_status()
    return response.json()


def _checked(payload: Dict[str, Any], operation: str) -> Dict[str, Any]:
    status = payload.get("status")
    if status not in _SUCCESS_STATUSES:
        logger.error("%s failed: status=%s, error_message=%s", operation, status, payload.get("error_message"))
        raise GooglePlacesError(status, payload.get("error_message"))
    return payload


def nearby_search(
    latitude: float,
    longitude: float,
    radius: int,
    api_key: str,
    keyword: Optional[str] = None,
    place_type: Optional[str] = None,
    base_url: str = _BASE_URL,
) -> Dict[str, Any]:
    params: Dict[str, Any] = {"location": f"{latitude},{longitude}", "radius": radius, "key": api_key}
    if keyword:
        params["keyword"] = keyword
    if place_type:
        params["type"] = place_type
    return _checked(_get(f"{base_url}/nearbysearch/json", params), "nearby_search")


def nearby_search_page(pagetoken: str, api_key: str, base_url: str = _BASE_URL) -> Dict[str, Any]:
    """Fetch a follow-up page; the token is only valid a short while after it was issued."""
    params = {"pagetoken": pagetoken, "key": api_key}
    return _checked(_get(f"{base_url}/nearbysearch/json", params), "nearby_search_page")


def place_details(place_id: str, api_key: str, base_url: str = _BASE_URL) -> Dict[str, Any]:
    params = {"place_id": place_id, "key": api_key, "fields": DETAIL_FIELDS}
    payload = _get(f"{base_url}/details/json", params)
    if payload.get("status") != "OK":
        logger.error(
            "place_details failed for %s: status=%s, error_message=%s",
            place_id,
            payload.get("status"),
            payload.get("error_message"),
        )
        raise GooglePlacesError(payload.get("status"), payload.get("error_message"))
    return payload.get("result", {})


def geocode(address: str, api_key: str, url: str = _GEOCODE_URL) -> Dict[str, Any]:
    """Return the raw geocoding payload; callers interpret the status field."""
    return _get(url, {"address": address, "key": api_key})


def photo_url(reference: str, api_key: str, max_width: int = 400, base_url: str = _BASE_URL) -> str:
    return f"{base_url}/photo?maxwidth={max_width}&photo_reference={reference}&key={api_key}"
