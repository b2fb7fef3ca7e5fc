"""Utilities for turning Google Places responses into lead fields."""

import logging
from typing import Iterable, List, Optional

from leadfinder.models import Photo
from leadfinder.vendors import google_places

logger = logging.getLogger(__name__)

MAX_PHOTOS = 5


def website_domain(website: Optional[str]) -> str:
    if not website:
        return ""
    domain = website.strip()
    for scheme in ("https://", "http://"):
        if domain.lower().startswith(scheme):
            domain = domain[len(scheme):]
            break
    if domain.lower().startswith("www."):
        domain = domain[4:]
    return domain.split("/")[0]


def derive_email(website: Optional[str]) -> str:
    """Guess a contact address from the website domain; unverified."""
    domain = website_domain(website)
    return f"info@{domain}" if domain else ""


def humanize_type(type_name: str) -> str:
    return " ".join(word.capitalize() for word in type_name.split("_") if word)


def pick_phone(international: Optional[str], local: Optional[str]) -> str:
    return international or local or ""


def photo_entries(references: Iterable[str], api_key: str, base_url: str = google_places._BASE_URL) -> List[Photo]:
    entries = []
    for reference in list(references)[:MAX_PHOTOS]:
        entries.append(Photo(reference=reference, url=google_places.photo_url(reference, api_key, base_url=base_url)))
    return entries


def maps_url(place_id: str, provided: Optional[str] = None) -> str:
    return provided or f"https://www.google.com/maps/place/?q=place_id:{place_id}"
