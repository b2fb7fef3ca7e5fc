"""Build the human-readable summary attached to each lead."""

from typing import List

from leadfinder.etl.transform import humanize_type
from leadfinder.models import PlaceDetails, SearchCandidate

PRICE_LEVEL_LABELS = ("Inexpensive", "Moderate", "Expensive", "Very Expensive")
CURRENCY_GLYPH = "₹"

STATUS_LABELS = {
    "OPERATIONAL": "Operational",
    "CLOSED_TEMPORARILY": "Temporarily closed",
    "CLOSED_PERMANENTLY": "Permanently closed",
}

GENERIC_TYPES = {"point_of_interest", "establishment"}


def describe(candidate: SearchCandidate, details: PlaceDetails) -> str:
    """Return the clauses for whatever data is present, in a fixed order."""
    parts: List[str] = []

    rating = details.rating if details.rating is not None else candidate.rating
    reviews = details.review_count if details.review_count is not None else candidate.review_count
    if rating is not None:
        parts.append(f"Rating: {rating}/5 stars.")
        if reviews:
            parts.append(f"Based on {reviews} reviews.")

    level = details.price_level
    if level is not None and 0 <= level < len(PRICE_LEVEL_LABELS):
        parts.append(f"Price level: {PRICE_LEVEL_LABELS[level]} ({CURRENCY_GLYPH * (level + 1)}).")

    if details.business_status:
        parts.append(f"Status: {STATUS_LABELS.get(details.business_status, details.business_status)}.")

    categories = [humanize_type(t) for t in details.types or candidate.types if t not in GENERIC_TYPES]
    if categories:
        parts.append(f"Categories: {', '.join(categories)}.")

    hours = details.opening_hours or {}
    open_now = hours.get("open_now")
    if open_now is not None:
        parts.append("Currently open." if open_now else "Currently closed.")
    weekday_text = hours.get("weekday_text") or []
    if weekday_text:
        parts.append(f"Hours: {'; '.join(weekday_text)}.")

    return " ".join(parts).rstrip()
