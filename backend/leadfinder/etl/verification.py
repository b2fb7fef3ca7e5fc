"""Heuristic confidence score for a lead."""

from leadfinder.etl.transform import derive_email
from leadfinder.models import PlaceDetails, SearchCandidate

# Additive weights; the rubric is deliberately not clamped, so a complete
# listing scores 120.
WEIGHTS = {
    "phone": 30,
    "website": 15,
    "email_domain": 10,
    "address": 15,
    "rating": 10,
    "high_rating": 5,
    "many_reviews": 10,
    "opening_hours": 10,
    "photo": 10,
    "several_photos": 5,
}
HIGH_RATING = 4.0
MANY_REVIEWS = 100


def score(candidate: SearchCandidate, details: PlaceDetails) -> int:
    rating = details.rating if details.rating is not None else candidate.rating
    reviews = details.review_count if details.review_count is not None else candidate.review_count
    photos = len(details.photo_references)

    total = 0
    if details.phone_international or details.phone_local:
        total += WEIGHTS["phone"]
    if details.website:
        total += WEIGHTS["website"]
    if derive_email(details.website):
        total += WEIGHTS["email_domain"]
    if details.formatted_address:
        total += WEIGHTS["address"]
    if rating is not None:
        total += WEIGHTS["rating"]
        if rating >= HIGH_RATING:
            total += WEIGHTS["high_rating"]
    if reviews and reviews >= MANY_REVIEWS:
        total += WEIGHTS["many_reviews"]
    if details.opening_hours:
        total += WEIGHTS["opening_hours"]
    if photos >= 1:
        total += WEIGHTS["photo"]
    if photos >= 3:
        total += WEIGHTS["several_photos"]
    return total
