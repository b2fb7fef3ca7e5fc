from dataclasses import replace

from leadfinder.etl.verification import score
from leadfinder.models import PlaceDetails, SearchCandidate


def full_details():
    return PlaceDetails(
        place_id="pid",
        name="Acme Electronics",
        formatted_address="1 Anna Salai, Chennai",
        phone_international="+91 44 1234 5678",
        website="https://www.acme.in",
        rating=4.5,
        review_count=150,
        opening_hours={"open_now": True},
        photo_references=["r1", "r2", "r3", "r4"],
    )


def test_complete_listing_scores_uncapped_total():
    candidate = SearchCandidate(place_id="pid", name="Acme Electronics")
    assert score(candidate, full_details()) == 30 + 15 + 10 + 15 + 10 + 5 + 10 + 10 + 10 + 5 == 120


def test_empty_listing_scores_zero():
    assert score(SearchCandidate(place_id="p", name="x"), PlaceDetails(place_id="p", name="x")) == 0


def test_rating_falls_back_to_candidate():
    candidate = SearchCandidate(place_id="p", name="x", rating=4.2, review_count=300)
    assert score(candidate, PlaceDetails(place_id="p", name="x")) == 10 + 5 + 10


def test_score_is_deterministic():
    candidate = SearchCandidate(place_id="pid", name="Acme")
    assert score(candidate, full_details()) == score(candidate, full_details())


def test_adding_a_signal_never_lowers_the_score():
    candidate = SearchCandidate(place_id="p", name="x")
    base = PlaceDetails(place_id="p", name="x")
    variants = [
        {"phone_local": "044"},
        {"website": "https://a.in"},
        {"formatted_address": "street"},
        {"rating": 3.0},
        {"rating": 4.0},
        {"review_count": 100},
        {"opening_hours": {"weekday_text": ["Monday: 9-5"]}},
        {"photo_references": ["r"]},
        {"photo_references": ["r", "s", "t"]},
    ]
    base_score = score(candidate, base)
    for change in variants:
        assert score(candidate, replace(base, **change)) > base_score


def test_zero_rating_counts_as_rated():
    details = PlaceDetails(place_id="p", name="x", rating=0.0)
    assert score(SearchCandidate(place_id="p", name="x"), details) == 10
