import pytest

from leadfinder.etl import transform


@pytest.mark.parametrize(
    "website,expected",
    [
        ("https://www.example.com/contact", "info@example.com"),
        ("http://shop.example.in", "info@shop.example.in"),
        ("www.example.org/", "info@example.org"),
        ("", ""),
        (None, ""),
    ],
)
def test_derive_email(website, expected):
    assert transform.derive_email(website) == expected


def test_humanize_type():
    assert transform.humanize_type("electronics_store") == "Electronics Store"
    assert transform.humanize_type("store") == "Store"


def test_pick_phone_prefers_international():
    assert transform.pick_phone("+91 44 1234 5678", "044 1234 5678") == "+91 44 1234 5678"
    assert transform.pick_phone(None, "044 1234 5678") == "044 1234 5678"
    assert transform.pick_phone(None, None) == ""


def test_photo_entries_keep_at_most_five():
    photos = transform.photo_entries([f"ref{i}" for i in range(8)], "key")
    assert len(photos) == 5
    assert photos[0].reference == "ref0"
    assert "photo_reference=ref0" in photos[0].url


def test_maps_url_fallback():
    assert transform.maps_url("pid") == "https://www.google.com/maps/place/?q=place_id:pid"
    assert transform.maps_url("pid", "https://maps.google.com/?cid=1") == "https://maps.google.com/?cid=1"
