"""Core data models shared by the lead discovery pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True, slots=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(slots=True)
class SearchCandidate:
    """Minimal record returned by a nearby-search strategy."""

    place_id: str
    name: str
    rating: Optional[float] = None
    review_count: Optional[int] = None
    types: List[str] = field(default_factory=list)
    vicinity: Optional[str] = None

    @classmethod
    def from_payload(cls, raw: Dict[str, Any]) -> "SearchCandidate":
        return cls(
            place_id=raw.get("place_id") or "",
            name=(raw.get("name") or "").strip(),
            rating=raw.get("rating"),
            review_count=raw.get("user_ratings_total"),
            types=list(raw.get("types") or []),
            vicinity=raw.get("vicinity"),
        )


@dataclass(slots=True)
class PlaceDetails:
    """Extended record fetched from the Place Details endpoint."""

    place_id: str
    name: str
    formatted_address: str = ""
    phone_local: Optional[str] = None
    phone_international: Optional[str] = None
    website: Optional[str] = None
    maps_url: Optional[str] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    opening_hours: Optional[Dict[str, Any]] = None
    business_status: str = ""
    price_level: Optional[int] = None
    types: List[str] = field(default_factory=list)
    photo_references: List[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, raw: Dict[str, Any]) -> "PlaceDetails":
        photos = raw.get("photos") or []
        return cls(
            place_id=raw.get("place_id") or "",
            name=(raw.get("name") or "").strip(),
            formatted_address=raw.get("formatted_address") or "",
            phone_local=raw.get("formatted_phone_number"),
            phone_international=raw.get("international_phone_number"),
            website=raw.get("website"),
            maps_url=raw.get("url"),
            rating=raw.get("rating"),
            review_count=raw.get("user_ratings_total"),
            opening_hours=raw.get("opening_hours"),
            business_status=raw.get("business_status") or "",
            price_level=raw.get("price_level"),
            types=list(raw.get("types") or []),
            photo_references=[p["photo_reference"] for p in photos if p.get("photo_reference")],
        )


@dataclass(frozen=True, slots=True)
class Photo:
    reference: str
    url: str


@dataclass(slots=True)
class ContactDetails:
    # email is a guess derived from the website domain, not a verified address
    email: str = ""
    phone: str = ""
    website: str = ""
    social_media: Dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class Lead:
    """Normalized, scored business lead. Treated as immutable once cached."""

    id: str
    business_name: str
    business_type: str
    location: str
    contact_details: ContactDetails = field(default_factory=ContactDetails)
    owner_name: str = ""
    address: str = ""
    description: str = ""
    source: str = "Google Places (Real Data)"
    verification_score: int = 0
    google_maps_url: str = ""
    business_status: str = ""
    price_level: Optional[int] = None
    place_types: List[str] = field(default_factory=list)
    photos: List[Photo] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Render the camelCase JSON shape served by the API."""
        return {
            "id": self.id,
            "businessName": self.business_name,
            "businessType": self.business_type,
            "ownerName": self.owner_name,
            "contactDetails": {
                "email": self.contact_details.email,
                "phone": self.contact_details.phone,
                "socialMedia": dict(self.contact_details.social_media),
                "website": self.contact_details.website,
            },
            "address": self.address,
            "location": self.location,
            "description": self.description,
            "source": self.source,
            "verificationScore": self.verification_score,
            "googleMapsUrl": self.google_maps_url,
            "businessStatus": self.business_status,
            "priceLevel": self.price_level,
            "placeTypes": list(self.place_types),
            "photos": [{"reference": photo.reference, "url": photo.url} for photo in self.photos],
        }
