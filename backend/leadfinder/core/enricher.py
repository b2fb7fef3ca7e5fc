"""Fetch place details for search candidates and assemble scored leads."""

import logging
from typing import Iterable, List, Optional

import requests

from leadfinder.etl.description import describe
from leadfinder.etl.transform import derive_email, maps_url, photo_entries, pick_phone
from leadfinder.etl.verification import score
from leadfinder.models import ContactDetails, Lead, PlaceDetails, SearchCandidate
from leadfinder.vendors import google_places
from leadfinder.vendors.google_places import GooglePlacesError

logger = logging.getLogger(__name__)

SOURCE_TAG = "Google Places (Real Data)"


def build_lead(
    candidate: SearchCandidate,
    details: PlaceDetails,
    sector: str,
    location: str,
    api_key: str,
    base_url: str = google_places._BASE_URL,
) -> Lead:
    place_id = details.place_id or candidate.place_id
    website = details.website or ""
    return Lead(
        id=place_id,
        business_name=details.name or candidate.name,
        business_type=sector,
        location=location,
        contact_details=ContactDetails(
            email=derive_email(website),
            phone=pick_phone(details.phone_international, details.phone_local),
            website=website,
        ),
        address=details.formatted_address or candidate.vicinity or "",
        description=describe(candidate, details),
        source=SOURCE_TAG,
        verification_score=score(candidate, details),
        google_maps_url=maps_url(place_id, details.maps_url),
        business_status=details.business_status,
        price_level=details.price_level,
        place_types=list(details.types or candidate.types),
        photos=photo_entries(details.photo_references, api_key, base_url=base_url),
    )


class DetailEnricher:
    def __init__(self, api_key: str, base_url: str = google_places._BASE_URL) -> None:
        self.api_key = api_key
        self.base_url = base_url

    def enrich(self, candidate: SearchCandidate, sector: str, location: str) -> Optional[Lead]:
        """Return the lead for ``candidate`` or None when its details are unavailable."""
        try:
            raw = google_places.place_details(candidate.place_id, api_key=self.api_key, base_url=self.base_url)
        except (GooglePlacesError, requests.RequestException) as exc:
            logger.warning("Skipping %s, details unavailable: %s", candidate.place_id, exc)
            return None
        details = PlaceDetails.from_payload(raw)
        if not details.place_id:
            details.place_id = candidate.place_id
        return build_lead(candidate, details, sector, location, self.api_key, base_url=self.base_url)

    def enrich_all(self, candidates: Iterable[SearchCandidate], sector: str, location: str) -> List[Lead]:
        # One details request in flight at a time.
        leads = []
        for candidate in candidates:
            lead = self.enrich(candidate, sector, location)
            if lead is not None:
                leads.append(lead)
        logger.info("Enriched %d leads for %s in %s", len(leads), sector, location)
        return leads
