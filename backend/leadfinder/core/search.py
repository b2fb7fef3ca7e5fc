"""Multi-strategy nearby search with progressive broadening.

Each strategy after the first only runs when the results gathered so far are
below ``MIN_RESULTS_BEFORE_FALLBACK``; later strategies trade precision for
recall (no type filter, a generic keyword, a wider radius).
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import requests

from leadfinder.core.errors import InternalError
from leadfinder.core.geocoder import Geocoder
from leadfinder.core.sectors import map_sector_to_type
from leadfinder.models import Coordinates, SearchCandidate
from leadfinder.vendors import google_places
from leadfinder.vendors.google_places import GooglePlacesError

logger = logging.getLogger(__name__)

MIN_RESULTS_BEFORE_FALLBACK = 20
MAX_PAGES_PER_STRATEGY = 3
PAGE_TOKEN_DELAY_SECONDS = 2.0
MAX_RESULTS_LIMIT = 100


@dataclass(frozen=True)
class StrategyParams:
    name: str
    keyword: str
    radius: int
    place_type: Optional[str] = None


def build_strategies(sector: str) -> List[StrategyParams]:
    generic_term = "shop" if sector == "Retail" else "store"
    return [
        StrategyParams("typed keyword", keyword=sector, radius=20000, place_type=map_sector_to_type(sector)),
        StrategyParams("keyword only", keyword=sector, radius=25000),
        StrategyParams("generic term", keyword=generic_term, radius=25000),
        StrategyParams("wide radius", keyword=sector, radius=50000),
    ]


def clamp_max_results(max_results: int) -> int:
    return max(1, min(int(max_results), MAX_RESULTS_LIMIT))


class PlaceSearch:
    def __init__(
        self,
        geocoder: Geocoder,
        api_key: str,
        base_url: str = google_places._BASE_URL,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.geocoder = geocoder
        self.api_key = api_key
        self.base_url = base_url
        self._sleep = sleep

    def run_strategy(self, params: StrategyParams, coordinates: Coordinates, max_results: int) -> List[SearchCandidate]:
        """Run one nearby search and follow its pagination tokens."""
        try:
            response = google_places.nearby_search(
                coordinates.latitude,
                coordinates.longitude,
                params.radius,
                api_key=self.api_key,
                keyword=params.keyword,
                place_type=params.place_type,
                base_url=self.base_url,
            )
        except (GooglePlacesError, requests.RequestException) as exc:
            logger.warning("Strategy '%s' failed: %s", params.name, exc)
            return []

        results = list(response.get("results", []))
        page_token = response.get("next_page_token")
        pages = 1
        while page_token and len(results) < max_results and pages < MAX_PAGES_PER_STRATEGY:
            self._sleep(PAGE_TOKEN_DELAY_SECONDS)
            try:
                page = google_places.nearby_search_page(page_token, api_key=self.api_key, base_url=self.base_url)
            except (GooglePlacesError, requests.RequestException) as exc:
                logger.warning("Stopping pagination for strategy '%s' after page %d: %s", params.name, pages, exc)
                break
            pages += 1
            results.extend(page.get("results", []))
            page_token = page.get("next_page_token")

        logger.info("Strategy '%s' returned %d places over %d pages", params.name, len(results), pages)
        return [SearchCandidate.from_payload(raw) for raw in results if raw.get("place_id")]

    def search(self, sector: str, location: str, max_results: int = MAX_RESULTS_LIMIT) -> List[SearchCandidate]:
        """Return up to ``max_results`` unique candidates, in discovery order."""
        max_results = clamp_max_results(max_results)
        coordinates = self.geocoder.geocode(location)
        logger.info("Searching %s in %s at %s (max %d)", sector, location, coordinates, max_results)

        found: Dict[str, SearchCandidate] = {}
        best_count = 0
        for index, params in enumerate(build_strategies(sector)):
            if index > 0 and len(found) >= MIN_RESULTS_BEFORE_FALLBACK:
                break
            candidates = self.run_strategy(params, coordinates, max_results)
            added = 0
            for candidate in candidates:
                if candidate.place_id not in found:
                    found[candidate.place_id] = candidate
                    added += 1
            if len(candidates) > best_count:
                if index > 0:
                    logger.info("Strategy '%s' beat the best count so far (%d > %d)", params.name, len(candidates), best_count)
                best_count = len(candidates)
            logger.info("Strategy '%s' added %d new places, %d unique in total", params.name, added, len(found))

        if not found:
            raise InternalError(f"No results found for {sector} in {location}")

        return list(found.values())[:max_results]
