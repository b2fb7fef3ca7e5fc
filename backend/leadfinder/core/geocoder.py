"""Resolve free-text locations to coordinates."""

import logging
from typing import Dict

from leadfinder.core.cache import ResultCache
from leadfinder.core.errors import NotFoundError
from leadfinder.models import Coordinates
from leadfinder.vendors import google_places

logger = logging.getLogger(__name__)

# Cities the product targets; looked up before any network call.
KNOWN_CITIES: Dict[str, Coordinates] = {
    "bangalore": Coordinates(12.9716, 77.5946),
    "bengaluru": Coordinates(12.9716, 77.5946),
    "mumbai": Coordinates(19.0760, 72.8777),
    "delhi": Coordinates(28.6139, 77.2090),
    "new delhi": Coordinates(28.6139, 77.2090),
    "hyderabad": Coordinates(17.3850, 78.4867),
    "chennai": Coordinates(13.0827, 80.2707),
    "madurai": Coordinates(9.9252, 78.1198),
    "kochi": Coordinates(9.9312, 76.2673),
    "jaipur": Coordinates(26.9124, 75.7873),
    "kolkata": Coordinates(22.5726, 88.3639),
    "ahmedabad": Coordinates(23.0225, 72.5714),
    "pune": Coordinates(18.5204, 73.8567),
    "surat": Coordinates(21.1702, 72.8311),
    "lucknow": Coordinates(26.8467, 80.9462),
    "kanpur": Coordinates(26.4499, 80.3319),
    "nagpur": Coordinates(21.1458, 79.0882),
    "indore": Coordinates(22.7196, 75.8577),
    "bhopal": Coordinates(23.2599, 77.4126),
    "coimbatore": Coordinates(11.0168, 76.9558),
    "visakhapatnam": Coordinates(17.6868, 83.2185),
    "patna": Coordinates(25.5941, 85.1376),
    "chandigarh": Coordinates(30.7333, 76.7794),
    "thiruvananthapuram": Coordinates(8.5241, 76.9366),
}


def _city_key(location_name: str) -> str:
    return location_name.lower().split(",")[0].strip()


class Geocoder:
    def __init__(
        self,
        cache: ResultCache,
        api_key: str,
        country: str = "India",
        geocode_url: str = google_places._GEOCODE_URL,
    ) -> None:
        self.cache = cache
        self.api_key = api_key
        self.country = country
        self.geocode_url = geocode_url

    def _qualified(self, location_name: str) -> str:
        if not self.country or self.country.lower() in location_name.lower():
            return location_name
        return f"{location_name}, {self.country}"

    def geocode(self, location_name: str) -> Coordinates:
        """Return coordinates for ``location_name``.

        Raises NotFoundError when the provider has no match; network failures
        propagate as they are.
        """
        cache_key = f"geocode_{location_name}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        known = KNOWN_CITIES.get(_city_key(location_name))
        if known is not None:
            logger.info("Using static coordinates for %s: %s", location_name, known)
            self.cache.set(cache_key, known)
            return known

        query = self._qualified(location_name.strip())
        logger.info("Geocoding %s", query)
        payload = google_places.geocode(query, api_key=self.api_key, url=self.geocode_url)
        results = payload.get("results") or []
        if payload.get("status") != "OK" or not results:
            logger.warning("Geocoding failed for %s: status=%s", location_name, payload.get("status"))
            raise NotFoundError(f'Location "{location_name}" not found')

        location = results[0]["geometry"]["location"]
        coordinates = Coordinates(float(location["lat"]), float(location["lng"]))
        self.cache.set(cache_key, coordinates)
        return coordinates
