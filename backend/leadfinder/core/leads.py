"""Lead search entry point: cache, search, enrich."""

import logging
from typing import List

from leadfinder.core.cache import ResultCache
from leadfinder.core.config import Settings
from leadfinder.core.enricher import DetailEnricher
from leadfinder.core.errors import ApiError, BadRequestError, InternalError, NotFoundError
from leadfinder.core.geocoder import Geocoder
from leadfinder.core.search import MAX_RESULTS_LIMIT, PlaceSearch, clamp_max_results
from leadfinder.models import Lead

logger = logging.getLogger(__name__)


def leads_cache_key(sector: str, location: str, max_results: int) -> str:
    return f"leads_{sector}_{location}_{max_results}"


class LeadService:
    def __init__(self, cache: ResultCache, searcher: PlaceSearch, enricher: DetailEnricher, leads_ttl: int) -> None:
        self.cache = cache
        self.searcher = searcher
        self.enricher = enricher
        self.leads_ttl = leads_ttl

    def search_leads(
        self,
        sector: str,
        location: str,
        *,
        max_results: int = MAX_RESULTS_LIMIT,
        force_refresh: bool = False,
    ) -> List[Lead]:
        if not sector:
            raise BadRequestError("Business sector is required")
        if not location:
            raise BadRequestError("Location is required")

        max_results = clamp_max_results(max_results)
        cache_key = leads_cache_key(sector, location, max_results)
        if not force_refresh:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.info("Using cached results with %d leads for %s", len(cached), cache_key)
                return cached

        try:
            candidates = self.searcher.search(sector, location, max_results)
            leads = self.enricher.enrich_all(candidates, sector, location)
        except ApiError:
            raise
        except Exception as exc:
            logger.exception("Lead pipeline failed for %s in %s", sector, location)
            raise InternalError("Error fetching business leads") from exc

        self.cache.set(cache_key, leads, ttl=self.leads_ttl)
        for lead in leads:
            self.cache.set(f"lead_{lead.id}", lead, ttl=self.leads_ttl)
        logger.info("Cached %d leads for %s", len(leads), cache_key)
        return leads

    def get_lead_by_id(self, lead_id: str) -> Lead:
        lead = self.cache.get(f"lead_{lead_id}")
        if lead is None:
            raise NotFoundError(f"Lead with ID {lead_id} not found")
        return lead


def build_lead_service(settings: Settings, cache: ResultCache) -> LeadService:
    geocoder = Geocoder(
        cache,
        settings.google_api_key,
        country=settings.geocode_country,
        geocode_url=settings.geocode_api_url,
    )
    searcher = PlaceSearch(geocoder, settings.google_api_key, base_url=settings.places_api_url)
    enricher = DetailEnricher(settings.google_api_key, base_url=settings.places_api_url)
    return LeadService(cache, searcher, enricher, leads_ttl=settings.leads_cache_ttl)
