"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_DEFAULT_ORIGINS = (
    "http://localhost:5173",
    "http://localhost:4173",
    "https://leadfind.vercel.app",
    "https://lead-generation.vercel.app",
)


@dataclass(frozen=True)
class Settings:
    google_api_key: str
    places_api_url: str = "https://maps.googleapis.com/maps/api/place"
    geocode_api_url: str = "https://maps.googleapis.com/maps/api/geocode/json"
    geocode_country: str = "India"
    environment: str = "production"
    port: int = 3000
    cache_ttl: int = 3600
    leads_cache_ttl: int = 86400
    rate_limit_window_ms: int = 60000
    rate_limit_max_requests: int = 50
    allowed_origins: Tuple[str, ...] = _DEFAULT_ORIGINS
    search_timeout_seconds: int = 30
    supabase_url: str = ""
    supabase_anon_key: str = ""
    database_url: str = ""

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def rate_limit(self) -> str:
        window_seconds = max(1, self.rate_limit_window_ms // 1000)
        return f"{self.rate_limit_max_requests} per {window_seconds} second"


def _parse_origins(raw: str) -> Tuple[str, ...]:
    origins = tuple(origin.strip() for origin in raw.split(",") if origin.strip())
    return origins or _DEFAULT_ORIGINS


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_api_key = os.getenv("GOOGLE_PLACES_API_KEY", "")
    supabase_url = os.getenv("SUPABASE_URL", "").rstrip("/")
    supabase_anon_key = os.getenv("SUPABASE_ANON_KEY", "")
    database_url = os.getenv("DATABASE_URL", "")

    if not google_api_key:
        logger.warning("GOOGLE_PLACES_API_KEY is not configured; Google Places requests will fail.")
    if not supabase_url or not supabase_anon_key:
        logger.warning("SUPABASE_URL/SUPABASE_ANON_KEY not configured; authentication will fail outside development.")
    if not database_url:
        logger.warning("DATABASE_URL is not set; search and export history will not be recorded.")

    return Settings(
        google_api_key=google_api_key,
        places_api_url=os.getenv("GOOGLE_PLACES_API_URL", "https://maps.googleapis.com/maps/api/place").rstrip("/"),
        geocode_api_url=os.getenv("GOOGLE_GEOCODE_API_URL", "https://maps.googleapis.com/maps/api/geocode/json"),
        geocode_country=os.getenv("GEOCODE_COUNTRY", "India").strip(),
        environment=os.getenv("APP_ENV", "production").strip().lower(),
        port=int(os.getenv("PORT", "3000")),
        cache_ttl=int(os.getenv("CACHE_TTL", "3600")),
        leads_cache_ttl=int(os.getenv("LEADS_CACHE_TTL", "86400")),
        rate_limit_window_ms=int(os.getenv("RATE_LIMIT_WINDOW_MS", "60000")),
        rate_limit_max_requests=int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "50")),
        allowed_origins=_parse_origins(os.getenv("ALLOWED_ORIGINS", "")),
        search_timeout_seconds=int(os.getenv("SEARCH_TIMEOUT_SECONDS", "30")),
        supabase_url=supabase_url,
        supabase_anon_key=supabase_anon_key,
        database_url=database_url,
    )
