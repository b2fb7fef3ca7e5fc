"""CLI job to discover leads for a sector and location and write them as CSV."""

import argparse
import logging
import sys
from typing import Optional

from leadfinder.core.cache import ResultCache
from leadfinder.core.config import get_settings
from leadfinder.core.errors import ApiError
from leadfinder.core.leads import build_lead_service
from leadfinder.core.search import MAX_RESULTS_LIMIT
from leadfinder.etl.export import to_csv

logger = logging.getLogger(__name__)


def run_query_job(
    *,
    sector: str,
    location: str,
    max_results: int,
    output: Optional[str],
) -> int:
    settings = get_settings()
    if not settings.google_api_key:
        raise RuntimeError("GOOGLE_PLACES_API_KEY is required")

    sector = sector.strip()
    location = location.strip()
    if not sector or not location:
        raise ValueError("Sector and location are required")

    cache = ResultCache(default_ttl=settings.cache_ttl)
    service = build_lead_service(settings, cache)
    logger.info("Running lead search for %s in %s (max %d)", sector, location, max_results)
    leads = service.search_leads(sector, location, max_results=max_results)

    content = to_csv(leads)
    if output:
        with open(output, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        logger.info("Wrote %d leads to %s", len(leads), output)
    else:
        sys.stdout.write(content)

    logger.info("Completed run: leads=%d", len(leads))
    return len(leads)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Discover and score business leads via Google Places")
    parser.add_argument("--sector", dest="sector", required=True, help="Business sector, e.g. Electronics")
    parser.add_argument("--location", dest="location", required=True, help="City or area, e.g. Chennai")
    parser.add_argument(
        "--max-results",
        dest="max_results",
        type=int,
        default=MAX_RESULTS_LIMIT,
        help="Maximum number of leads to return (at most 100)",
    )
    parser.add_argument("--output", dest="output", help="CSV file to write; stdout when omitted")
    return parser


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args()

    try:
        run_query_job(
            sector=args.sector,
            location=args.location,
            max_results=args.max_results,
            output=args.output,
        )
    except ApiError as exc:
        logger.error("Lead search failed: %s", exc.message)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
