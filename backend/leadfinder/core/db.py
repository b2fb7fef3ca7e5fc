"""Database helpers for search and export history."""

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from psycopg2 import extras, pool

from leadfinder.core.config import get_settings

logger = logging.getLogger(__name__)

_connection_pool: Optional[pool.SimpleConnectionPool] = None


def init_pool(minconn: int = 1, maxconn: int = 5) -> pool.SimpleConnectionPool:
    """Initialise and return the shared connection pool."""
    global _connection_pool
    if _connection_pool is None:
        settings = get_settings()
        if not settings.database_url:
            raise RuntimeError("DATABASE_URL is required for database connections")
        _connection_pool = pool.SimpleConnectionPool(
            minconn,
            maxconn,
            dsn=settings.database_url,
            connect_timeout=10,
        )
        logger.info("Database connection pool initialised")
    return _connection_pool


@contextmanager
def get_connection():
    """Context manager yielding a pooled connection."""
    pg_pool = init_pool()
    conn = pg_pool.getconn()
    try:
        yield conn
    finally:
        pg_pool.putconn(conn)


_INSERT_SEARCH = """
INSERT INTO search_history (
    user_id,
    sector,
    location,
    result_count,
    created_at
) VALUES (
    %(user_id)s,
    %(sector)s,
    %(location)s,
    %(result_count)s,
    NOW()
);
"""

_INSERT_EXPORT = """
INSERT INTO export_history (
    user_id,
    sector,
    location,
    lead_count,
    destination,
    created_at
) VALUES (
    %(user_id)s,
    %(sector)s,
    %(location)s,
    %(lead_count)s,
    %(destination)s,
    NOW()
);
"""

_SELECT_HISTORY = """
SELECT sector, location, result_count, created_at
FROM search_history
WHERE user_id = %(user_id)s
ORDER BY created_at DESC
LIMIT %(limit)s;
"""


def _require(params: Dict[str, Any], *fields: str) -> None:
    missing = [name for name in fields if not params.get(name)]
    if missing:
        raise ValueError(f"{', '.join(missing)} required for history rows")


def record_search(user_id: str, sector: str, location: str, result_count: int) -> None:
    params = {"user_id": user_id, "sector": sector, "location": location, "result_count": result_count}
    _require(params, "user_id", "sector", "location")
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(_INSERT_SEARCH, params)
        conn.commit()
        logger.debug("Recorded search %s/%s for %s", sector, location, user_id)


def record_export(user_id: str, sector: str, location: str, lead_count: int, destination: str) -> None:
    params = {
        "user_id": user_id,
        "sector": sector,
        "location": location,
        "lead_count": lead_count,
        "destination": destination,
    }
    _require(params, "user_id", "sector", "location", "destination")
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(_INSERT_EXPORT, params)
        conn.commit()
        logger.debug("Recorded %s export of %d leads for %s", destination, lead_count, user_id)


def list_history(user_id: str, limit: int = 20) -> List[Dict[str, Any]]:
    with get_connection() as conn:
        with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
            cur.execute(_SELECT_HISTORY, {"user_id": user_id, "limit": limit})
            rows = cur.fetchall()
    return [dict(row) for row in rows]
