"""HTTP entrypoint exposing the lead search API."""

from __future__ import annotations

import logging
import traceback
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from flask import Flask, Response, g, jsonify, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from werkzeug.exceptions import HTTPException

from leadfinder.core import db
from leadfinder.core.auth import require_auth, require_role
from leadfinder.core.cache import ResultCache
from leadfinder.core.config import Settings, get_settings
from leadfinder.core.errors import ApiError, BadRequestError, InternalError, TooManyRequestsError, UnauthorizedError
from leadfinder.core.leads import build_lead_service
from leadfinder.core.search import MAX_RESULTS_LIMIT
from leadfinder.etl.export import export_filename, to_csv, to_sheet_values
from leadfinder.vendors import google_sheets, supabase_auth
from leadfinder.vendors.google_sheets import GoogleSheetsError
from leadfinder.vendors.supabase_auth import SupabaseAuthError

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- Bootstrap ----------
_settings = get_settings()
_cache = ResultCache(default_ttl=_settings.cache_ttl)
_lead_service = build_lead_service(_settings, _cache)
_executor = ThreadPoolExecutor(max_workers=4)

app = Flask(__name__)
CORS(
    app,
    origins=[r"https?://.*"] if _settings.is_development else list(_settings.allowed_origins),
    supports_credentials=True,
    methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
    expose_headers=["Content-Length", "Content-Type"],
    max_age=86400,
)
limiter = Limiter(
    get_remote_address,
    app=app,
    default_limits=[_settings.rate_limit],
    storage_uri="memory://",
    enabled=not _settings.is_development,
)
logger.info("Allowed CORS origins: %s", ", ".join(_settings.allowed_origins))


def _current_settings() -> Settings:
    return _settings


authenticated = require_auth(_current_settings)


# ---------- Errors ----------


def _error_response(status_code: int, message: str, exc: Optional[BaseException] = None) -> Any:
    body: Dict[str, Any] = {"success": False, "error": message}
    if exc is not None and _settings.environment != "production":
        body["details"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return jsonify(body), status_code


@app.errorhandler(ApiError)
def handle_api_error(exc: ApiError) -> Any:
    if exc.status_code >= 500:
        logger.error("Request failed: %s", exc.message)
    return _error_response(exc.status_code, exc.message, exc)


@app.errorhandler(429)
def handle_rate_limited(exc: HTTPException) -> Any:
    return _error_response(429, TooManyRequestsError.default_message)


@app.errorhandler(Exception)
def handle_unexpected(exc: Exception) -> Any:
    if isinstance(exc, HTTPException):
        return _error_response(exc.code or 500, exc.description or exc.name)
    logger.exception("Unhandled error: %s", exc)
    return _error_response(500, "Internal Server Error", exc)


# ---------- Helpers ----------


def _parse_max_results(raw: Optional[Any]) -> int:
    if raw in (None, ""):
        return MAX_RESULTS_LIMIT
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise BadRequestError("maxResults must be numeric")
    if value <= 0:
        raise BadRequestError("maxResults must be positive")
    return min(value, MAX_RESULTS_LIMIT)


def _require_search_params(source: Dict[str, Any]) -> Tuple[str, str, int]:
    sector = str(source.get("sector") or "").strip()
    location = str(source.get("location") or "").strip()
    if not sector:
        raise BadRequestError("Business sector is required")
    if not location:
        raise BadRequestError("Location is required")
    return sector, location, _parse_max_results(source.get("maxResults"))


def _record_history(kind: str, **fields: Any) -> None:
    if not _settings.database_url:
        return
    try:
        if kind == "search":
            db.record_search(g.user["id"], **fields)
        else:
            db.record_export(g.user["id"], **fields)
    except Exception as exc:  # noqa: BLE001
        logger.error("Failed to record %s history: %s", kind, exc)


# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Simple root to avoid 404 on GET /"""
    return "ok", 200


@app.get("/health")
@limiter.exempt
def healthcheck() -> Any:
    return jsonify({"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}), 200


@app.get("/api/leads/search")
@authenticated
def search_leads() -> Any:
    """Search leads for ``sector`` in ``location``.

    Pipeline failures and timeouts answer 200 with an empty list; only invalid
    input is reported as an error.
    """
    sector, location, max_results = _require_search_params(request.args)
    force_refresh = request.args.get("forceRefresh", "").lower() == "true"
    logger.info(
        "Lead search: sector=%s location=%s sources=%s forceRefresh=%s maxResults=%d",
        sector,
        location,
        request.args.get("sources", "google"),
        force_refresh,
        max_results,
    )

    future = _executor.submit(
        _lead_service.search_leads,
        sector,
        location,
        max_results=max_results,
        force_refresh=force_refresh,
    )
    try:
        leads = future.result(timeout=_settings.search_timeout_seconds)
    except Exception as exc:  # noqa: BLE001
        logger.error("Returning empty results for %s in %s: %r", sector, location, exc)
        return jsonify({"success": True, "count": 0, "data": [], "message": "Search completed with no results"}), 200

    _record_history("search", sector=sector, location=location, result_count=len(leads))
    data = [lead.to_dict() for lead in leads]
    return jsonify({"success": True, "count": len(data), "data": data}), 200


@app.get("/api/leads/export.csv")
@authenticated
def export_leads_csv() -> Any:
    sector, location, max_results = _require_search_params(request.args)
    leads = _lead_service.search_leads(sector, location, max_results=max_results)
    _record_history("export", sector=sector, location=location, lead_count=len(leads), destination="csv")
    filename = export_filename(sector, location)
    return Response(
        to_csv(leads),
        mimetype="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.post("/api/leads/export/sheets")
@authenticated
def export_leads_sheets() -> Any:
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    sector, location, max_results = _require_search_params(payload)
    access_token = payload.get("accessToken")
    if not access_token:
        raise BadRequestError("A Google Sheets access token is required")
    title = payload.get("title") or f"Lead Generation - {sector} in {location}"

    leads = _lead_service.search_leads(sector, location, max_results=max_results)
    try:
        sheet = google_sheets.create_spreadsheet(title, access_token)
        spreadsheet_id = sheet["spreadsheetId"]
        written = google_sheets.write_values(spreadsheet_id, to_sheet_values(leads), access_token)
    except GoogleSheetsError as exc:
        if exc.status_code in (401, 403):
            raise UnauthorizedError(str(exc)) from exc
        raise InternalError(f"Google Sheets export failed: {exc}") from exc

    _record_history("export", sector=sector, location=location, lead_count=len(leads), destination="sheets")
    data = {
        "spreadsheetId": spreadsheet_id,
        "spreadsheetUrl": sheet.get("spreadsheetUrl"),
        "updatedRange": written.get("updatedRange"),
    }
    return jsonify({"success": True, "data": data}), 200


@app.get("/api/leads/<lead_id>")
@authenticated
def get_lead(lead_id: str) -> Any:
    lead = _lead_service.get_lead_by_id(lead_id)
    return jsonify({"success": True, "data": lead.to_dict()}), 200


@app.get("/api/history")
@authenticated
def search_history() -> Any:
    if not _settings.database_url:
        return jsonify({"success": True, "data": []}), 200
    rows = db.list_history(g.user["id"])
    for row in rows:
        if row.get("created_at") is not None:
            row["created_at"] = row["created_at"].isoformat()
    return jsonify({"success": True, "data": rows}), 200


@app.post("/api/cache/invalidate")
@authenticated
@require_role("admin")
def invalidate_cache() -> Any:
    _cache.invalidate_all()
    return jsonify({"success": True, "data": {}}), 200


# ---------- Auth passthrough ----------


@app.post("/api/auth/register")
def register() -> Any:
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    name, email, password = payload.get("name"), payload.get("email"), payload.get("password")
    if not name or not email or not password:
        raise BadRequestError("Please provide name, email and password")
    try:
        result = supabase_auth.sign_up(_settings.supabase_url, _settings.supabase_anon_key, email, password, name)
    except SupabaseAuthError as exc:
        raise BadRequestError(str(exc)) from exc
    return jsonify({"success": True, **result}), 201


@app.post("/api/auth/login")
def login() -> Any:
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    email, password = payload.get("email"), payload.get("password")
    if not email or not password:
        raise BadRequestError("Please provide an email and password")
    try:
        result = supabase_auth.sign_in_with_password(_settings.supabase_url, _settings.supabase_anon_key, email, password)
    except SupabaseAuthError as exc:
        raise UnauthorizedError(str(exc)) from exc
    return jsonify({"success": True, **result}), 200


@app.post("/api/auth/google")
def google_login() -> Any:
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    token = payload.get("accessToken")
    if not token:
        raise BadRequestError("Please provide a Google access token")
    try:
        result = supabase_auth.sign_in_with_id_token(_settings.supabase_url, _settings.supabase_anon_key, token)
    except SupabaseAuthError as exc:
        raise UnauthorizedError(str(exc)) from exc
    return jsonify({"success": True, **result}), 200


@app.get("/api/auth/me")
@authenticated
def me() -> Any:
    return jsonify({"success": True, "data": g.user}), 200


@app.post("/api/auth/logout")
@authenticated
def logout() -> Any:
    token = getattr(g, "access_token", None)
    if token:
        try:
            supabase_auth.sign_out(_settings.supabase_url, _settings.supabase_anon_key, token)
        except SupabaseAuthError as exc:
            raise InternalError(str(exc)) from exc
    return jsonify({"success": True, "data": {}}), 200


def main() -> None:
    logger.info("[BOOT] Environment=%s", _settings.environment)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", _settings.port)
    app.run(host="0.0.0.0", port=_settings.port)


if __name__ == "__main__":
    main()
