"""Bearer-token authentication for the HTTP API."""

import logging
from functools import wraps
from typing import Any, Callable, Optional

from flask import g, request

from leadfinder.core.config import Settings
from leadfinder.core.errors import ForbiddenError, UnauthorizedError
from leadfinder.vendors import supabase_auth
from leadfinder.vendors.supabase_auth import SupabaseAuthError

logger = logging.getLogger(__name__)

DEV_USER = {"id": "dev-user", "email": "dev@example.com", "app_metadata": {"role": "user"}}


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def require_auth(get_settings: Callable[[], Settings]) -> Callable:
    """Decorator factory resolving ``g.user`` from the request's bearer token."""

    def decorator(view: Callable) -> Callable:
        @wraps(view)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            settings = get_settings()
            if settings.is_development:
                g.user = DEV_USER
                return view(*args, **kwargs)

            token = bearer_token()
            if not token:
                raise UnauthorizedError("Not authorized to access this route")
            try:
                user = supabase_auth.get_user(settings.supabase_url, settings.supabase_anon_key, token)
            except SupabaseAuthError as exc:
                raise UnauthorizedError(str(exc)) from exc
            if not user or not user.get("id"):
                raise UnauthorizedError("No user found for the provided token")
            g.user = user
            g.access_token = token
            return view(*args, **kwargs)

        return wrapper

    return decorator


def user_role(user: dict) -> str:
    return (user.get("app_metadata") or {}).get("role") or "user"


def require_role(*roles: str) -> Callable:
    """Must be applied inside ``require_auth``."""

    def decorator(view: Callable) -> Callable:
        @wraps(view)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            role = user_role(g.user)
            if role not in roles:
                raise ForbiddenError(f"User role {role} is not authorized to access this route")
            return view(*args, **kwargs)

        return wrapper

    return decorator
