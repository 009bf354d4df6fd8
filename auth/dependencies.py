"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

Token sources are checked in priority order:
  1. Session cookie (COOKIE_NAME, "auth_session") -- set by POST /api/login.
  2. Authorization: Bearer <token> header -- apps that hold the token themselves.
  3. ?token= query parameter -- only where allow_query=True (GET / and
     GET /api/verify), for apps that were handed the token in a link.

try_get_claims() is the soft variant (returns None on failure).
get_current_claims() wraps it and raises TokenInvalid (401).
require_owner() wraps get_current_claims() and raises AuthorizationFailure (403).

Consuming apps that share JWT_SECRET can use get_current_claims directly as a
dependency instead of calling /api/verify over HTTP.

Layer rule: no imports from web/ or api/.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request

from auth.errors import AuthorizationFailure, TokenInvalid
from auth.permissions import PermissionStore
from auth.tokens import decode_token
from core.config import OWNER_ROLE, get_settings


def extract_token(request: Request, allow_query: bool = False) -> str | None:
    """Return the first token found on the request, or None."""
    token: str | None = request.cookies.get(get_settings().cookie_name)

    if not token:
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            token = auth_header[7:]

    if not token and allow_query:
        token = request.query_params.get("token")

    return token or None


def get_permission_store(request: Request) -> PermissionStore:
    return request.app.state.permissions


def try_get_claims(request: Request, allow_query: bool = False) -> dict[str, Any] | None:
    """Return the verified claims for the request, None on any failure. Never raises."""
    token = extract_token(request, allow_query=allow_query)
    if token is None:
        return None
    return decode_token(token)


def get_current_claims(request: Request) -> dict[str, Any]:
    """Require a valid token. Raises TokenInvalid (HTTP 401) otherwise.

    Use as a FastAPI dependency:
        @router.get("/protected")
        async def route(claims: dict = Depends(get_current_claims)): ...
    """
    claims = try_get_claims(request)
    if claims is None:
        settings = get_settings()
        if extract_token(request):
            raise TokenInvalid("Invalid session.", login_url=settings.login_url, presented=True)
        raise TokenInvalid("Not authenticated.", login_url=settings.login_url)
    return claims


def require_owner(request: Request) -> dict[str, Any]:
    """Require the owner role. 401 if unauthenticated, 403 for any other role."""
    claims = get_current_claims(request)
    if claims.get("role") != OWNER_ROLE:
        raise AuthorizationFailure()
    return claims
