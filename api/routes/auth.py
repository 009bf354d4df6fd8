"""
api/routes/auth.py -- Token exchange, verification and permission endpoints.

Routes:
  POST /api/login   -- master password -> token; also sets the shared cookie
  GET  /api/verify  -- trust boundary consuming apps call; never mutates
  POST /api/grant   -- overwrite a user's advisory permissions (owner only)

Security:
  [M5] Cache-Control: no-store on login responses.
  /api/verify answers a bare {"valid": false} with 401 for every failure so
  callers cannot learn why a token was rejected.
  POST /api/login is NOT rate-limited. Any number of guesses is accepted.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.models import (
    ErrorDetail,
    ErrorResponse,
    GrantRequest,
    GrantResponse,
    LoginRequest,
    LoginResponse,
    VerifyResponse,
)
from auth.dependencies import extract_token, get_permission_store, require_owner
from auth.errors import AuthenticationFailure
from auth.permissions import PermissionStore, grant
from auth.tokens import authenticate, set_session_cookie, verify

# Auth policy:
# - POST /api/login:   public -- this is where tokens come from
# - GET  /api/verify:  public -- the token itself is the credential being checked
# - POST /api/grant:   requires owner (require_owner)
router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest) -> JSONResponse:
    """Exchange the master password for a token and the shared session cookie.

    redirect echoes returnTo when given so the login page can send the browser
    back to the app that asked for authentication.
    """
    try:
        token = authenticate(body.password)
    except AuthenticationFailure as exc:
        resp = JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=ErrorDetail(code=exc.code, message=exc.message)).model_dump(exclude_none=True),
        )
        resp.headers["Cache-Control"] = "no-store"  # [M5]
        return resp

    resp = JSONResponse(
        content=LoginResponse(redirect=body.return_to or "/", token=token).model_dump(),
    )
    set_session_cookie(resp, token)
    resp.headers["Cache-Control"] = "no-store"  # [M5]
    return resp


@router.get("/verify", response_model=VerifyResponse)
def verify_session(request: Request) -> JSONResponse:
    """Report whether the request carries a valid token, and whose it is."""
    result = verify(extract_token(request, allow_query=True), get_permission_store(request))
    if not result.valid:
        return JSONResponse(status_code=401, content={"valid": False})
    return JSONResponse(
        content=VerifyResponse(valid=True, user=result.claims, permissions=result.permissions).model_dump(),
    )


@router.post("/grant", response_model=GrantResponse)
def grant_permissions(
    body: GrantRequest,
    claims: dict[str, Any] = Depends(require_owner),
    store: PermissionStore = Depends(get_permission_store),
) -> GrantResponse:
    """Replace the advisory permission list for body.user_id."""
    grant(claims, body.user_id, body.permissions, store)
    return GrantResponse()
