"""
api/main.py -- FastAPI application entry point for AuthGate.

Run with:      uvicorn asgi:app --reload
               python main.py serve

Middleware stack (outermost to innermost):
  1. log_requests   -- one access-log line per request
  2. CORSMiddleware -- any origin, credentials allowed; the consuming apps live
                       on sibling subdomains and call /api/verify from the browser
  3. answer_options -- 200 for OPTIONS requests that are not CORS preflights

Lifespan validates configuration (fail fast on missing secrets) and creates
the PermissionStore that routes read from app.state.permissions.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.models import ErrorDetail, ErrorResponse, HealthResponse
from api.routes.auth import router as auth_router
from auth.errors import AuthGateError, TokenInvalid
from auth.permissions import PermissionStore
from auth.tokens import clear_session_cookie
from core.config import get_settings

__version__ = "1.0.0"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("authgate.api")

# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Validate settings and create per-process state.

    get_settings() raises ValueError on a missing JWT_SECRET or MASTER_PASSWORD,
    which aborts startup before the first request is served.
    """
    settings = get_settings()
    app.state.permissions = PermissionStore()
    logger.info(
        "AuthGate starting up (cookie=%s, domain=%s, expiry=%dd)",
        settings.cookie_name,
        settings.cookie_domain or "<host-only>",
        settings.token_expire_days,
    )

    yield

    logger.info("AuthGate shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="AuthGate",
    description="Shared-session authentication for apps on sibling subdomains.",
    version=__version__,
    lifespan=lifespan,
)

# Registered before CORSMiddleware so it sits inside it: real preflights
# (Origin + Access-Control-Request-Method) are answered by CORS first.
@app.middleware("http")
async def answer_options(request: Request, call_next):
    """Answer 200 to any bare OPTIONS request without routing it."""
    if request.method == "OPTIONS":
        return Response(status_code=200)
    return await call_next(request)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# ---------------------------------------------------------------------------
# Request logging middleware
# ---------------------------------------------------------------------------


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    # Path only: the query string may carry a token.
    logger.info(
        "%s %s %d %.1fms %s",
        request.method,
        request.url.path,
        response.status_code,
        ms,
        request.client.host if request.client else "unknown",
    )
    return response


# ---------------------------------------------------------------------------
# Router registration
# ---------------------------------------------------------------------------

app.include_router(auth_router, prefix="/api", tags=["Auth"])
# Web UI router is mounted by asgi.py, not here.


# ---------------------------------------------------------------------------
# Exception handlers
#
# All handlers return the same ErrorResponse envelope so API clients can parse
# errors uniformly. /api/verify is the one route that answers its own failures.
# ---------------------------------------------------------------------------


@app.exception_handler(AuthGateError)
async def auth_error_handler(request: Request, exc: AuthGateError) -> JSONResponse:
    """Render the auth error taxonomy (401 / 403).

    A rejected token also clears the session cookie so the browser stops
    presenting it.
    """
    login_url = exc.login_url if isinstance(exc, TokenInvalid) else None
    response = JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=ErrorDetail(code=exc.code, message=exc.message, login_url=login_url),
        ).model_dump(by_alias=True, exclude_none=True),
    )
    if isinstance(exc, TokenInvalid) and exc.presented:
        clear_session_cookie(response)
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 422 with structured error when request body or query params fail validation."""
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            error=ErrorDetail(
                code="validation_error",
                message="Request validation failed.",
                detail=str(exc.errors()),
            )
        ).model_dump(exclude_none=True),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Return a structured error for FastAPI/Starlette HTTP exceptions (404, 405, ...)."""
    if isinstance(exc.detail, dict):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=ErrorDetail(
                code=f"http_{exc.status_code}",
                message=str(exc.detail),
            )
        ).model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected server errors.

    The raw exception goes to the log only, never to the response body.
    """
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error=ErrorDetail(
                code="internal_error",
                message="An unexpected error occurred.",
            )
        ).model_dump(exclude_none=True),
    )


# ---------------------------------------------------------------------------
# Health endpoint -- no auth, so load balancers can check it
# ---------------------------------------------------------------------------


@app.get("/api/health", tags=["Health"])
async def health() -> HealthResponse:
    """Return liveness and current version."""
    return HealthResponse(version=__version__)
