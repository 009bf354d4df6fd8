"""
tests/conftest.py -- Shared test fixtures for AuthGate integration tests.

This module provides:
  - _patch_lifespan(): wires a fresh PermissionStore into app.state, bypassing
    the real startup
  - api_client: (client, store) TestClient for API integration tests
  - web_client: TestClient with follow_redirects=False for web route tests
  - owner_token: a freshly issued owner token

JWT_SECRET, MASTER_PASSWORD and COOKIE_DOMAIN must be set before any auth/core
import so get_settings() validates against known values instead of raising.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager

# CRITICAL: configure before importing app modules; get_settings() is cached.
os.environ["JWT_SECRET"] = "test-secret-0123456789abcdef0123456789abcdef"
os.environ["MASTER_PASSWORD"] = "i486983nacio:!"
os.environ["COOKIE_DOMAIN"] = ".example.dev"
os.environ.pop("DEBUG", None)

import pytest
from fastapi.testclient import TestClient

from asgi import app
from auth.permissions import PermissionStore
from auth.tokens import issue_token

MASTER_PASSWORD = "i486983nacio:!"


def _patch_lifespan(store: PermissionStore):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.permissions = store
        yield

    return test_lifespan


@pytest.fixture(scope="module")
def api_client() -> Generator[tuple[TestClient, PermissionStore], None, None]:
    """Yield (client, store) for API integration tests.

    The store is the same object the routes see, so tests can inspect it
    directly after a grant.
    """
    store = PermissionStore()
    app.router.lifespan_context = _patch_lifespan(store)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client, store


@pytest.fixture(scope="module")
def web_client() -> Generator[TestClient, None, None]:
    """Yield a client for web route tests.

    follow_redirects=False is essential: we assert on redirect locations,
    which are invisible once the client follows them.
    """
    app.router.lifespan_context = _patch_lifespan(PermissionStore())

    with TestClient(app, follow_redirects=False, raise_server_exceptions=True) as client:
        yield client


@pytest.fixture
def owner_token() -> str:
    return issue_token()

