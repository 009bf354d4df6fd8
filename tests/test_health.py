"""
tests/test_health.py -- Integration tests for GET /api/health and the CLI.

Covers:
  - 200 response with status and version fields
  - No authentication required
  - `main.py check` exit codes for valid, expired and exp-less tokens
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import jwt

from auth.tokens import issue_token
from core.config import get_settings
from main import main


def test_health_returns_200(api_client):
    """Health endpoint returns 200 with status and version."""
    client, _ = api_client
    resp = client.get("/api/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert "version" in data


def test_health_no_auth_required(api_client):
    client, _ = api_client
    resp = client.get("/api/health", headers={})
    assert resp.status_code == 200


def test_cli_check_valid_token(capsys):
    assert main(["check", issue_token()]) == 0
    out = capsys.readouterr().out
    assert '"role": "owner"' in out
    assert "Valid until" in out


def test_cli_check_expired_token(capsys):
    token = issue_token(now=datetime.now(timezone.utc) - timedelta(days=40))
    assert main(["check", token]) == 1
    assert "not valid" in capsys.readouterr().out


def test_cli_check_token_without_exp(capsys):
    token = jwt.encode({"id": "inacio", "role": "owner", "iat": 1}, get_settings().jwt_secret, algorithm="HS256")
    assert main(["check", token]) == 1
    assert "not valid" in capsys.readouterr().out
