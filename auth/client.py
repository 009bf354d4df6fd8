"""
auth/client.py -- HTTP client for apps that verify tokens through AuthGate.

Apps that do not hold JWT_SECRET call GET /api/verify instead of decoding the
token themselves. Any non-200 answer or network failure is reported as
valid=False; the caller redirects to the login page either way.

Usage:
    client = AuthClient("https://auth.example.dev")
    result = client.verify(token)
    if not result.valid:
        return RedirectResponse(client.login_url)
"""

import logging
from typing import Optional

import requests

from auth.models import VerificationResult

logger = logging.getLogger("authgate.client")


class AuthClient:
    def __init__(self, base_url: str, timeout: float = 5, session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # One session per client for connection pooling.
        self._session = session or requests.Session()
        self._session.max_redirects = 3

    @property
    def login_url(self) -> str:
        return f"{self.base_url}/login"

    def verify(self, token: Optional[str]) -> VerificationResult:
        """Ask the gateway whether token is valid. Never raises."""
        if not token:
            return VerificationResult(valid=False)
        try:
            resp = self._session.get(
                f"{self.base_url}/api/verify",
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("Token verification request failed: %s", e)
            return VerificationResult(valid=False)
        if resp.status_code != 200:
            return VerificationResult(valid=False)
        try:
            data = resp.json()
        except ValueError:
            logger.warning("Token verification returned a non-JSON body")
            return VerificationResult(valid=False)
        if not data.get("valid"):
            return VerificationResult(valid=False)
        return VerificationResult(valid=True, claims=data.get("user"), permissions=data.get("permissions"))

    def close(self) -> None:
        self._session.close()
