"""
auth/errors.py -- Exception taxonomy for authentication and authorization.

Each error carries the HTTP status and the machine-readable code the API layer
renders. Raising these keeps auth/ free of HTTP response construction; the
handler in api/main.py turns them into the standard error envelope.

  AuthenticationFailure -- wrong master password            -> 401 bad_credentials
  TokenInvalid          -- missing, expired or forged token -> 401 unauthorized
  AuthorizationFailure  -- valid token, insufficient role   -> 403 forbidden

Layer rule: no imports from api/ or web/.
"""

from __future__ import annotations


class AuthGateError(Exception):
    status_code: int = 500
    code: str = "internal_error"
    message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class AuthenticationFailure(AuthGateError):
    status_code = 401
    code = "bad_credentials"
    message = "Invalid password."


class TokenInvalid(AuthGateError):
    """Raised for every token failure. The cause is never exposed to callers."""

    status_code = 401
    code = "unauthorized"
    message = "Not authenticated."

    def __init__(self, message: str | None = None, login_url: str | None = None, presented: bool = False) -> None:
        super().__init__(message)
        self.login_url = login_url
        # True when a token was sent but rejected, so the stale cookie gets cleared.
        self.presented = presented


class AuthorizationFailure(AuthGateError):
    status_code = 403
    code = "forbidden"
    message = "Only owner can grant permissions."
