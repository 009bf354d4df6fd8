"""
auth/tokens.py -- Credential token issuance, verification and cookie helpers.

Security design decisions:
  JWT: python-jose with HS256. Tokens are signed with JWT_SECRET and carry the
       fixed owner identity (id, name, role) plus iat and exp. Decoding returns
       None on any failure -- the verifier and the route layer turn that into a
       uniform "not valid" answer without saying why.

  iat is milliseconds since the epoch (the wire format consuming apps already
       parse). exp is standard JWT seconds: issuance second + TOKEN_EXPIRE_DAYS.

  Master password: compared with plain equality against MASTER_PASSWORD. There
       is no hashing, no attempt counter and no lockout. See DESIGN.md.

  Cookie: SameSite=None + Secure + HttpOnly, scoped to COOKIE_DOMAIN so every
       app on a sibling subdomain receives it.

Layer rule: no imports from api/ or web/. Import from core/ is allowed.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from jose import JWTError, jwt

from auth.errors import AuthenticationFailure
from auth.models import VerificationResult
from core.config import OWNER_ROLE, get_settings

if TYPE_CHECKING:
    from auth.permissions import PermissionStore

_ALGORITHM = "HS256"

# ---------------------------------------------------------------------------
# Issue
# ---------------------------------------------------------------------------


def issue_token(now: datetime | None = None) -> str:
    """Mint a signed token for the owner identity.

    Args:
        now: Issuance instant. Defaults to the current UTC time; tests pass a
             past instant to mint tokens that are already expired.
    """
    settings = get_settings()
    now = now or datetime.now(timezone.utc)
    issued_ms = int(now.timestamp() * 1000)
    payload = {
        "id": settings.owner_id,
        "name": settings.owner_name,
        "role": OWNER_ROLE,
        "iat": issued_ms,
        "exp": issued_ms // 1000 + settings.token_expire_seconds,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=_ALGORITHM)


def authenticate(password: str) -> str:
    """Exchange the master password for a token.

    Raises AuthenticationFailure for any other password. No token is minted
    and nothing is recorded on failure.
    """
    if password != get_settings().master_password:
        raise AuthenticationFailure()
    return issue_token()


# ---------------------------------------------------------------------------
# Verify
# ---------------------------------------------------------------------------


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and verify a JWT. Returns the claims dict or None on any failure."""
    try:
        claims = jwt.decode(
            token,
            get_settings().jwt_secret,
            algorithms=[_ALGORITHM],
            options={"require_exp": True},
        )
    except JWTError:
        return None
    if "id" not in claims or "role" not in claims or "exp" not in claims:
        return None
    return claims


def verify(token: str | None, store: PermissionStore) -> VerificationResult:
    """Validate a token and attach the holder's advisory permissions.

    Missing, malformed, forged and expired tokens all yield valid=False.
    """
    if not token:
        return VerificationResult(valid=False)
    claims = decode_token(token)
    if claims is None:
        return VerificationResult(valid=False)
    return VerificationResult(valid=True, claims=claims, permissions=store.get(claims["id"]))


# ---------------------------------------------------------------------------
# Cookie helpers
# ---------------------------------------------------------------------------


def set_session_cookie(response, token: str) -> None:
    """Write the token as the shared cross-subdomain session cookie.

    samesite="none" is required because the consuming apps live on different
    subdomains than this service; browsers only accept it together with secure.
    max_age matches the token expiry so both lapse together.
    """
    settings = get_settings()
    response.set_cookie(
        settings.cookie_name,
        value=token,
        domain=settings.cookie_domain or None,
        httponly=True,
        secure=True,
        samesite="none",
        max_age=settings.token_expire_seconds,
    )


def clear_session_cookie(response) -> None:
    """Expire the session cookie using the same scope it was set with."""
    settings = get_settings()
    response.delete_cookie(
        settings.cookie_name,
        domain=settings.cookie_domain or None,
        secure=True,
        httponly=True,
        samesite="none",
    )
