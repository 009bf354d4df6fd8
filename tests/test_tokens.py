"""Unit tests for auth/tokens.py -- issuance, verification and tamper resistance.

These call the token functions directly; no HTTP stack involved. The master
password and secret come from the environment set in conftest.py.
"""

from __future__ import annotations

import base64
import json
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from auth.errors import AuthenticationFailure
from auth.permissions import PermissionStore
from auth.tokens import authenticate, decode_token, issue_token, verify
from core.config import get_settings

THIRTY_DAYS = 30 * 24 * 60 * 60


def _b64(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


# ---------------------------------------------------------------------------
# authenticate
# ---------------------------------------------------------------------------


class TestAuthenticate:
    @pytest.mark.parametrize(
        "password",
        ["", "wrong", "i486983nacio:", "i486983nacio:! ", "I486983NACIO:!", " i486983nacio:!"],
    )
    def test_wrong_password_never_yields_token(self, password: str) -> None:
        with pytest.raises(AuthenticationFailure):
            authenticate(password)

    def test_master_password_yields_owner_token(self) -> None:
        claims = decode_token(authenticate("i486983nacio:!"))
        assert claims is not None
        assert claims["role"] == "owner"
        assert claims["id"] == "inacio"
        assert claims["name"] == "Inacio"

    def test_expiry_is_exactly_thirty_days_after_issuance(self) -> None:
        claims = decode_token(authenticate("i486983nacio:!"))
        assert claims["exp"] == claims["iat"] // 1000 + THIRTY_DAYS

    def test_iat_is_milliseconds(self) -> None:
        before = datetime.now(timezone.utc).timestamp() * 1000
        claims = decode_token(authenticate("i486983nacio:!"))
        after = datetime.now(timezone.utc).timestamp() * 1000
        assert before - 1 <= claims["iat"] <= after + 1

    def test_failure_has_generic_message(self) -> None:
        with pytest.raises(AuthenticationFailure) as exc_info:
            authenticate("nope")
        assert exc_info.value.status_code == 401
        assert "nope" not in str(exc_info.value)


# ---------------------------------------------------------------------------
# decode_token / verify
# ---------------------------------------------------------------------------


class TestVerify:
    def test_round_trip_is_valid_immediately(self) -> None:
        result = verify(authenticate("i486983nacio:!"), PermissionStore())
        assert result.valid is True
        assert result.claims["role"] == "owner"
        assert result.permissions == ["read", "write"]

    def test_permissions_come_from_store(self) -> None:
        store = PermissionStore({"inacio": ["admin"]})
        result = verify(issue_token(), store)
        assert result.permissions == ["admin"]

    def test_missing_token_is_invalid(self) -> None:
        result = verify(None, PermissionStore())
        assert result.valid is False
        assert result.claims is None
        assert result.permissions is None

    def test_garbage_token_is_invalid(self) -> None:
        assert verify("not.a.jwt", PermissionStore()).valid is False

    def test_expired_token_is_invalid(self) -> None:
        token = issue_token(now=datetime.now(timezone.utc) - timedelta(days=31))
        assert decode_token(token) is None
        assert verify(token, PermissionStore()).valid is False

    def test_token_near_end_of_window_still_valid(self) -> None:
        token = issue_token(now=datetime.now(timezone.utc) - timedelta(days=29))
        assert verify(token, PermissionStore()).valid is True

    def test_different_secret_rejected(self) -> None:
        claims = jwt.get_unverified_claims(issue_token())
        forged = jwt.encode(claims, "another-secret-0123456789abcdef-0123456789", algorithm="HS256")
        assert decode_token(forged) is None

    def test_different_secret_rejected_even_with_far_expiry(self) -> None:
        claims = jwt.get_unverified_claims(issue_token())
        claims["exp"] = claims["exp"] + 100 * 365 * 24 * 3600
        forged = jwt.encode(claims, "another-secret-0123456789abcdef-0123456789", algorithm="HS256")
        assert verify(forged, PermissionStore()).valid is False

    def test_tampered_payload_rejected(self) -> None:
        header, payload, signature = issue_token().split(".")
        claims = jwt.get_unverified_claims(f"{header}.{payload}.{signature}")
        claims["id"] = "mallory"
        tampered = f"{header}.{_b64(claims)}.{signature}"
        assert decode_token(tampered) is None

    def test_unsigned_token_rejected(self) -> None:
        claims = jwt.get_unverified_claims(issue_token())
        unsigned = f"{_b64({'alg': 'none', 'typ': 'JWT'})}.{_b64(claims)}."
        assert decode_token(unsigned) is None

    def test_token_without_exp_rejected(self) -> None:
        """A correctly signed token with no expiry must not be valid forever."""
        token = jwt.encode({"id": "inacio", "role": "owner", "iat": 1}, get_settings().jwt_secret, algorithm="HS256")
        assert decode_token(token) is None
        assert verify(token, PermissionStore()).valid is False

    def test_token_without_identity_claims_rejected(self) -> None:
        exp = int(datetime.now(timezone.utc).timestamp()) + 3600
        token = jwt.encode({"name": "Inacio", "exp": exp}, get_settings().jwt_secret, algorithm="HS256")
        assert decode_token(token) is None

    def test_claims_returned_verbatim(self) -> None:
        token = issue_token()
        result = verify(token, PermissionStore())
        assert result.claims == jwt.get_unverified_claims(token)
