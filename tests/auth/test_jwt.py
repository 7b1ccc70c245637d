"""Tests for token issuance and verification."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from calmnest.auth.jwt import TokenClaims, TokenRejection, create_access_token, verify_token
from calmnest.config import get_settings


class TestIssueAndVerify:
    @pytest.mark.parametrize(
        "claims",
        [
            TokenClaims(user_id=1, username="alice", role="user"),
            TokenClaims(user_id=987654321, username="dr.who", role="therapist"),
            TokenClaims(user_id=2, username="root", role="admin"),
        ],
    )
    def test_round_trip_preserves_claims(self, claims):
        assert verify_token(create_access_token(claims)) == claims

    def test_expiry_is_seven_days_after_issuance(self):
        issued = datetime(2026, 1, 1, tzinfo=timezone.utc)
        token = create_access_token(TokenClaims(1, "alice", "user"), issued_at=issued)
        payload = jwt.decode(token, options={"verify_signature": False, "verify_exp": False})
        assert payload["exp"] - payload["iat"] == 7 * 24 * 3600


class TestRejections:
    def test_expired_token(self):
        issued = datetime.now(timezone.utc) - timedelta(days=8)
        token = create_access_token(TokenClaims(1, "alice", "user"), issued_at=issued)
        assert verify_token(token) is TokenRejection.EXPIRED

    def test_just_expired_token_is_expired_not_other(self):
        issued = datetime.now(timezone.utc) - timedelta(days=7, seconds=5)
        token = create_access_token(TokenClaims(1, "alice", "user"), issued_at=issued)
        assert verify_token(token) is TokenRejection.EXPIRED

    def test_still_valid_near_end_of_lifetime(self):
        issued = datetime.now(timezone.utc) - timedelta(days=6, hours=23)
        token = create_access_token(TokenClaims(1, "alice", "user"), issued_at=issued)
        assert verify_token(token) == TokenClaims(1, "alice", "user")

    def test_bad_signature(self):
        now = datetime.now(timezone.utc)
        forged = jwt.encode(
            {"sub": "1", "username": "alice", "role": "admin", "iat": now, "exp": now + timedelta(days=7)},
            "some-other-key-that-is-long-enough-for-hs256",
            algorithm="HS256",
        )
        assert verify_token(forged) is TokenRejection.BAD_SIGNATURE

    def test_tampered_payload(self):
        token = create_access_token(TokenClaims(1, "alice", "user"))
        header, _payload, signature = token.split(".")
        other = create_access_token(TokenClaims(1, "alice", "admin")).split(".")[1]
        assert verify_token(f"{header}.{other}.{signature}") is TokenRejection.BAD_SIGNATURE

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "Bearer abc"])
    def test_malformed(self, token):
        assert verify_token(token) is TokenRejection.MALFORMED

    def test_missing_claims_is_malformed(self):
        settings = get_settings()
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "1", "iat": now, "exp": now + timedelta(days=1)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        assert verify_token(token) is TokenRejection.MALFORMED

    def test_unknown_role_is_malformed(self):
        settings = get_settings()
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "1", "username": "alice", "role": "superuser", "iat": now, "exp": now + timedelta(days=1)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        assert verify_token(token) is TokenRejection.MALFORMED

