"""Unit tests for auth/security.py: token issuance, verification, passwords."""

import uuid
from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from app.auth.security import (
    decode_token,
    hash_password,
    issue_token,
    verify_password,
    verify_token,
)
from app.config import get_settings
from tests.helpers.token_factory import encode_claims, make_claims


class TestIssueToken:
    def test_contains_expected_claims(self):
        token = issue_token("user-456", "admin", email="a@kitapandu.com")
        settings = get_settings()
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])

        assert payload["sub"] == "user-456"
        assert payload["role"] == "admin"
        assert payload["email"] == "a@kitapandu.com"
        uuid.UUID(payload["jti"])
        assert payload["exp"] > payload["iat"]

    def test_every_token_gets_a_fresh_jti(self):
        first = verify_token(issue_token("user-1", "operator"))
        second = verify_token(issue_token("user-1", "operator"))
        assert first is not None and second is not None
        assert first.jti != second.jti

    def test_expiry_follows_configured_lifetime(self):
        settings = get_settings()
        before = datetime.now(UTC).replace(microsecond=0)
        claims = verify_token(issue_token("user-789", "operator"))

        assert claims is not None
        # Allow 2s tolerance for test execution time
        assert before + settings.jwt_expires_in <= claims.expires_at
        assert claims.expires_at <= before + settings.jwt_expires_in + timedelta(seconds=2)

    def test_expires_in_override(self):
        claims = verify_token(issue_token("user-1", "operator", expires_in=timedelta(minutes=5)))
        assert claims is not None
        assert 300 <= claims.exp - claims.iat < 301

    def test_unknown_role_rejected(self):
        with pytest.raises(ValueError):
            issue_token("user-1", "viewer")


class TestVerifyToken:
    def test_round_trip(self):
        claims = verify_token(issue_token("user-1", "operator"))
        assert claims is not None
        assert claims.sub == "user-1"
        assert claims.role == "operator"

    def test_expired_token_is_invalid(self):
        token = issue_token("user-1", "operator", expires_in=timedelta(seconds=-30))
        assert verify_token(token) is None

    def test_wrong_secret_is_invalid(self):
        token = encode_claims(make_claims(), secret="some-other-secret")
        assert verify_token(token) is None

    def test_tampered_payload_is_invalid(self):
        header, _, signature = issue_token("user-1", "operator").split(".")
        forged = encode_claims(make_claims(role="admin")).split(".")[1]
        assert verify_token(f"{header}.{forged}.{signature}") is None

    def test_garbage_is_invalid(self):
        assert verify_token("not-a-jwt") is None
        assert verify_token("") is None

    @pytest.mark.parametrize("missing", ["sub", "role", "jti", "iat", "exp"])
    def test_missing_claim_is_invalid(self, missing):
        token = encode_claims(make_claims(**{missing: None}))
        assert verify_token(token) is None

    def test_unknown_role_claim_is_invalid(self):
        assert verify_token(encode_claims(make_claims(role="superuser"))) is None

    def test_decode_token_raises_on_bad_signature(self):
        from jose import JWTError

        with pytest.raises(JWTError):
            decode_token(encode_claims(make_claims(), secret="other"))


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("password123")
        assert hashed != "password123"
        assert verify_password("password123", hashed)
        assert not verify_password("password124", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("password123") != hash_password("password123")
