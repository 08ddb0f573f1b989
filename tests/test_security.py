"""Tests for password hashing and JWT handling."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from game_reviews.authorization import Role
from game_reviews.config import get_settings
from game_reviews.utils.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    identity_from_token,
    legacy_hash_password,
    verify_password,
)


class TestPasswordHashing:
    """Tests for password digests."""

    def test_legacy_digest_known_value(self) -> None:
        """Test the unsalted SHA-256/base64 digest."""
        assert legacy_hash_password("password") == "XohImNooBHFR0OVvjcYpJ3NgPQ1qq73WKhHvch0VQtg="

    def test_legacy_digest_is_deterministic(self) -> None:
        """Test that the legacy digest does not vary between calls."""
        assert legacy_hash_password("secret") == legacy_hash_password("secret")

    def test_bcrypt_hash_is_salted(self) -> None:
        """Test that bcrypt hashes differ for the same password but both verify."""
        first = hash_password("secret")
        second = hash_password("secret")

        assert first.startswith("$2")
        assert first != second
        assert verify_password("secret", first)
        assert verify_password("secret", second)

    def test_verify_wrong_password(self) -> None:
        """Test that wrong passwords are rejected for both formats."""
        assert not verify_password("wrong", hash_password("secret"))
        assert not verify_password("wrong", legacy_hash_password("secret"))

    def test_verify_legacy_digest(self) -> None:
        """Test that stored legacy digests still verify under the bcrypt scheme."""
        assert verify_password("secret", legacy_hash_password("secret"))

    def test_sha256_scheme(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the sha256 scheme stores the legacy digest."""
        monkeypatch.setattr(get_settings(), "password_scheme", "sha256")

        assert hash_password("secret") == legacy_hash_password("secret")

    def test_verify_empty_hash(self) -> None:
        """Test that an empty stored hash never verifies."""
        assert not verify_password("secret", "")


class TestJWT:
    """Tests for JWT token generation and validation."""

    def test_create_access_token(self) -> None:
        """Test JWT token creation."""
        token = create_access_token(data={"sub": "abc"})

        assert token is not None
        assert isinstance(token, str)
        assert len(token) > 0

    def test_decode_access_token_valid(self) -> None:
        """Test decoding a valid JWT token."""
        settings = get_settings()
        token = create_access_token(data={"sub": "abc", "name": "alice", "role": "User"})
        payload = decode_access_token(token)

        assert payload is not None
        assert payload["sub"] == "abc"
        assert payload["name"] == "alice"
        assert payload["role"] == "User"
        assert payload["iss"] == settings.jwt_issuer
        assert payload["aud"] == settings.jwt_audience
        assert payload["exp"] - payload["iat"] == settings.jwt_expiration_minutes * 60

    def test_decode_access_token_invalid(self) -> None:
        """Test decoding an invalid JWT token."""
        assert decode_access_token("invalid.token.here") is None

    def test_decode_access_token_tampered(self) -> None:
        """Test decoding a tampered JWT token."""
        token = create_access_token(data={"sub": "1"})
        tampered_token = token[:-5] + "xxxxx"

        assert decode_access_token(tampered_token) is None

    def test_decode_access_token_expired(self) -> None:
        """Test that an expired token is rejected without any leeway."""
        token = create_access_token(data={"sub": "abc"}, expires_delta=timedelta(seconds=-1))

        assert decode_access_token(token) is None

    @pytest.mark.parametrize(
        ("claim", "value"),
        [("iss", "SomeoneElse"), ("aud", "OtherClient")],
    )
    def test_decode_rejects_foreign_issuer_or_audience(self, claim: str, value: str) -> None:
        """Test that issuer and audience must match the configuration."""
        settings = get_settings()
        now = datetime.now(UTC)
        claims = {
            "sub": "abc",
            "iss": settings.jwt_issuer,
            "aud": settings.jwt_audience,
            "iat": now,
            "exp": now + timedelta(minutes=5),
        }
        claims[claim] = value
        token = jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)

        assert decode_access_token(token) is None

    def test_decode_rejects_other_secret(self) -> None:
        """Test that tokens signed with another key are rejected."""
        settings = get_settings()
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "sub": "abc",
                "iss": settings.jwt_issuer,
                "aud": settings.jwt_audience,
                "exp": now + timedelta(minutes=5),
            },
            "another-secret-key-that-is-also-long-enough",
            algorithm=settings.jwt_algorithm,
        )

        assert decode_access_token(token) is None


class TestIdentityFromToken:
    """Tests for resolving an Identity from a token."""

    def test_identity_claims(self) -> None:
        """Test that subject, username and role come from the token."""
        token = create_access_token(data={"sub": "guid-1", "name": "root", "role": "Admin"})
        identity = identity_from_token(token)

        assert identity is not None
        assert identity.subject == "guid-1"
        assert identity.username == "root"
        assert identity.role is Role.ADMIN

    @pytest.mark.parametrize("role", [None, "Superuser"])
    def test_unknown_or_missing_role(self, role: str | None) -> None:
        """Test that tokens without a known role are not usable."""
        data = {"sub": "guid-1", "name": "x"}
        if role is not None:
            data["role"] = role
        token = create_access_token(data=data)

        assert identity_from_token(token) is None

    def test_missing_subject(self) -> None:
        """Test that tokens without a subject are not usable."""
        token = create_access_token(data={"name": "x", "role": "User"})

        assert identity_from_token(token) is None
