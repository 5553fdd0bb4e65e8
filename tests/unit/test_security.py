"""Unit tests for security functions."""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from rollcall.core import config
from rollcall.core.exceptions import InvalidCredentialError
from rollcall.core.sanitization import validate_token_format
from rollcall.core.security import (
    create_access_token,
    generate_session_token,
    verify_credential,
)


@pytest.mark.unit
class TestSessionTokenGeneration:
    """Test check-in token generation."""

    def test_generate_session_token_length(self):
        """24 random bytes encode to 32 URL-safe characters."""
        token = generate_session_token()
        assert isinstance(token, str)
        assert len(token) == 32

    def test_generate_session_token_uniqueness(self):
        tokens = [generate_session_token() for _ in range(1000)]
        assert len(set(tokens)) == 1000

    def test_generated_token_passes_format_check(self):
        token = generate_session_token()
        assert validate_token_format(token) == token


@pytest.mark.unit
class TestVerifyCredential:
    """Test bearer credential verification."""

    def test_valid_credential_returns_subject(self):
        token = create_access_token("user-123")
        assert verify_credential(token) == "user-123"

    def test_missing_credential(self):
        with pytest.raises(InvalidCredentialError):
            verify_credential(None)

    def test_blank_credential(self):
        with pytest.raises(InvalidCredentialError):
            verify_credential("   ")

    def test_garbage_credential(self):
        with pytest.raises(InvalidCredentialError):
            verify_credential("not-a-jwt")

    def test_expired_credential(self):
        token = create_access_token("user-123", expires_delta=timedelta(seconds=-10))
        with pytest.raises(InvalidCredentialError, match="expired"):
            verify_credential(token)

    def test_wrong_signature(self):
        token = jwt.encode(
            {"sub": "user-123", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "some-other-secret",
            algorithm="HS256",
        )
        with pytest.raises(InvalidCredentialError):
            verify_credential(token)

    def test_missing_subject(self):
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            config.settings.AUTH_JWT_SECRET,
            algorithm=config.settings.AUTH_JWT_ALGORITHM,
        )
        with pytest.raises(InvalidCredentialError):
            verify_credential(token)

    def test_invalid_credential_is_value_error(self):
        """Callers that only care about bad input can catch ValueError."""
        with pytest.raises(ValueError):
            verify_credential("not-a-jwt")


@pytest.mark.unit
class TestJWT:
    """Test JWT token creation."""

    def test_create_access_token(self):
        token = create_access_token("user-123")

        assert isinstance(token, str)
        # JWT format: header.payload.signature
        assert token.count(".") == 2

    def test_create_access_token_extra_claims(self):
        token = create_access_token("user-123", extra_claims={"email": "a@example.com"})
        payload = jwt.decode(
            token,
            config.settings.AUTH_JWT_SECRET,
            algorithms=[config.settings.AUTH_JWT_ALGORITHM],
            options={"verify_aud": False},
        )
        assert payload["sub"] == "user-123"
        assert payload["email"] == "a@example.com"
