"""Security and authentication utilities."""
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from rollcall.core import config
from rollcall.core.constants import SESSION_TOKEN_BYTES
from rollcall.core.exceptions import InvalidCredentialError


def generate_session_token() -> str:
    """Generate an unpredictable check-in token (URL-safe base64, no padding)."""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)


def verify_credential(credential: Optional[str]) -> str:
    """Verify a bearer credential with the identity provider and return the principal id.

    The upstream auth service issues HS256 JWTs whose ``sub`` claim is the
    stable user id. Audience is checked only when AUTH_JWT_AUDIENCE is set.

    Raises:
        InvalidCredentialError: If the credential is empty, malformed,
            expired, wrongly signed or carries no subject
    """
    if not credential or not credential.strip():
        raise InvalidCredentialError("Missing or invalid authorization header")

    settings = config.settings
    options = {"require": ["exp", "sub"]}
    if not settings.AUTH_JWT_AUDIENCE:
        options["verify_aud"] = False

    try:
        payload = jwt.decode(
            credential,
            settings.AUTH_JWT_SECRET,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            audience=settings.AUTH_JWT_AUDIENCE,
            options=options,
        )
    except jwt.ExpiredSignatureError:
        raise InvalidCredentialError("Credential expired, please sign in again")
    except jwt.PyJWTError:
        raise InvalidCredentialError("Invalid session, please sign in again")

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise InvalidCredentialError("Invalid session, please sign in again")
    return subject


def create_access_token(
    subject: str,
    expires_delta: Optional[timedelta] = None,
    extra_claims: Optional[dict] = None,
) -> str:
    """Create a bearer credential the way the upstream auth service does.

    Used by the presenter tooling in development and by the test-suite.
    """
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=1))
    to_encode = {"sub": subject, "exp": expire}
    if config.settings.AUTH_JWT_AUDIENCE:
        to_encode["aud"] = config.settings.AUTH_JWT_AUDIENCE
    if extra_claims:
        to_encode.update(extra_claims)
    return jwt.encode(to_encode, config.settings.AUTH_JWT_SECRET, algorithm=config.settings.AUTH_JWT_ALGORITHM)
